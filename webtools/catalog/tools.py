"""
Static registry of the tools available in the catalog.

Only tools that have a calculator implementation in this package are
registered; the registry drives listing, lookup and search.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .categories import ToolCategory


class Tool(BaseModel):
    """Catalog entry describing a single tool."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$", description="Tool slug")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(..., description="One-line description")
    category: ToolCategory = Field(..., description="Category the tool belongs to")
    path: str = Field(default="", description="Tool page path")
    is_popular: bool = Field(default=False, description="Featured as popular")
    is_new: bool = Field(default=False, description="Featured as new")
    tags: List[str] = Field(default_factory=list, description="Search tags")

    @model_validator(mode="before")
    @classmethod
    def default_path(cls, data):
        if isinstance(data, dict) and not data.get("path") and data.get("id"):
            data = {**data, "path": f"/tool/{data['id']}"}
        return data


TOOLS: List[Tool] = [
    Tool(
        id="password-generator",
        name="Password Generator",
        description="Generate secure, random passwords based on your requirements",
        category="utility",
        is_popular=True,
        tags=["password", "security", "generator"],
    ),
    Tool(
        id="unit-converter",
        name="Unit Converter",
        description="Convert between different units of measurement",
        category="utility",
        is_new=True,
        tags=["converter", "units", "measurement"],
    ),
    Tool(
        id="html-entity",
        name="HTML Entity Encoder/Decoder",
        description="Convert characters to HTML entities and vice versa",
        category="development",
        tags=["html", "entity", "encoder", "decoder"],
    ),
    Tool(
        id="regex-tester",
        name="Regex Tester",
        description="Test and debug regular expressions with live matching",
        category="development",
        is_popular=True,
        tags=["regex", "regexp", "pattern", "testing"],
    ),
    Tool(
        id="gradient-generator",
        name="CSS Gradient Generator",
        description="Create CSS gradients with live preview and export options",
        category="design",
        is_new=True,
        tags=["gradient", "css", "design", "colors", "web"],
    ),
    Tool(
        id="cron-generator",
        name="Cron Expression Generator",
        description="Generate and validate cron expressions with human-readable descriptions",
        category="development",
        is_new=True,
        tags=["cron", "scheduler", "expression", "generator", "automation"],
    ),
    Tool(
        id="utm-builder",
        name="UTM Campaign Builder",
        description="Build UTM parameters for precise campaign attribution",
        category="marketing",
        is_new=True,
        is_popular=True,
        tags=["utm", "campaign tracking", "analytics", "attribution"],
    ),
    Tool(
        id="terms-analyzer",
        name="Terms Analyzer",
        description="Summarize legal documents and flag risky clauses",
        category="utility",
        is_new=True,
        is_popular=True,
        tags=["terms of service", "privacy policy", "legal", "ai analysis"],
    ),
    Tool(
        id="debt-payoff-calculator",
        name="Debt Payoff Calculator",
        description="Compare snowball and avalanche debt payoff strategies month by month",
        category="finance",
        is_new=True,
        is_popular=True,
        tags=["debt payoff", "snowball method", "avalanche method", "debt management"],
    ),
    Tool(
        id="budget-planner",
        name="Budget Planner",
        description="Plan a monthly budget against the 50/30/20 rule",
        category="finance",
        is_new=True,
        is_popular=True,
        tags=["budgeting", "50/30/20 rule", "expense tracking", "money management"],
    ),
    Tool(
        id="emergency-fund-calculator",
        name="Emergency Fund Calculator",
        description="Calculate your ideal emergency fund size and a savings plan to reach it",
        category="finance",
        is_new=True,
        tags=["emergency fund", "savings calculator", "financial security"],
    ),
    Tool(
        id="salary-negotiation-calculator",
        name="Salary Negotiation Calculator",
        description="Calculate salary increases, benefits value, and total compensation",
        category="finance",
        is_new=True,
        tags=["salary negotiation", "compensation", "benefits calculator", "career"],
    ),
    Tool(
        id="options-profit-calculator",
        name="Options Profit & Risk Calculator",
        description="Calculate option strategy profit, loss, breakevens and Greeks",
        category="finance",
        is_new=True,
        is_popular=True,
        tags=["options trading", "profit calculator", "greeks", "risk analysis"],
    ),
    Tool(
        id="stock-analysis-calculator",
        name="Stock Analysis Calculator",
        description="Value a stock with DCF, P/E, P/B and dividend discount models",
        category="finance",
        is_new=True,
        tags=["stock valuation", "dcf", "pe ratio", "dividend discount"],
    ),
    Tool(
        id="vocabulary-builder",
        name="Vocabulary Builder",
        description="Build vocabulary with generated words, definitions and examples",
        category="education",
        is_new=True,
        tags=["vocabulary", "etymology", "pronunciation", "language learning"],
    ),
    Tool(
        id="pdf-compressor",
        name="PDF Compressor",
        description="Compress PDF files to reduce size for web upload and email sharing",
        category="productivity",
        is_new=True,
        is_popular=True,
        tags=["pdf compression", "file size reduction", "document optimization"],
    ),
]


def get_all_tools() -> List[Tool]:
    """Return every registered tool in registry order."""
    return list(TOOLS)


def get_tools_by_category(category: str) -> List[Tool]:
    """Return the tools registered under a category."""
    return [tool for tool in TOOLS if tool.category == category]


def get_tool_by_id(tool_id: str) -> Optional[Tool]:
    """Look up a tool by its slug; returns None when it is not registered."""
    for tool in TOOLS:
        if tool.id == tool_id:
            return tool
    return None


def get_popular_tools(limit: int = 8) -> List[Tool]:
    """Return up to ``limit`` tools flagged as popular."""
    return [tool for tool in TOOLS if tool.is_popular][:limit]


def get_new_tools(limit: int = 8) -> List[Tool]:
    """Return up to ``limit`` tools flagged as new."""
    return [tool for tool in TOOLS if tool.is_new][:limit]


def search_tools(query: str) -> List[Tool]:
    """
    Case-insensitive substring search over name, description and tags.

    Args:
        query: Search text; surrounding whitespace is ignored

    Returns:
        Matching tools in registry order (all tools for a blank query)
    """
    term = query.strip().lower()
    if not term:
        return get_all_tools()

    return [
        tool
        for tool in TOOLS
        if term in tool.name.lower()
        or term in tool.description.lower()
        or any(term in tag.lower() for tag in tool.tags)
    ]
