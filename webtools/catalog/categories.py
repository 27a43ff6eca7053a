"""
Tool category metadata used for grouping and theming.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ToolCategory = Literal[
    "development",
    "design",
    "productivity",
    "marketing",
    "finance",
    "chatbots",
    "utility",
    "health",
    "education",
]


class CategoryInfo(BaseModel):
    """Display metadata for a tool category."""

    model_config = ConfigDict(frozen=True)

    id: ToolCategory = Field(..., description="Category identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = Field(..., description="Short description of the category")
    color: str = Field(
        ..., pattern=r"^#[0-9a-fA-F]{6}$", description="Theme color (hex)"
    )


CATEGORIES: List[CategoryInfo] = [
    CategoryInfo(
        id="development",
        name="Development",
        description="Tools for developers, programmers, and coders",
        color="#3b82f6",
    ),
    CategoryInfo(
        id="design",
        name="Design",
        description="Tools for designers, artists, and creatives",
        color="#ec4899",
    ),
    CategoryInfo(
        id="productivity",
        name="Productivity",
        description="Tools to help you get more done",
        color="#10b981",
    ),
    CategoryInfo(
        id="marketing",
        name="Marketing",
        description="Tools for digital marketers and SEO professionals",
        color="#f59e0b",
    ),
    CategoryInfo(
        id="finance",
        name="Finance",
        description="Financial calculators and tools",
        color="#6366f1",
    ),
    CategoryInfo(
        id="chatbots",
        name="Chatbots",
        description="AI-powered chatbots and conversation tools",
        color="#8b5cf6",
    ),
    CategoryInfo(
        id="utility",
        name="Utility",
        description="General utility tools for everyday use",
        color="#64748b",
    ),
    CategoryInfo(
        id="health",
        name="Health",
        description="Health and wellness calculators and tools",
        color="#ef4444",
    ),
    CategoryInfo(
        id="education",
        name="Education",
        description="Educational tools and learning resources",
        color="#8b5cf6",
    ),
]

DEFAULT_CATEGORY_ID = "utility"


def get_all_categories() -> List[CategoryInfo]:
    """Return every category in display order."""
    return list(CATEGORIES)


def get_category_info(category_id: str) -> CategoryInfo:
    """
    Look up a category by id.

    Unknown ids fall back to the utility category so callers always get
    something renderable.
    """
    for category in CATEGORIES:
        if category.id == category_id:
            return category
    return next(c for c in CATEGORIES if c.id == DEFAULT_CATEGORY_ID)


def is_known_category(category_id: str) -> bool:
    """Return True if the id names a registered category."""
    return any(category.id == category_id for category in CATEGORIES)
