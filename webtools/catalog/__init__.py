"""
Tool catalog: registry of available tools and category metadata.
"""

from .categories import (
    CATEGORIES,
    CategoryInfo,
    ToolCategory,
    get_all_categories,
    get_category_info,
    is_known_category,
)
from .tools import (
    TOOLS,
    Tool,
    get_all_tools,
    get_new_tools,
    get_popular_tools,
    get_tool_by_id,
    get_tools_by_category,
    search_tools,
)

__all__ = [
    "CATEGORIES",
    "CategoryInfo",
    "ToolCategory",
    "get_all_categories",
    "get_category_info",
    "is_known_category",
    "TOOLS",
    "Tool",
    "get_all_tools",
    "get_new_tools",
    "get_popular_tools",
    "get_tool_by_id",
    "get_tools_by_category",
    "search_tools",
]
