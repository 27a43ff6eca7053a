"""
Tools blueprint.

This module provides API endpoints for browsing the tool catalog and for
running tools and downloading their exports.
"""

import json
from typing import Any, Optional

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from webtools.catalog import (
    get_all_categories,
    get_all_tools,
    get_category_info,
    get_new_tools,
    get_popular_tools,
    get_tool_by_id,
    get_tools_by_category,
    is_known_category,
    search_tools,
)
from webtools.errors import ExternalServiceError, ToolError, UnknownToolError
from webtools.services.tool_runner import export_tool, run_tool

tools_bp = Blueprint("tools", __name__, url_prefix="/api")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _flag(name: str) -> bool:
    return request.args.get(name, "").lower() in _TRUE_VALUES


def _limit() -> Optional[int]:
    value = request.args.get("limit")
    if value is None:
        return None
    limit = int(value)
    if limit < 1:
        raise ValueError("limit must be a positive integer")
    return limit


def _tool_error_response(e: Exception) -> Any:
    """Map a tool failure onto a JSON error response."""
    if isinstance(e, ValidationError):
        return (
            jsonify({"error": "Invalid input", "details": json.loads(e.json(include_url=False))}),
            400,
        )
    if isinstance(e, UnknownToolError):
        return jsonify({"error": str(e)}), 404
    if isinstance(e, ExternalServiceError):
        current_app.logger.error(f"External service failure: {e}")
        return jsonify({"error": "External service unavailable", "message": str(e)}), 502
    if isinstance(e, (ToolError, ValueError)):
        return jsonify({"error": str(e)}), 400
    current_app.logger.exception(f"Unexpected error running tool: {e}")
    return jsonify({"error": "Internal server error"}), 500


@tools_bp.route("/tools", methods=["GET"])
def list_tools() -> Any:
    """List catalog tools.

    Query parameters: ``category``, ``q`` (search), ``popular``, ``new`` and
    ``limit``. Filters combine.

    Returns:
        JSON response with the matching tools
    """
    try:
        limit = _limit()
    except ValueError:
        return jsonify({"error": "limit must be a positive integer"}), 400

    category = request.args.get("category")
    query = request.args.get("q")

    if category is not None and not is_known_category(category):
        return jsonify({"error": f"Unknown category: {category}"}), 404

    if _flag("popular"):
        tools = get_popular_tools(limit or 8)
    elif _flag("new"):
        tools = get_new_tools(limit or 8)
    elif query is not None:
        tools = search_tools(query)
    else:
        tools = get_all_tools()

    if category is not None:
        tools = [tool for tool in tools if tool.category == category]
    if query is not None and (_flag("popular") or _flag("new")):
        matching = {tool.id for tool in search_tools(query)}
        tools = [tool for tool in tools if tool.id in matching]
    if limit is not None:
        tools = tools[:limit]

    return jsonify({"tools": [tool.model_dump() for tool in tools], "count": len(tools)})


@tools_bp.route("/tools/<tool_id>", methods=["GET"])
def get_tool(tool_id: str) -> Any:
    """Get a single tool with its category metadata."""
    tool = get_tool_by_id(tool_id)
    if tool is None:
        return jsonify({"error": "Tool not found"}), 404
    return jsonify(
        {"tool": tool.model_dump(), "category": get_category_info(tool.category).model_dump()}
    )


@tools_bp.route("/categories", methods=["GET"])
def list_categories() -> Any:
    """List categories with their tool counts."""
    return jsonify(
        {
            "categories": [
                {**info.model_dump(), "tool_count": len(get_tools_by_category(info.id))}
                for info in get_all_categories()
            ]
        }
    )


@tools_bp.route("/categories/<category_id>", methods=["GET"])
def get_category(category_id: str) -> Any:
    """Get a category and the tools in it."""
    if not is_known_category(category_id):
        return jsonify({"error": "Category not found"}), 404
    return jsonify(
        {
            "category": get_category_info(category_id).model_dump(),
            "tools": [tool.model_dump() for tool in get_tools_by_category(category_id)],
        }
    )


@tools_bp.route("/tools/<tool_id>/run", methods=["POST"])
def run(tool_id: str) -> Any:
    """Run a tool on the JSON body.

    Args:
        tool_id: Catalog id of the tool

    Returns:
        JSON response with the tool's result
    """
    try:
        payload = request.get_json(silent=True)
        result = run_tool(tool_id, payload)
        return jsonify({"tool_id": tool_id, "result": result.model_dump(mode="json")})
    except Exception as e:
        return _tool_error_response(e)


@tools_bp.route("/tools/<tool_id>/export", methods=["POST"])
def export(tool_id: str) -> Any:
    """Build a tool's downloadable file from the JSON body."""
    try:
        payload = request.get_json(silent=True)
        export_file = export_tool(tool_id, payload)
    except Exception as e:
        return _tool_error_response(e)

    return Response(
        export_file.content,
        mimetype=export_file.mimetype,
        headers={"Content-Disposition": f'attachment; filename="{export_file.filename}"'},
    )
