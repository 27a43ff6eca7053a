"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

from webtools.catalog import get_all_tools

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status and the number of registered tools
    """
    return jsonify({"status": "ok", "tools": len(get_all_tools())})
