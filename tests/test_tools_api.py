"""
Tests for the tools blueprint: catalog browsing, tool runs and exports.
"""

import base64
import json
from unittest.mock import Mock, patch

import pytest
import requests

from webtools.catalog import TOOLS, get_popular_tools
from webtools.models.debt_payoff import format_months
from webtools.services.tool_runner import TOOL_HANDLERS


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def mock_response(text="", json_data=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    response.raise_for_status.return_value = None
    return response


class TestCatalogEndpoints:
    """Test cases for catalog browsing."""

    def test_list_all_tools(self, client):
        response = client.get("/api/tools")
        data = json.loads(response.data)

        assert response.status_code == 200
        assert data["count"] == len(TOOLS)
        assert data["tools"][0]["id"] == TOOLS[0].id

    def test_filter_by_category(self, client):
        data = json.loads(client.get("/api/tools?category=finance").data)
        assert data["count"] > 0
        assert all(tool["category"] == "finance" for tool in data["tools"])

    def test_unknown_category(self, client):
        assert client.get("/api/tools?category=gardening").status_code == 404

    def test_search(self, client):
        data = json.loads(client.get("/api/tools?q=cron").data)
        assert [tool["id"] for tool in data["tools"]] == ["cron-generator"]

    def test_popular_with_limit(self, client):
        data = json.loads(client.get("/api/tools?popular=true&limit=3").data)
        assert [tool["id"] for tool in data["tools"]] == [t.id for t in get_popular_tools(3)]

    def test_invalid_limit(self, client):
        assert client.get("/api/tools?limit=abc").status_code == 400
        assert client.get("/api/tools?limit=0").status_code == 400

    def test_get_tool(self, client):
        data = json.loads(client.get("/api/tools/budget-planner").data)
        assert data["tool"]["name"] == "Budget Planner"
        assert data["category"]["id"] == "finance"

    def test_get_missing_tool(self, client):
        response = client.get("/api/tools/nope")
        assert response.status_code == 404
        assert json.loads(response.data) == {"error": "Tool not found"}

    def test_list_categories_with_counts(self, client):
        data = json.loads(client.get("/api/categories").data)
        counts = {c["id"]: c["tool_count"] for c in data["categories"]}
        assert counts["health"] == 0
        assert sum(counts.values()) == len(TOOLS)

    def test_get_category(self, client):
        data = json.loads(client.get("/api/categories/design").data)
        assert [tool["id"] for tool in data["tools"]] == ["gradient-generator"]
        assert client.get("/api/categories/gardening").status_code == 404


class TestRunEndpoint:
    """Test cases for running tools."""

    def test_every_tool_has_a_handler(self):
        assert set(TOOL_HANDLERS) == {tool.id for tool in TOOLS}

    def test_run_unit_converter(self, client):
        response = post_json(
            client,
            "/api/tools/unit-converter/run",
            {"value": 1, "category": "length", "from_unit": "km", "to_unit": "m"},
        )
        data = json.loads(response.data)

        assert response.status_code == 200
        assert data["tool_id"] == "unit-converter"
        assert data["result"]["result"] == 1000
        assert data["result"]["all_units"]["cm"] == pytest.approx(100000)

    def test_run_debt_payoff_comparison(self, client):
        payload = {
            "debts": [
                {"name": "A", "balance": 1000, "minimum_payment": 50, "interest_rate": 0},
                {"name": "B", "balance": 500, "minimum_payment": 25, "interest_rate": 0},
            ],
            "extra_payment": 100,
        }
        data = json.loads(post_json(client, "/api/tools/debt-payoff-calculator/run", payload).data)

        comparison = data["result"]["comparison"]
        assert comparison["snowball"]["total_months"] == 10
        assert comparison["snowball"]["status"] == "paid_off"
        assert data["result"]["payoff_time"] == format_months(comparison["avalanche"]["total_months"])
        assert data["result"]["snowball_payoff_time"] == format_months(
            comparison["snowball"]["total_months"]
        )
        assert data["result"]["avalanche_payoff_time"] == format_months(
            comparison["avalanche"]["total_months"]
        )

    def test_run_debt_payoff_single_strategy(self, client):
        payload = {
            "debts": [{"name": "A", "balance": 300, "minimum_payment": 100, "interest_rate": 0}],
            "method": "snowball",
        }
        data = json.loads(post_json(client, "/api/tools/debt-payoff-calculator/run", payload).data)

        assert data["result"]["payoff_time"] == "3 months"
        assert data["result"]["snowball_payoff_time"] is None
        assert data["result"]["avalanche_payoff_time"] is None

    def test_run_cron_from_fields(self, client):
        payload = {
            "cron_fields": {"minute": "30", "hour": "9"},
            "selected_days": [1, 2, 3, 4, 5],
            "start": "2024-01-05T10:00:00",
            "count": 1,
        }
        data = json.loads(post_json(client, "/api/tools/cron-generator/run", payload).data)
        assert data["result"]["expression"] == "30 9 * * 1,2,3,4,5"
        assert data["result"]["next_runs"] == ["2024-01-08T09:30:00"]

    def test_run_regex_with_global_alias(self, client):
        payload = {"pattern": "o", "test_string": "foo", "flags": {"global": False}}
        data = json.loads(post_json(client, "/api/tools/regex-tester/run", payload).data)
        assert len(data["result"]["matches"]) == 1

    def test_validation_error(self, client):
        response = post_json(client, "/api/tools/budget-planner/run", {"categories": []})
        data = json.loads(response.data)

        assert response.status_code == 400
        assert data["error"] == "Invalid input"
        assert data["details"][0]["loc"] == ["monthly_income"]

    def test_missing_body_uses_defaults(self, client):
        response = client.post("/api/tools/gradient-generator/run")
        data = json.loads(response.data)
        assert response.status_code == 200
        assert data["result"]["value"].startswith("linear-gradient(45deg")

    def test_unknown_tool(self, client):
        response = post_json(client, "/api/tools/time-machine/run", {})
        assert response.status_code == 404

    def test_tool_error_is_bad_request(self, client):
        payload = {"market": {"underlying_price": 100}, "preset": "butterfly"}
        response = post_json(client, "/api/tools/options-profit-calculator/run", payload)
        assert response.status_code == 400

    def test_value_error_is_bad_request(self, client):
        payload = {"url": "https://a.example", "bulk_urls": "https://b.example"}
        response = post_json(client, "/api/tools/utm-builder/run", payload)
        assert response.status_code == 400

    @patch.object(requests.Session, "post")
    def test_external_failure_is_bad_gateway(self, mock_post, client):
        mock_post.side_effect = requests.ConnectionError("unreachable")
        response = post_json(client, "/api/tools/terms-analyzer/run", {"text": "Terms"})
        assert response.status_code == 502
        assert json.loads(response.data)["error"] == "External service unavailable"

    @patch.object(requests.Session, "post")
    @patch.object(requests.Session, "get")
    def test_password_breach_check(self, mock_get, mock_post, client):
        mock_get.return_value = mock_response("0000:1")
        mock_post.return_value = mock_response(json_data={"success": True, "found": False})

        payload = {"check_password": "an uncommon passphrase 42"}
        data = json.loads(post_json(client, "/api/tools/password-generator/run", payload).data)

        assert data["result"]["breach"]["compromised"] is False
        assert data["result"]["generated"] is None
        assert mock_get.call_args[0][0].startswith("https://api.pwnedpasswords.com/range/")

    @patch.object(requests.Session, "post")
    def test_pdf_round_trip(self, mock_post, client):
        compressed = b"%PDF-1.4 tiny"
        mock_post.return_value = mock_response(
            json_data={"compressedFile": base64.b64encode(compressed).decode("ascii")}
        )
        payload = {
            "filename": "big.pdf",
            "content_base64": base64.b64encode(b"%PDF-1.4 " + b"x" * 1000).decode("ascii"),
        }
        data = json.loads(post_json(client, "/api/tools/pdf-compressor/run", payload).data)

        assert data["result"]["filename"] == "big-compressed.pdf"
        assert base64.b64decode(data["result"]["content_base64"]) == compressed

    @patch("webtools.blueprints.tools.run_tool")
    def test_unexpected_error_is_server_error(self, mock_run, client):
        mock_run.side_effect = RuntimeError("boom")
        response = post_json(client, "/api/tools/budget-planner/run", {})
        assert response.status_code == 500
        assert json.loads(response.data) == {"error": "Internal server error"}


class TestExportEndpoint:
    """Test cases for downloading exports."""

    def test_gradient_export(self, client):
        response = post_json(client, "/api/tools/gradient-generator/export", {})

        assert response.status_code == 200
        assert response.mimetype == "text/css"
        assert response.headers["Content-Disposition"] == 'attachment; filename="gradient.css"'
        assert response.data.startswith(b".gradient {")

    def test_html_entity_export(self, client):
        payload = {"text": "<p>", "mode": "encode"}
        response = post_json(client, "/api/tools/html-entity/export", payload)
        assert response.data == b"&lt;p&gt;"
        assert "html-entities-encoded.txt" in response.headers["Content-Disposition"]

    def test_decoded_surrogate_reference_exports(self, client):
        payload = {"text": "x &#xD800; &lt;", "mode": "decode"}
        response = post_json(client, "/api/tools/html-entity/export", payload)

        assert response.status_code == 200
        assert response.data == b"x &#xD800; <"

    def test_tool_without_export(self, client):
        response = post_json(client, "/api/tools/budget-planner/export", {})
        assert response.status_code == 400
        assert "does not offer exports" in json.loads(response.data)["error"]

    def test_unknown_tool_export(self, client):
        assert post_json(client, "/api/tools/nope/export", {}).status_code == 404
