"""Tests for downloadable export files."""

import csv
import io
from datetime import datetime

from webtools.models.debt_payoff import Debt, PayoffStrategyMethod, simulate_payoff
from webtools.models.gradient_generator import GradientConfig
from webtools.models.regex_tester import RegexTestInput, run_regex_test
from webtools.models.utm_builder import UtmParams, save_campaign
from webtools.services.exports import (
    DEBT_SCHEDULE_HEADER,
    debt_schedule_export,
    gradient_css_export,
    html_entity_export,
    regex_report_export,
    utm_campaigns_export,
)


class TestExports:
    """Test cases for each export builder."""

    def test_regex_report(self):
        result = run_regex_test(RegexTestInput(pattern="a", test_string="banana"))
        export = regex_report_export(result, datetime(2024, 5, 6, 7, 8, 9))

        assert export.filename == "regex-test-results.txt"
        assert export.mimetype == "text/plain"
        text = export.content.decode("utf-8")
        assert "Total Matches: 3" in text
        assert text.endswith("Generated at: 2024-05-06 07:08:09")

    def test_gradient_css(self):
        export = gradient_css_export(GradientConfig())
        assert export.filename == "gradient.css"
        assert export.mimetype == "text/css"
        assert export.content.startswith(b".gradient {")

    def test_utm_campaigns(self):
        campaign = save_campaign(
            UtmParams(url="https://example.com", source="a", medium="b", campaign="c")
        )
        export = utm_campaigns_export([campaign])
        assert export.filename == "utm-campaigns.csv"
        assert export.content.count(b"\n") == 2

    def test_html_entity_filenames(self):
        assert html_entity_export("&lt;", "encode").filename == "html-entities-encoded.txt"
        assert html_entity_export("<", "decode").filename == "html-entities-decoded.txt"
        assert html_entity_export("é").content == "é".encode("utf-8")

    def test_debt_schedule(self):
        debts = [
            Debt(name="A", balance=1000, minimum_payment=50, interest_rate=0),
            Debt(name="B", balance=500, minimum_payment=25, interest_rate=0),
        ]
        result = simulate_payoff(debts, 100, PayoffStrategyMethod.SNOWBALL)
        export = debt_schedule_export(result)

        assert export.filename == "debt-payoff-snowball.csv"
        rows = list(csv.reader(io.StringIO(export.content.decode("utf-8"))))
        assert rows[0] == DEBT_SCHEDULE_HEADER
        assert len(rows) == 1 + 2 * result.total_months
        assert rows[1] == ["1", "B", "125.00", "375.00", "no"]
        assert ["4", "B", "125.00", "0.00", "yes"] in rows
