"""
Downloadable file payloads for tools that offer an export.
"""

import csv
import io
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from webtools.models.debt_payoff import StrategyResult
from webtools.models.gradient_generator import GradientConfig, gradient_stylesheet
from webtools.models.regex_tester import RegexTestResult, format_report
from webtools.models.utm_builder import SavedCampaign, saved_campaigns_to_csv

logger = logging.getLogger(__name__)

DEBT_SCHEDULE_HEADER = ["Month", "Debt", "Payment", "Remaining Balance", "Paid Off"]


class ExportFile(BaseModel):
    """A file ready to be sent as an attachment."""

    filename: str = Field(..., min_length=1)
    mimetype: str
    content: bytes


def regex_report_export(
    result: RegexTestResult, generated_at: Optional[datetime] = None
) -> ExportFile:
    return ExportFile(
        filename="regex-test-results.txt",
        mimetype="text/plain",
        content=format_report(result, generated_at).encode("utf-8"),
    )


def gradient_css_export(config: GradientConfig) -> ExportFile:
    return ExportFile(
        filename="gradient.css",
        mimetype="text/css",
        content=gradient_stylesheet(config).encode("utf-8"),
    )


def utm_campaigns_export(campaigns: List[SavedCampaign]) -> ExportFile:
    return ExportFile(
        filename="utm-campaigns.csv",
        mimetype="text/csv",
        content=saved_campaigns_to_csv(campaigns).encode("utf-8"),
    )


def html_entity_export(output: str, mode: str = "encode") -> ExportFile:
    return ExportFile(
        filename=f"html-entities-{mode}d.txt",
        mimetype="text/plain",
        content=output.encode("utf-8"),
    )


def debt_schedule_export(result: StrategyResult) -> ExportFile:
    """One CSV row per debt per simulated month in the kept schedule."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(DEBT_SCHEDULE_HEADER)
    for month in result.schedule:
        for entry in month.debts:
            writer.writerow(
                [
                    month.month,
                    entry.name,
                    f"{entry.payment:.2f}",
                    f"{entry.balance:.2f}",
                    "yes" if entry.is_complete else "no",
                ]
            )
    logger.debug(f"Exported {len(result.schedule)} schedule months for {result.method.value}")
    return ExportFile(
        filename=f"debt-payoff-{result.method.value}.csv",
        mimetype="text/csv",
        content=buffer.getvalue().encode("utf-8"),
    )
