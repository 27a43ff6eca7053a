"""
Dispatch of tool runs and exports by catalog id.

Each tool id maps to a request model and a handler. The request model
validates the JSON body; the handler returns a pydantic result model.
"""

import base64
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, computed_field

from webtools.catalog import get_tool_by_id
from webtools.errors import ToolError, UnknownToolError
from webtools.models.budget_planner import BudgetInput, analyze_budget
from webtools.models.cron_expression import (
    CronFields,
    CronSummary,
    build_expression,
    summarize,
)
from webtools.models.debt_payoff import (
    Debt,
    DebtPayoffCalculator,
    PayoffStrategyMethod,
    StrategyComparison,
    StrategyResult,
    format_months,
)
from webtools.models.emergency_fund import EmergencyFundInput, calculate_emergency_fund
from webtools.models.gradient_generator import GradientConfig, render
from webtools.models.html_entity import EntityOptions, EntityResult, process
from webtools.models.options_profit import (
    MarketParameters,
    OptionLeg,
    StrategyAnalysis,
    analyze_strategy,
    load_strategy,
)
from webtools.models.password_generator import GeneratedPassword, PasswordOptions, generate
from webtools.models.regex_tester import RegexTestInput, run_regex_test
from webtools.models.salary_negotiation import SalaryNegotiationInput, analyze_salary
from webtools.models.stock_valuation import StockData, value_stock
from webtools.models.unit_converter import ConversionRequest, convert_all, run_conversion
from webtools.models.utm_builder import (
    BulkResult,
    SavedCampaign,
    UtmParams,
    build_bulk,
    build_utm_url,
)
from webtools.services import exports
from webtools.services.breach_check import BreachCheckResult, check_password
from webtools.services.exports import ExportFile
from webtools.services.pdf_compressor import PdfCompressionRequest, compress_pdf
from webtools.services.terms_analyzer import TermsRequest, analyze_terms
from webtools.services.vocabulary_builder import WordRequest, generate_word

logger = logging.getLogger(__name__)


class DebtPayoffRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    debts: List[Debt] = Field(default_factory=list)
    extra_payment: float = Field(default=0, ge=0)
    method: Optional[PayoffStrategyMethod] = Field(
        default=None, description="Simulate one strategy; both when omitted"
    )


class DebtPayoffResponse(BaseModel):
    comparison: Optional[StrategyComparison] = None
    result: Optional[StrategyResult] = None

    @computed_field(
        description="Duration of the simulated strategy; avalanche when comparing both"
    )
    @property
    def payoff_time(self) -> str:
        if self.result is not None:
            return format_months(self.result.total_months)
        if self.comparison is not None:
            return format_months(self.comparison.avalanche.total_months)
        return format_months(0)

    @computed_field
    @property
    def snowball_payoff_time(self) -> Optional[str]:
        if self.comparison is None:
            return None
        return format_months(self.comparison.snowball.total_months)

    @computed_field
    @property
    def avalanche_payoff_time(self) -> Optional[str]:
        if self.comparison is None:
            return None
        return format_months(self.comparison.avalanche.total_months)


class PasswordRequest(BaseModel):
    options: PasswordOptions = Field(default_factory=PasswordOptions)
    check_password: Optional[str] = Field(
        default=None, description="Password to look up in breach data instead of generating"
    )


class PasswordResponse(BaseModel):
    generated: Optional[GeneratedPassword] = None
    breach: Optional[BreachCheckResult] = None


class ConversionResponse(BaseModel):
    result: float
    to_unit: str
    all_units: Dict[str, float]


class HtmlEntityRequest(EntityOptions):
    text: str = ""


class CronRequest(BaseModel):
    expression: Optional[str] = None
    cron_fields: CronFields = Field(default_factory=CronFields)
    selected_days: List[int] = Field(default_factory=list)
    selected_months: List[int] = Field(default_factory=list)
    start: Optional[datetime] = None
    count: int = Field(default=5, ge=1, le=50)


class UtmRequest(UtmParams):
    bulk_urls: Optional[str] = None


class UtmResponse(BaseModel):
    url: str
    bulk: List[BulkResult] = Field(default_factory=list)


class OptionsRequest(BaseModel):
    market: MarketParameters
    legs: List[OptionLeg] = Field(default_factory=list)
    preset: Optional[str] = None
    days_to_expiration: int = Field(default=30, ge=0)


class PdfRequest(BaseModel):
    filename: str = "document.pdf"
    content_base64: str = Field(..., min_length=1)


class PdfResponse(BaseModel):
    filename: str
    original_size: int
    compressed_size: int
    reduction_percent: float
    saved_mb: float
    content_base64: str


class UtmExportRequest(BaseModel):
    campaigns: List[SavedCampaign] = Field(default_factory=list)


class ToolHandler(NamedTuple):
    request_model: Type[BaseModel]
    run: Callable[[Any], BaseModel]


def _run_debt_payoff(request: DebtPayoffRequest) -> DebtPayoffResponse:
    if request.method is None:
        return DebtPayoffResponse(
            comparison=DebtPayoffCalculator.compare_strategies(
                request.debts, request.extra_payment
            )
        )
    return DebtPayoffResponse(
        result=DebtPayoffCalculator.simulate(
            request.debts, request.extra_payment, request.method
        )
    )


def _run_password(request: PasswordRequest) -> PasswordResponse:
    if request.check_password is not None:
        return PasswordResponse(breach=check_password(request.check_password))
    return PasswordResponse(generated=generate(request.options))


def _run_conversion(request: ConversionRequest) -> ConversionResponse:
    result = run_conversion(request)
    return ConversionResponse(
        result=result.result,
        to_unit=result.to_unit,
        all_units=convert_all(request.value, request.category, request.from_unit),
    )


def _run_html_entity(request: HtmlEntityRequest) -> EntityResult:
    return process(request.text, request)


def _cron_expression(request: CronRequest) -> str:
    if request.expression is not None:
        return request.expression
    return build_expression(request.cron_fields, request.selected_days, request.selected_months)


def _run_cron(request: CronRequest) -> CronSummary:
    return summarize(_cron_expression(request), request.start, request.count)


def _run_utm(request: UtmRequest) -> UtmResponse:
    bulk = build_bulk(request.bulk_urls, request) if request.bulk_urls else []
    return UtmResponse(url=build_utm_url(request), bulk=bulk)


def _run_options(request: OptionsRequest) -> StrategyAnalysis:
    legs = request.legs
    if request.preset:
        try:
            legs = load_strategy(request.preset, request.days_to_expiration)
        except KeyError as e:
            raise ToolError(str(e.args[0])) from e
    return analyze_strategy(legs, request.market)


def _run_pdf(request: PdfRequest) -> PdfResponse:
    result = compress_pdf(
        PdfCompressionRequest.from_base64(request.content_base64, request.filename)
    )
    return PdfResponse(
        filename=result.filename,
        original_size=result.original_size,
        compressed_size=result.compressed_size,
        reduction_percent=result.reduction_percent,
        saved_mb=result.saved_mb,
        content_base64=base64.b64encode(result.content).decode("ascii"),
    )


TOOL_HANDLERS: Dict[str, ToolHandler] = {
    "password-generator": ToolHandler(PasswordRequest, _run_password),
    "unit-converter": ToolHandler(ConversionRequest, _run_conversion),
    "html-entity": ToolHandler(HtmlEntityRequest, _run_html_entity),
    "regex-tester": ToolHandler(RegexTestInput, run_regex_test),
    "gradient-generator": ToolHandler(GradientConfig, render),
    "cron-generator": ToolHandler(CronRequest, _run_cron),
    "utm-builder": ToolHandler(UtmRequest, _run_utm),
    "terms-analyzer": ToolHandler(TermsRequest, analyze_terms),
    "debt-payoff-calculator": ToolHandler(DebtPayoffRequest, _run_debt_payoff),
    "budget-planner": ToolHandler(BudgetInput, analyze_budget),
    "emergency-fund-calculator": ToolHandler(EmergencyFundInput, calculate_emergency_fund),
    "salary-negotiation-calculator": ToolHandler(SalaryNegotiationInput, analyze_salary),
    "options-profit-calculator": ToolHandler(OptionsRequest, _run_options),
    "stock-analysis-calculator": ToolHandler(StockData, value_stock),
    "vocabulary-builder": ToolHandler(WordRequest, generate_word),
    "pdf-compressor": ToolHandler(PdfRequest, _run_pdf),
}


def _export_regex(request: RegexTestInput) -> ExportFile:
    return exports.regex_report_export(run_regex_test(request))


def _export_html_entity(request: HtmlEntityRequest) -> ExportFile:
    return exports.html_entity_export(process(request.text, request).output, request.mode)


def _export_debt_payoff(request: DebtPayoffRequest) -> ExportFile:
    method = request.method or PayoffStrategyMethod.AVALANCHE
    return exports.debt_schedule_export(
        DebtPayoffCalculator.simulate(request.debts, request.extra_payment, method)
    )


def _export_utm(request: UtmExportRequest) -> ExportFile:
    return exports.utm_campaigns_export(request.campaigns)


EXPORT_HANDLERS: Dict[str, ToolHandler] = {
    "regex-tester": ToolHandler(RegexTestInput, _export_regex),
    "gradient-generator": ToolHandler(GradientConfig, exports.gradient_css_export),
    "utm-builder": ToolHandler(UtmExportRequest, _export_utm),
    "html-entity": ToolHandler(HtmlEntityRequest, _export_html_entity),
    "debt-payoff-calculator": ToolHandler(DebtPayoffRequest, _export_debt_payoff),
}


def _lookup(tool_id: str, handlers: Dict[str, ToolHandler]) -> ToolHandler:
    if get_tool_by_id(tool_id) is None or tool_id not in TOOL_HANDLERS:
        raise UnknownToolError(f"Tool '{tool_id}' not found")
    if tool_id not in handlers:
        raise ToolError(f"Tool '{tool_id}' does not offer exports")
    return handlers[tool_id]


def run_tool(tool_id: str, payload: Optional[Dict[str, Any]]) -> BaseModel:
    """
    Validate ``payload`` for ``tool_id`` and run the tool.

    Raises:
        UnknownToolError: If the id is not registered
        pydantic.ValidationError: If the payload is invalid
        ToolError: For tool-specific failures
    """
    handler = _lookup(tool_id, TOOL_HANDLERS)
    request = handler.request_model.model_validate(payload or {})
    logger.debug(f"Running tool {tool_id}")
    return handler.run(request)


def export_tool(tool_id: str, payload: Optional[Dict[str, Any]]) -> ExportFile:
    """Validate ``payload`` and build the tool's downloadable file."""
    handler = _lookup(tool_id, EXPORT_HANDLERS)
    request = handler.request_model.model_validate(payload or {})
    logger.debug(f"Exporting tool {tool_id}")
    return handler.run(request)
