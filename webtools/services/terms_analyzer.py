"""
Terms-of-service analysis through the ``analyze-terms`` function.
"""

import logging
import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from webtools.errors import ExternalServiceError
from webtools.services.http import FunctionsClient

logger = logging.getLogger(__name__)

ANALYZE_FUNCTION = "analyze-terms"

RiskLabel = Literal["High Risk", "Medium Risk", "Low Risk", "Minimal Risk"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TermsRequest(BaseModel):
    text: str = Field(..., description="Document text")
    title: str = Field(default="Terms of Service")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please enter text to analyze")
        return v


class DataHandling(_CamelModel):
    collection: str = ""
    usage: str = ""
    sharing: str = ""
    retention: str = ""


class TermsAnalysis(_CamelModel):
    """Structured analysis returned by the service."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    url: Optional[str] = None
    title: str = ""
    content: str = ""
    summary: str = ""
    key_points: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    user_rights: List[str] = Field(default_factory=list)
    company_rights: List[str] = Field(default_factory=list)
    data_handling: DataHandling = Field(default_factory=DataHandling)
    termination_clauses: List[str] = Field(default_factory=list)
    change_policy: str = ""
    dispute_resolution: str = ""
    risk_score: float = Field(default=0, ge=0, le=100)
    reading_time: float = Field(default=0, ge=0, description="Minutes")
    document_type: str = ""
    total_clauses: int = Field(default=0, ge=0)
    recommendations: List[str] = Field(default_factory=list)


def risk_label(score: float) -> RiskLabel:
    if score >= 76:
        return "High Risk"
    if score >= 51:
        return "Medium Risk"
    if score >= 26:
        return "Low Risk"
    return "Minimal Risk"


def analyze_terms(
    request: TermsRequest, client: Optional[FunctionsClient] = None
) -> TermsAnalysis:
    """
    Send the document for analysis.

    Raises:
        ExternalServiceError: If the call fails or the response is unusable
    """
    client = client or FunctionsClient()
    logger.info(f"Analyzing {request.title!r} ({len(request.text)} characters)")
    data = client.invoke(ANALYZE_FUNCTION, json={"text": request.text, "title": request.title})
    if not data:
        raise ExternalServiceError("No data received from analysis service")
    try:
        return TermsAnalysis.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected analysis response: {e}")
        raise ExternalServiceError("Analysis service returned an invalid response") from e
