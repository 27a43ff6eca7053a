"""
UTM campaign URL builder.

Builds tracking URLs by merging ``utm_*`` parameters into a landing page URL,
supports bulk generation, and exports saved campaigns as CSV.
"""

import csv
import io
from datetime import date
from typing import Dict, List
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, Field, field_validator

UTM_FIELDS = ("source", "medium", "campaign", "term", "content")

CSV_HEADER = [
    "Campaign Name",
    "Original URL",
    "UTM URL",
    "Source",
    "Medium",
    "Campaign",
    "Term",
    "Content",
    "Created Date",
    "Clicks",
]


class UtmParams(BaseModel):
    url: str = ""
    source: str = ""
    medium: str = ""
    campaign: str = ""
    term: str = ""
    content: str = ""

    @field_validator("*")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    @property
    def has_required(self) -> bool:
        """URL, source, medium and campaign are all present."""
        return bool(self.url and self.source and self.medium and self.campaign)


class UtmPreset(BaseModel):
    name: str
    source: str
    medium: str


class SavedCampaign(BaseModel):
    name: str
    url: str
    final_url: str
    params: UtmParams
    created_at: date = Field(default_factory=date.today)
    clicks: int = Field(default=0, ge=0)


class BulkResult(BaseModel):
    original: str
    utm: str


PRESETS: List[UtmPreset] = [
    UtmPreset(name="Google Ads", source="google", medium="cpc"),
    UtmPreset(name="Facebook Ads", source="facebook", medium="social"),
    UtmPreset(name="Instagram", source="instagram", medium="social"),
    UtmPreset(name="LinkedIn", source="linkedin", medium="social"),
    UtmPreset(name="Twitter/X", source="twitter", medium="social"),
    UtmPreset(name="Email Newsletter", source="newsletter", medium="email"),
    UtmPreset(name="YouTube", source="youtube", medium="video"),
    UtmPreset(name="Blog Post", source="blog", medium="referral"),
    UtmPreset(name="Banner Ad", source="website", medium="banner"),
    UtmPreset(name="Affiliate", source="affiliate", medium="referral"),
]


def build_utm_url(params: UtmParams) -> str:
    """
    Merge non-empty UTM values into the URL's query string.

    Existing query parameters are kept in order; ``utm_*`` keys already on the
    URL are overwritten in place. An empty URL gives an empty string.

    Raises:
        ValueError: If the URL has no scheme or host
    """
    if not params.url:
        return ""

    parts = urlsplit(params.url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid URL: {params.url}")

    utm: Dict[str, str] = {
        f"utm_{name}": getattr(params, name)
        for name in UTM_FIELDS
        if getattr(params, name)
    }

    query: List[tuple] = []
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key in utm:
            if utm[key] is not None:
                query.append((key, utm[key]))
                utm[key] = None
        else:
            query.append((key, value))
    query.extend((key, value) for key, value in utm.items() if value is not None)

    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path or "/", urlencode(query), parts.fragment)
    )


def apply_preset(params: UtmParams, preset_name: str) -> UtmParams:
    """Return a copy of ``params`` with the preset's source and medium."""
    for preset in PRESETS:
        if preset.name == preset_name:
            return params.model_copy(
                update={"source": preset.source, "medium": preset.medium}
            )
    raise KeyError(f"Unknown UTM preset: {preset_name}")


def build_bulk(urls_text: str, params: UtmParams) -> List[BulkResult]:
    """One tagged URL per non-blank line of ``urls_text``."""
    if not (params.source and params.medium and params.campaign):
        raise ValueError("Source, medium and campaign are required for bulk URLs")

    results = []
    for line in urls_text.splitlines():
        url = line.strip()
        if url:
            tagged = build_utm_url(params.model_copy(update={"url": url}))
            results.append(BulkResult(original=url, utm=tagged))
    return results


def save_campaign(params: UtmParams, name: str = "") -> SavedCampaign:
    if not params.has_required:
        raise ValueError("URL, source, medium and campaign are required")
    return SavedCampaign(
        name=name or f"{params.source} - {params.campaign}",
        url=params.url,
        final_url=build_utm_url(params),
        params=params,
    )


def saved_campaigns_to_csv(campaigns: List[SavedCampaign]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for campaign in campaigns:
        writer.writerow(
            [
                campaign.name,
                campaign.url,
                campaign.final_url,
                campaign.params.source,
                campaign.params.medium,
                campaign.params.campaign,
                campaign.params.term,
                campaign.params.content,
                campaign.created_at.isoformat(),
                campaign.clicks,
            ]
        )
    return buffer.getvalue()
