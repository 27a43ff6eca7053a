"""
Password breach lookup using the k-anonymity range API.

Only the first five hex characters of the password's SHA-1 hash leave the
process. The range API answers with every known ``SUFFIX:COUNT`` for that
prefix and the match is done locally.
"""

import hashlib
import logging
from typing import List, Optional, Tuple

import requests
from pydantic import BaseModel, Field

from webtools.config import Settings, get_global_settings
from webtools.errors import ExternalServiceError
from webtools.models.password_generator import is_common_password
from webtools.services.http import FunctionsClient, create_session

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 5
COMMON_PASSWORD_COUNT = 999999
COMMON_PASSWORD_SOURCE = "Common Passwords Database"
RANGE_SOURCE = "Have I Been Pwned"
LEAK_LOOKUP_SOURCE = "Leak-Lookup"
LEAK_LOOKUP_FUNCTION = "check-password-leak"


class BreachCheckResult(BaseModel):
    checked: bool = True
    compromised: bool
    count: int = Field(default=0, ge=0)
    sources: List[str] = Field(default_factory=list)
    leak_lookup_sources: List[str] = Field(default_factory=list)


def hash_password(password: str) -> Tuple[str, str]:
    """Upper-case SHA-1 hex split into (prefix, suffix)."""
    digest = hashlib.sha1(password.encode("utf-8")).hexdigest().upper()
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_response(body: str, suffix: str) -> int:
    """Breach count for ``suffix`` in a range body, or 0 when absent."""
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        candidate, _, count = line.partition(":")
        if candidate.upper() == suffix:
            try:
                return int(count)
            except ValueError:
                return 0
    return 0


class BreachChecker:
    """Checks passwords against the common list, the range API and Leak-Lookup."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        functions: Optional[FunctionsClient] = None,
    ):
        self.settings = settings or get_global_settings()
        self.session = session or create_session(self.settings.http_max_retries)
        self.functions = functions or FunctionsClient(self.settings, self.session)

    def range_count(self, password: str) -> int:
        """
        Times the password appears in the range API's breach corpus.

        Raises:
            ExternalServiceError: If the range API cannot be reached
        """
        prefix, suffix = hash_password(password)
        url = f"{self.settings.breach_range_api_url}/{prefix}"
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.settings.breach_user_agent},
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error querying breach range API for prefix {prefix}: {e}")
            raise ExternalServiceError(f"Breach range lookup failed: {e}") from e
        return parse_range_response(response.text, suffix)

    def leak_lookup(self, password: str) -> Tuple[bool, List[str]]:
        """Secondary lookup; failures are logged and treated as not found."""
        try:
            data = self.functions.invoke(LEAK_LOOKUP_FUNCTION, json={"password": password})
        except ExternalServiceError as e:
            logger.warning(f"Leak-Lookup unavailable, continuing without it: {e}")
            return False, []
        if isinstance(data, dict) and data.get("success"):
            return bool(data.get("found")), list(data.get("sources") or [])
        return False, []

    def check(self, password: str) -> BreachCheckResult:
        if not password:
            raise ValueError("Password must not be empty")

        if is_common_password(password):
            logger.info("Password matched the common password list")
            return BreachCheckResult(
                compromised=True,
                count=COMMON_PASSWORD_COUNT,
                sources=[COMMON_PASSWORD_SOURCE],
            )

        count = self.range_count(password)
        leaked, leak_sources = self.leak_lookup(password)

        return BreachCheckResult(
            compromised=count > 0 or leaked,
            count=count,
            sources=[RANGE_SOURCE, LEAK_LOOKUP_SOURCE],
            leak_lookup_sources=leak_sources,
        )


def check_password(password: str, checker: Optional[BreachChecker] = None) -> BreachCheckResult:
    return (checker or BreachChecker()).check(password)
