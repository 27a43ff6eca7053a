"""
Outbound HTTP plumbing shared by the external service clients.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from webtools.config import Settings, get_global_settings
from webtools.errors import ExternalServiceError

logger = logging.getLogger(__name__)


def create_session(max_retries: int = 3) -> requests.Session:
    """Create a requests session with retry strategy."""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "POST"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


class FunctionsClient:
    """Client for the hosted function endpoints (``<base>/<function-name>``)."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or get_global_settings()
        self.session = session or create_session(self.settings.http_max_retries)

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.settings.functions_api_key:
            headers["Authorization"] = f"Bearer {self.settings.functions_api_key}"
        return headers

    def invoke(
        self,
        name: str,
        json: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        POST to a function and return its decoded JSON body.

        Raises:
            ExternalServiceError: If no base URL is configured, the request
                fails, or the body is not JSON
        """
        if not self.settings.functions_base_url:
            raise ExternalServiceError("FUNCTIONS_BASE_URL is not configured")

        url = f"{self.settings.functions_base_url}/{name}"
        try:
            logger.info(f"Invoking function {name}")
            response = self.session.post(
                url,
                json=json,
                files=files,
                headers=self._headers(),
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error invoking function {name}: {e}")
            raise ExternalServiceError(f"Failed to invoke {name}: {e}") from e
