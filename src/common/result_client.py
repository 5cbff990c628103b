"""
Board result API client.

Fetches a single result by roll number and registration number and
reports every outcome as a Success or Failure instead of raising.
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from common.config import BOARD_API_BASE_URL, get_http_timeout
from common.models import ResultQuery
from common.outcome import ErrorKind, Failure, Outcome, Success

logger = logging.getLogger(__name__)

RESULTS_UNAVAILABLE_MESSAGE = "Failed to connect to the results service."


class ResultClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or BOARD_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def build_url(self, query: ResultQuery) -> str:
        """{base}/{roll}{serial}/{registration}, registration percent-encoded with slashes kept."""
        return f"{self.base_url}/{query.full_roll}/{quote(query.registration, safe='/')}"

    def fetch_result(
        self, query: ResultQuery, unavailable_message: str = RESULTS_UNAVAILABLE_MESSAGE
    ) -> Outcome:
        """
        GET the result for a query.

        Args:
            query: Validated roll/serial/registration
            unavailable_message: Message used when the service cannot be reached

        Returns:
            Success with the parsed JSON body, or a Failure carrying the
            upstream status (non-2xx) or 502 (network or decode error)
        """
        url = self.build_url(query)
        try:
            response = self.session.get(url, timeout=self.timeout)

            if not response.ok:
                message = self._error_message(response)
                logger.warning(
                    "Results API returned %s for roll %s: %s",
                    response.status_code,
                    query.full_roll,
                    message,
                )
                kind = (
                    ErrorKind.UPSTREAM_NOT_FOUND
                    if response.status_code == 404
                    else ErrorKind.UPSTREAM_REJECTED
                )
                return Failure(kind=kind, status_code=response.status_code, message=message)

            return Success(value=response.json())

        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching from results API: %s", e, exc_info=True)
            return Failure(
                kind=ErrorKind.UPSTREAM_UNAVAILABLE,
                status_code=502,
                message=unavailable_message,
            )

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the upstream JSON 'message', else a status line."""
        fallback = f"API Error ({response.status_code}): {response.reason}"
        try:
            body = response.json()
        except ValueError:
            return fallback

        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message:
                return message
        return fallback
