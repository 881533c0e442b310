"""Google Sheets CSV export provider for the trade-reasoning feed."""

from typing import Optional

import requests

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.providers.http import get_text

SOURCE = "google-sheets"
DEFAULT_BASE_URL = "https://docs.google.com/spreadsheets/d"


class GoogleSheetReasoningProvider:
    """Downloads a published sheet through its `export?format=csv` URL."""

    def __init__(
        self,
        sheet_id: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._sheet_id = sheet_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def get_reasoning_csv(self) -> str:
        if not self._sheet_id:
            raise UpstreamError(SOURCE, "reasoning sheet id not configured")
        return get_text(
            self._session,
            SOURCE,
            f"{self._base_url}/{self._sheet_id}/export",
            timeout=self._timeout,
            params={"format": "csv"},
        )
