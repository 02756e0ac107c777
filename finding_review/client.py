"""Findings report loader.

Usage:
    client = ReportClient(timeout=30)
    text   = client.fetch("https://reports.example.com/report.csv")
    text   = client.fetch("reports/report.csv")
    store  = load_store("reports/report.csv")   # never raises on load failure
"""

import logging
from pathlib import Path

import requests

from finding_review.reports.parser import parse_report
from finding_review.store import IssueStore

logger = logging.getLogger(__name__)

_HTTP_SCHEMES = ("http://", "https://")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReportLoadError(Exception):
    """Base exception for all report loading errors."""


class NotFoundError(ReportLoadError):
    """Raised on HTTP 404 or a missing report file."""


class NetworkError(ReportLoadError):
    """Raised on connection timeout or unreachable server."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class ReportClient:
    """Reads report text from an HTTP(S) URL or a local file."""

    def __init__(self, timeout: int = 30) -> None:
        self._timeout = timeout
        self._session = requests.Session()

    def fetch(self, source: str) -> str:
        """Return the report text at *source*.

        Raises:
            NotFoundError:   HTTP 404 or missing file
            NetworkError:    Timeout or connection failure
            ReportLoadError: Any other non-2xx response or unreadable file
        """
        if source.startswith(_HTTP_SCHEMES):
            return self._fetch_url(source)
        return self._read_file(source)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fetch_url(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while fetching '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(f"Unable to reach '{url}'") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Report not found: {url}")
        if not response.ok:
            raise ReportLoadError(
                f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
            )

        response.encoding = "utf-8"
        return response.text

    def _read_file(self, source: str) -> str:
        path = Path(source)
        if not path.is_file():
            raise NotFoundError(f"Report file not found: '{source}'")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportLoadError(f"Failed to read '{source}': {exc}") from exc


# ---------------------------------------------------------------------------
# Store loading
# ---------------------------------------------------------------------------

def load_store(source: str, client: ReportClient | None = None) -> IssueStore:
    """Fetch, parse and wrap the report at *source* in an IssueStore.

    A failed load is logged and yields an empty store, so the review can go
    on with every page reported as clean.
    """
    client = client or ReportClient()
    try:
        text = client.fetch(source)
    except ReportLoadError as exc:
        logger.error("Error loading report: %s", exc)
        return IssueStore()

    store = IssueStore(parse_report(text))
    logger.info("Loaded %d issue(s) from '%s'", len(store), source)
    return store
