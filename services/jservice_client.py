import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional, cast

import requests

from services.exceptions import RetrievalError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://jservice.io"


class JServiceClient:
    """Thin HTTP wrapper around the jService search page and clues API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
    ):
        # Allow overrides from env; fallback to provided argument or defaults
        if base_url is None:
            base_url = os.getenv("JSERVICE_BASE_URL", DEFAULT_BASE_URL)
        if timeout is None:
            try:
                timeout = float(os.getenv("JSERVICE_TIMEOUT_SECONDS", "5"))
            except ValueError:
                timeout = 5
        if retries is None:
            try:
                retries = int(os.getenv("JSERVICE_MAX_RETRIES", "1"))
            except ValueError:
                retries = 1
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = max(1, retries)

    def _get(self, path: str, params: Dict[str, Any], decode: Callable[[requests.Response], Any]):
        """GET with linear backoff between attempts; raise RetrievalError after the last one."""
        url = f"{self.base_url}{path}"
        backoffs = [i * 0.4 for i in range(self.retries)]  # 0.0, 0.4, 0.8, ...
        last_error: Optional[Exception] = None
        for attempt, delay in enumerate(backoffs, start=1):
            if delay:
                time.sleep(delay)
            try:
                resp = requests.get(url, params=cast(Any, params), timeout=self.timeout)
                resp.raise_for_status()
                return decode(resp)
            except (requests.RequestException, ValueError) as e:
                last_error = e
                logger.warning(
                    "jservice_request_failed path=%s attempt=%s/%s error=%s",
                    path,
                    attempt,
                    self.retries,
                    e,
                )
        raise RetrievalError(f"Request to {path} failed: {last_error}") from last_error

    def search_page(self, query: str) -> str:
        """Return the raw HTML of the category search page for `query`."""
        return self._get("/search", {"query": query}, lambda resp: resp.text)

    def fetch_clues(self, params: Dict[str, Any]) -> List[Dict]:
        """Return the raw clue objects for an /api/clues query."""
        data = self._get("/api/clues", params, lambda resp: resp.json())
        if not isinstance(data, list):
            raise RetrievalError(f"Expected a list of clues, got {type(data).__name__}")
        return data
