"""HTTP content source for tilegrid-core.

Fetches tiles from a server exposing
``GET <endpoint>?startIndex=..&numberOfTiles=..``. The server may answer
with a bare JSON list of records or with the ApiResponse envelope used by
this package's own tiles endpoint.
"""

import asyncio
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from ..exceptions import SourceUnavailableError
from ..interfaces import ContentSourceInterface
from ..models.config import (
    DEFAULT_HTTP_BASE_URL,
    DEFAULT_HTTP_ENDPOINT,
    DEFAULT_HTTP_TIMEOUT,
)
from ..models.core import ContentRecord


class HttpContentSource(ContentSourceInterface):
    """Content source backed by a remote tiles endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_HTTP_BASE_URL,
        endpoint: str = DEFAULT_HTTP_ENDPOINT,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.url = base_url.rstrip("/") + "/" + endpoint.lstrip("/")
        self.timeout = timeout
        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.total_requests = 0
        self.total_failures = 0

        logger.info(f"HttpContentSource: Initialized with url={self.url}")

    async def fetch_range(self, start_index: int, count: int) -> List[ContentRecord]:
        """Fetch records from the server.

        The blocking request runs in a worker thread so the event loop keeps
        serving other callers.
        """
        start_index = max(0, start_index)
        count = max(0, count)
        if count == 0:
            return []

        self.total_requests += 1
        try:
            payload = await asyncio.to_thread(self._get, start_index, count)
            records = self._parse(payload)
        except SourceUnavailableError:
            self.total_failures += 1
            raise

        logger.debug(f"HttpContentSource: Received {len(records)} records at {start_index}")
        return records[:count]

    def _get(self, start_index: int, count: int) -> Any:
        params = {"startIndex": start_index, "numberOfTiles": count}
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"HttpContentSource: Request to {self.url} failed: {e}")
            raise SourceUnavailableError(
                f"Tile request failed: {e}", start_index=start_index, count=count) from e
        except ValueError as e:
            logger.error(f"HttpContentSource: Response is not JSON: {e}")
            raise SourceUnavailableError(
                "Tile response is not valid JSON", start_index=start_index, count=count) from e

    @staticmethod
    def _parse(payload: Any) -> List[ContentRecord]:
        if isinstance(payload, dict):
            if payload.get("status") == "error":
                raise SourceUnavailableError(
                    f"Tile server error: {payload.get('message', 'unknown error')}")
            payload = (payload.get("data") or {}).get("tiles")

        if not isinstance(payload, list):
            raise SourceUnavailableError("Tile response has no tile list")

        try:
            return [ContentRecord.from_dict(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise SourceUnavailableError(f"Malformed tile record: {e}") from e

    def close(self) -> None:
        """Close the HTTP session if this source created it."""
        if self._owns_session:
            self.session.close()
            logger.debug(f"HttpContentSource: Closed session for {self.url}")

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the source."""
        return {
            "type": "http",
            "url": self.url,
            "timeout": self.timeout,
            "total_requests": self.total_requests,
            "total_failures": self.total_failures,
        }
