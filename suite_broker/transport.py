"""HTTP transport for suite service calls."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .config import DEFAULT_BASE_URL
from .types import Envelope

logger = logging.getLogger(__name__)


class SuiteTransport:
    """POST JSON bodies to the suite service and decode the response envelope.

    Transport failures (connection errors, non-2xx statuses) are raised as
    ``httpx`` exceptions and are not wrapped.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def post(
        self,
        path: str,
        body: Dict[str, Any],
        *,
        query: Optional[Dict[str, str]] = None,
    ) -> Envelope:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {path}")
        response = await self._client.post(url, params=query, json=body)
        response.raise_for_status()
        envelope = Envelope.from_payload(response.json())
        if not envelope.ok:
            logger.warning(f"{path} failed: errcode={envelope.errcode} errmsg={envelope.errmsg}")
        return envelope

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
