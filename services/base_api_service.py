#services/base_api_service.py



from __future__ import annotations
import logging
from typing import Any, Dict, Optional


import httpx




class BaseAPIService:
    """Shared httpx plumbing for upstream JSON APIs (single attempt, no retries)."""


    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout_s = timeout_s
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.logger = logging.getLogger(self.__class__.__name__)


    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_s,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client


    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None


    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        ) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        client = await self._get_client()
        try:
            resp = await client.request(method, url, params=params or {})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error("HTTP error %s on %s %s", e.response.status_code, method, url)
            raise
        except httpx.TransportError as e:
            self.logger.error("Transport error on %s %s: %s", method, url, e)
            raise
        return resp.json()


    async def _get(self, endpoint: str, *, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("GET", endpoint, params=params)
