"""
通用 API 客户端封装
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp
from aiohttp import ClientTimeout

from consentrelay.application.ports.downstream_port import HttpResponse
from consentrelay.core.errors import TransportError

logger = logging.getLogger(__name__)


class APIClient:
    """Async HTTP client that reports status and body for every completed exchange."""

    def __init__(self, base_url: str, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": "consent-relay/1.0"},
            )
        return self._session

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Optional[str] = None,
    ) -> HttpResponse:
        url = self._url(endpoint)
        session = await self._get_session()

        try:
            async with session.request(
                method,
                url,
                data=body.encode("utf-8") if body is not None else None,
                headers={"Content-Type": "application/json"},
            ) as response:
                try:
                    text = await response.text()
                except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
                    logger.debug(f"Unreadable response body from {url}: {e}")
                    text = ""
                return HttpResponse(status_code=response.status, status_body=text)
        except asyncio.TimeoutError as e:
            logger.error(f"Request timeout: {method} {url}")
            raise TransportError(message=f"Timeout: {method} {url}") from e
        except aiohttp.ClientError as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise TransportError(message=f"{type(e).__name__}: {e}") from e

    async def post_json(self, endpoint: str, payload: Any) -> HttpResponse:
        body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        return await self.request("POST", endpoint, body=body)

    async def send_delete(self, endpoint: str) -> HttpResponse:
        return await self.request("DELETE", endpoint)

    async def close(self):
        """关闭 session"""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
