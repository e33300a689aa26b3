import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from assessment.commons.errors import RateLimited, RequestFailed, ServerError
from assessment.commons.logger import logger
from assessment.commons.types import Settings
from assessment.helpers.retry import retry_with_backoff


class ApiTransport:
    """Request primitive for the assessment API: one status-classified call plus retry."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings
        self.base_url = settings.api.base_url
        self.headers = {
            "x-api-key": settings.api_key or "",
            "Content-Type": "application/json",
            "User-Agent": settings.api.user_agent,
        }
        self.sleep = sleep
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.api.timeout_sec)

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def _send_once(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        headers = {**self.headers, **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as ex:
            raise RequestFailed(f"Request failed: {ex}") from ex

        status = response.status_code
        if status == 429:
            delay = self.settings.retry.rate_limit_delay_sec
            logger.warning(f"Rate limited, waiting {delay:.2f}s before retry...")
            await self.sleep(delay)
            raise RateLimited()
        if status >= 500:
            raise ServerError(f"Server error: {status}", status)
        if not response.is_success:
            raise RequestFailed(
                f"Request failed: HTTP error: {status} - {response.reason_phrase}", status
            )

        try:
            return response.json()
        except ValueError as ex:
            raise RequestFailed(f"Request failed: invalid JSON body ({ex})", status) from ex

    async def request(self, method: str, path: str, **kwargs) -> Any:
        retry = self.settings.retry

        async def _attempt():
            return await self._send_once(method, path, **dict(kwargs))

        return await retry_with_backoff(
            _attempt, attempts=retry.attempts, base_delay=retry.backoff_sec, sleep=self.sleep
        )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return await self.request("POST", path, json=payload)
