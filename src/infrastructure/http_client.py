"""Async HTTP client built on curl_cffi with retry for transient failures."""

import asyncio
import json
from typing import Any

from curl_cffi.requests import AsyncSession
from loguru import logger

from infrastructure.errors import HTTPClientError, HTTPStatusError

DEFAULT_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
}


class AsyncHTTPClient:
    """
    Thin async wrapper around ``curl_cffi`` sessions.

    A fresh session is opened per request; sessions kept across awaits tend to
    leak on interpreter shutdown. Network errors, 429 and 5xx responses are
    retried with exponential backoff, other 4xx responses fail immediately.
    """

    def __init__(
        self,
        timeout: float = 30,
        retries: int = 2,
        backoff: float = 1.0,
        impersonate: str = "chrome",
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize client.

        Args:
            timeout: Per-request timeout in seconds
            retries: Extra attempts after the first failure
            backoff: Base delay in seconds, doubled after every attempt
            impersonate: Browser fingerprint passed to curl_cffi
            headers: Headers sent with every request
        """
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self.impersonate = impersonate
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> str:
        """Perform a request and return the response body as text."""
        merged_headers = {**self.headers, **(headers or {})}
        attempts = self.retries + 1

        for attempt in range(1, attempts + 1):
            try:
                logger.debug(f"{method} {url} (attempt {attempt}/{attempts})")
                async with AsyncSession(impersonate=self.impersonate, timeout=self.timeout) as session:
                    response = await session.request(
                        method,
                        url,
                        headers=merged_headers,
                        params=params,
                        json=json_body,
                    )

                if response.status_code >= 400:
                    raise HTTPStatusError(response.status_code, url, response.text)
                return response.text

            except HTTPStatusError as e:
                if not e.is_transient or attempt == attempts:
                    raise
                logger.warning(f"{e}, retrying")
            except Exception as e:
                if attempt == attempts:
                    raise HTTPClientError(f"Request to {url} failed: {e}") from e
                logger.warning(f"Request to {url} failed: {e}, retrying")

            await asyncio.sleep(self.backoff * 2 ** (attempt - 1))

        raise HTTPClientError(f"Request to {url} failed")

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Get text content from URL."""
        return await self.request("GET", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """Get and decode a JSON document."""
        return self._decode(url, await self.request("GET", url, **kwargs))

    async def post_json(self, url: str, payload: Any, **kwargs: Any) -> Any:
        return self._decode(url, await self.request("POST", url, json_body=payload, **kwargs))

    async def put_json(self, url: str, payload: Any, **kwargs: Any) -> Any:
        return self._decode(url, await self.request("PUT", url, json_body=payload, **kwargs))

    @staticmethod
    def _decode(url: str, text: str) -> Any:
        try:
            return json.loads(text) if text else None
        except json.JSONDecodeError as e:
            raise HTTPClientError(f"Invalid JSON from {url}: {e}") from e
