from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from pydantic import BaseModel

from gptcli.app.core.errors import ConfigError, TransportError
from gptcli.app.core.logging import get_logger

logger = get_logger(__name__)


def build_headers(api_key: str | None) -> dict[str, str]:
    """Headers for an authenticated JSON POST."""
    if not api_key or not api_key.strip():
        raise ConfigError("OPENAI_API_KEY environment variable not found or invalid")
    return {
        "Authorization": f"Bearer {api_key.strip()}",
        "Content-Type": "application/json",
    }


class OpenAIClient:
    """Thin POST wrapper around ``httpx.AsyncClient``.

    Status codes and bodies are left to the caller; only network failures are
    turned into ``TransportError`` here.
    """

    def __init__(
        self,
        api_key: str | None,
        timeout_seconds: float = 30,
        client: httpx.AsyncClient | None = None,
    ):
        # Raises ConfigError before any connection pool exists.
        self._headers = build_headers(api_key)
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    def timeout_error(self, kind: str = "TimeoutError") -> TransportError:
        return TransportError(
            f"Request to OpenAI timed out after {self.timeout_seconds:g}s",
            detail={"type": kind},
        )

    def _map_error(self, exc: httpx.HTTPError) -> TransportError:
        if isinstance(exc, httpx.TimeoutException):
            return self.timeout_error(type(exc).__name__)
        if isinstance(exc, httpx.ConnectError):
            return TransportError(
                f"Failed to connect to OpenAI: {exc}",
                detail={"type": type(exc).__name__},
            )
        return TransportError(
            f"Failed to send request to OpenAI: {exc}",
            detail={"type": type(exc).__name__},
        )

    @asynccontextmanager
    async def post(self, url: str, payload: BaseModel) -> AsyncIterator[httpx.Response]:
        """POST ``payload`` as JSON and yield the unread, streamable response."""
        body = payload.model_dump(mode="json")
        logger.info("Sending request", data={"url": url, "model": body.get("model")})
        try:
            async with self._client.stream("POST", url, headers=self._headers, json=body) as response:
                logger.info("Response received", data={"status": response.status_code})
                yield response
        except httpx.HTTPError as exc:
            raise self._map_error(exc) from exc

    async def iter_bytes(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            raise self._map_error(exc) from exc

    async def read_body(self, response: httpx.Response) -> bytes:
        try:
            return await response.aread()
        except httpx.HTTPError as exc:
            raise self._map_error(exc) from exc

    async def read_text(self, response: httpx.Response) -> str | None:
        """Best-effort body text; ``None`` when it can't be read."""
        try:
            await response.aread()
            return response.text
        except (httpx.HTTPError, UnicodeDecodeError, LookupError) as exc:
            logger.debug("Could not read error body", data={"error": str(exc)})
            return None

    async def aclose(self) -> None:
        await self._client.aclose()
