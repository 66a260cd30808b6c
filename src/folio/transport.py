"""Resilient API invoker: one JSON POST wrapped in bounded retry.

Each attempt either returns a 2xx ``httpx.Response`` or raises
``TransportError`` / ``HttpError``; ``retry_async`` turns repeated failures
into ``ExhaustedRetriesError``. Response bodies are not inspected here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from folio.errors import HttpError, TransportError
from folio.retry import RetryPolicy, retry_async

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

logger = logging.getLogger(__name__)

_BODY_EXCERPT_CHARS = 300


def _redact_url(endpoint: str) -> str:
    """Drop the query string so credentials passed as ``?key=`` never hit logs."""
    try:
        return str(httpx.URL(endpoint).copy_with(query=None))
    except httpx.InvalidURL:
        return "<invalid url>"


def _status_hint(status_code: int, body: str) -> str | None:
    body_lower = body.lower()
    if status_code in {401, 403} or (
        status_code == 400 and ("api key" in body_lower or "api_key" in body_lower)
    ):
        return "Check credentials/permissions (try setting GEMINI_API_KEY or Config.api_key)."
    if status_code == 404:
        return "Check the model name and endpoint URL."
    return None


class Invoker:
    """Send JSON POST requests with bounded exponential-backoff retry.

    The underlying ``httpx.AsyncClient`` is created lazily and owned by the
    invoker unless one is injected. Attempts are strictly sequential.
    """

    def __init__(
        self,
        *,
        policy: RetryPolicy | None = None,
        timeout_s: float | None = 30.0,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Create an invoker.

        Args:
            policy: Retry policy; defaults to three attempts with 1s/2s waits.
            timeout_s: Per-attempt timeout in seconds, ``None`` to disable.
            client: Optional pre-built client (tests, shared pools). Not
                closed by ``aclose()``.
            sleep: Backoff sleep, injectable for deterministic tests.
        """
        self.policy = policy or RetryPolicy()
        self.timeout_s = timeout_s
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)
        return self._client

    async def invoke(
        self,
        endpoint: str,
        body: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        max_attempts: int | None = None,
    ) -> httpx.Response:
        """POST ``body`` as JSON to ``endpoint`` and return the first 2xx response.

        Raises:
            ExhaustedRetriesError: When every allowed attempt failed.
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        safe_url = _redact_url(endpoint)
        attempt_index = 0

        async def _attempt() -> httpx.Response:
            nonlocal attempt_index
            current = attempt_index
            attempt_index += 1
            return await self._send_once(
                endpoint,
                body,
                headers=request_headers,
                attempt=current,
                safe_url=safe_url,
            )

        return await retry_async(
            _attempt,
            policy=self.policy,
            max_attempts=max_attempts,
            sleep=self._sleep,
        )

    async def _send_once(
        self,
        endpoint: str,
        body: Mapping[str, Any],
        *,
        headers: Mapping[str, str],
        attempt: int,
        safe_url: str,
    ) -> httpx.Response:
        client = self._get_client()
        logger.debug("POST %s (attempt %d)", safe_url, attempt + 1)
        try:
            response = await client.post(endpoint, json=dict(body), headers=dict(headers))
        except httpx.RequestError as exc:
            raise TransportError(
                f"Request to {safe_url} failed: {type(exc).__name__}: {exc}",
                attempt=attempt,
            ) from exc

        if not response.is_success:
            text = response.text[:_BODY_EXCERPT_CHARS]
            raise HttpError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                body=text,
                hint=_status_hint(response.status_code, text),
                attempt=attempt,
            )
        return response

    async def aclose(self) -> None:
        """Close the HTTP client if this invoker created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Invoker:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
