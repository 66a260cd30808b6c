"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists to prevent test suites from
growing lots of one-off providers and transports as coverage expands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

import httpx

from folio.providers.models import GenerationRequest, GenerationResult


def gemini_body(text: str = "ok", **extra: Any) -> dict[str, Any]:
    """Minimal successful ``generateContent`` response body."""
    body: dict[str, Any] = {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ],
    }
    body.update(extra)
    return body


@dataclass
class RecordingSleep:
    """Async sleep double: records each delay and returns immediately."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@dataclass
class ScriptedTransport:
    """httpx handler that plays back a script of responses or exceptions.

    Each item is an ``httpx.Response``, an exception instance (raised), an
    int status code, or a dict served as a 200 JSON body. When the script
    runs out the last item repeats.
    """

    script: list[Any] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            return httpx.Response(200, json=gemini_body())
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, httpx.Response):
            return item
        if isinstance(item, int):
            return httpx.Response(item, text=f"status {item}")
        return httpx.Response(200, json=item)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, idx: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[idx].content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@dataclass
class CaptureProvider:
    """Provider double that records requests and replies with fixed text."""

    reply: str = "ok"
    requests: list[GenerationRequest] = field(default_factory=list)
    closed: bool = False
    name: str = "capture"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        return GenerationResult(text=self.reply)

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class ScriptedProvider:
    """Provider double that returns a scripted sequence of results/exceptions."""

    script: list[str | BaseException] = field(default_factory=list)
    requests: list[GenerationRequest] = field(default_factory=list)
    name: str = "scripted"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        if not self.script:
            return GenerationResult(text="ok")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return GenerationResult(text=item)

    async def aclose(self) -> None:
        return None
