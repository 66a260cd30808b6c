"""Mock provider for testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from folio.providers.models import GenerationResult

if TYPE_CHECKING:
    from folio.providers.models import GenerationRequest


class MockProvider:
    """Mock provider for running without API calls.

    Echoes the latest user turn so recipes stay informative offline.
    """

    name = "mock"

    def __init__(self) -> None:
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Return a deterministic mock response."""
        self.requests.append(request)
        user_texts = [t.text for t in request.turns if t.role == "user" and t.text.strip()]
        text = user_texts[-1] if user_texts else request.turns[-1].text
        return GenerationResult(
            text=f"echo: {text[:100]}",
            usage={"input_tokens": 10, "total_tokens": 20},
        )

    async def aclose(self) -> None:
        return None
