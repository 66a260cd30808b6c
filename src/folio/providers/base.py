"""Provider protocol: minimal interface for generative-text backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from folio.providers.models import GenerationRequest, GenerationResult


@runtime_checkable
class Provider(Protocol):
    """Minimal provider protocol: generate and release resources."""

    name: str

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send one request and return the extracted text.

        Implementations raise ``APIError`` subclasses on failure and must never
        report an empty or missing text as success.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        ...
