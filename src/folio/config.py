"""Configuration: frozen Config resolved from the hosting environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

from folio.errors import ConfigurationError
from folio.retry import RetryPolicy

load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_API_KEY_ENV_VAR = "GEMINI_API_KEY"
_ENDPOINT_ENV_VAR = "FOLIO_ENDPOINT"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the generative text client.

    The API key and an optional full endpoint URL are auto-resolved from the
    environment so they are never hard-coded.

    Example:
        config = Config(model="gemini-2.5-flash")
        # API key is automatically resolved from GEMINI_API_KEY
    """

    model: str = DEFAULT_MODEL
    #: Auto-resolved from ``GEMINI_API_KEY`` when *None*.
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    #: Full URL override; auto-resolved from ``FOLIO_ENDPOINT`` when *None*.
    endpoint: str | None = None
    use_mock: bool = False
    #: Per-attempt timeout. There is no overall deadline beyond the retry budget.
    request_timeout_s: float | None = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        """Auto-resolve environment values and validate configuration."""
        if not isinstance(self.model, str) or not self.model.strip():
            raise ConfigurationError(
                "model must be a non-empty string",
                hint=f"Pass model={DEFAULT_MODEL!r} or another Gemini model id.",
            )
        if self.request_timeout_s is not None and self.request_timeout_s <= 0:
            raise ConfigurationError(
                f"request_timeout_s must be > 0 or None, got {self.request_timeout_s}",
                hint="This bounds each HTTP attempt in seconds; None disables it.",
            )

        if self.endpoint is None:
            object.__setattr__(self, "endpoint", os.environ.get(_ENDPOINT_ENV_VAR) or None)

        if self.api_key is None and not self.use_mock:
            object.__setattr__(self, "api_key", os.environ.get(_API_KEY_ENV_VAR))

        # Validate: real API calls need a key
        if not self.use_mock and not self.api_key:
            raise ConfigurationError(
                "API key required for gemini",
                hint=f"Set {_API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

    @property
    def resolved_endpoint(self) -> str:
        """Return the generateContent URL for the configured model."""
        if self.endpoint:
            return self.endpoint
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(model={self.model!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None}, "
            f"use_mock={self.use_mock}, retry={self.retry})"
        )

    __repr__ = __str__
