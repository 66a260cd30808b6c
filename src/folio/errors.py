"""Exception hierarchy for folio."""

from __future__ import annotations


class FolioError(Exception):
    """Base exception for all folio errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(FolioError):
    """Configuration or profile validation failed."""


class InputError(FolioError):
    """Caller input was rejected before any API call was made."""


class APIError(FolioError):
    """A call to the generative-language endpoint failed.

    ``attempt`` is the zero-based attempt index the failure belongs to, when
    known. Subclasses describe *how* the call failed.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        attempt: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.attempt = attempt


class TransportError(APIError):
    """Network-level failure (connect, read, timeout) on one attempt."""


class HttpError(APIError):
    """Non-2xx response on one attempt."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        hint: str | None = None,
        attempt: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint, status_code=status_code, attempt=attempt)
        self.body = body


class ExhaustedRetriesError(APIError):
    """Every allowed attempt failed; wraps the last underlying cause."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        last_error: BaseException,
        hint: str | None = None,
    ) -> None:
        status_code = getattr(last_error, "status_code", None)
        super().__init__(
            message,
            hint=hint,
            status_code=status_code if isinstance(status_code, int) else None,
            attempt=attempts - 1,
        )
        self.attempts = attempts
        self.last_error = last_error


class MalformedResponseError(APIError):
    """A 2xx response without extractable text. Never retried."""


class GenerationFailed(FolioError):
    """Client-level failure presented to the UI.

    ``str(exc)`` is the user-facing message; the internal cause is chained
    via ``__cause__``.
    """

    def __init__(
        self,
        user_message: str,
        *,
        operation: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(user_message, hint=hint)
        self.user_message = user_message
        self.operation = operation

    @property
    def cause(self) -> BaseException | None:
        """Return the internal error this failure wraps, if any."""
        return self.__cause__
