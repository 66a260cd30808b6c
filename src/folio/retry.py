"""Minimal async retry with explicit error contracts.

Every failed attempt is retried alike: transport errors and non-2xx
responses share one budget and one backoff schedule. Anything else (bad
input, malformed payloads, cancellation) propagates immediately.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, TypeVar

from folio.errors import ExhaustedRetriesError, HttpError, TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy with exponential backoff and no jitter.

    With the defaults a call is tried at most three times, sleeping 1s and
    then 2s between attempts.
    """

    max_attempts: int = 3
    initial_delay_s: float = 1.0
    backoff_multiplier: float = 2.0

    def __post_init__(self) -> None:
        """Validate invariants to keep retry behavior predictable."""
        if self.max_attempts < 1:
            raise ValueError("RetryPolicy.max_attempts must be >= 1")
        if self.initial_delay_s < 0:
            raise ValueError("RetryPolicy.initial_delay_s must be >= 0")
        if self.backoff_multiplier <= 0:
            raise ValueError("RetryPolicy.backoff_multiplier must be > 0")

    def delay_for(self, attempt_index: int) -> float:
        """Return the sleep after the failed attempt ``attempt_index`` (0-based)."""
        return self.initial_delay_s * (self.backoff_multiplier ** max(0, attempt_index))


def should_retry_attempt(exc: BaseException) -> bool:
    """Return True when a failed attempt counts against the retry budget.

    No distinction is made between status codes: a 400 burns the budget just
    like a 503.
    """
    return isinstance(exc, (TransportError, HttpError))


async def retry_async(
    factory: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    max_attempts: int | None = None,
    should_retry: Callable[[BaseException], bool] = should_retry_attempt,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run an async factory with bounded retries.

    ``max_attempts`` overrides the policy for this call only. ``sleep`` is
    injectable so callers can drive the schedule without real elapsed time.
    """
    attempts = policy.max_attempts if max_attempts is None else max_attempts
    if attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt_index in range(attempts):
        try:
            return await factory()
        except Exception as exc:
            if not should_retry(exc):
                raise
            logger.debug(
                "Attempt %d/%d failed: %s", attempt_index + 1, attempts, exc
            )
            if attempt_index == attempts - 1:
                logger.warning("Request failed after %d attempt(s)", attempts)
                raise ExhaustedRetriesError(
                    f"API request failed after {attempts} attempt(s): {exc}",
                    attempts=attempts,
                    last_error=exc,
                    hint=getattr(exc, "hint", None),
                ) from exc
            await sleep(policy.delay_for(attempt_index))

    # Loop always returns or raises.
    raise RuntimeError("retry_async exhausted without an exception")  # pragma: no cover
