"""Retry loop behavior with a deterministic clock."""

from __future__ import annotations

import asyncio

from hypothesis import given
from hypothesis import strategies as st
import pytest

from folio.errors import (
    ExhaustedRetriesError,
    HttpError,
    MalformedResponseError,
    TransportError,
)
from folio.retry import RetryPolicy, retry_async, should_retry_attempt
from tests.helpers import RecordingSleep

pytestmark = pytest.mark.unit


def _flaky(failures: list[BaseException], result: str = "done"):
    calls = {"n": 0}

    async def factory() -> str:
        calls["n"] += 1
        if failures:
            raise failures.pop(0)
        return result

    return factory, calls


@pytest.mark.asyncio
async def test_succeeds_on_third_attempt_after_two_delays(
    fake_sleep: RecordingSleep,
) -> None:
    factory, calls = _flaky(
        [TransportError("down"), HttpError("HTTP error! status: 503", status_code=503)]
    )

    result = await retry_async(factory, policy=RetryPolicy(), sleep=fake_sleep)

    assert result == "done"
    assert calls["n"] == 3
    assert fake_sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_always_failing_raises_exhausted_after_three_attempts(
    fake_sleep: RecordingSleep,
) -> None:
    last = HttpError("HTTP error! status: 500", status_code=500)
    factory, calls = _flaky(
        [TransportError("a"), TransportError("b"), last, TransportError("never")]
    )

    with pytest.raises(ExhaustedRetriesError) as exc:
        await retry_async(factory, policy=RetryPolicy(max_attempts=3), sleep=fake_sleep)

    assert calls["n"] == 3
    assert fake_sleep.delays == [1.0, 2.0]
    assert exc.value.attempts == 3
    assert exc.value.last_error is last
    assert exc.value.__cause__ is last
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_single_attempt_policy_never_sleeps(fake_sleep: RecordingSleep) -> None:
    factory, calls = _flaky([TransportError("down")])

    with pytest.raises(ExhaustedRetriesError):
        await retry_async(factory, policy=RetryPolicy(max_attempts=1), sleep=fake_sleep)

    assert calls["n"] == 1
    assert fake_sleep.delays == []


@pytest.mark.asyncio
async def test_per_call_override_of_max_attempts(fake_sleep: RecordingSleep) -> None:
    factory, calls = _flaky([TransportError(str(i)) for i in range(10)])

    with pytest.raises(ExhaustedRetriesError) as exc:
        await retry_async(
            factory, policy=RetryPolicy(), max_attempts=5, sleep=fake_sleep
        )

    assert calls["n"] == 5
    assert fake_sleep.delays == [1.0, 2.0, 4.0, 8.0]
    assert exc.value.attempts == 5


@pytest.mark.asyncio
async def test_non_attempt_errors_propagate_without_retry(
    fake_sleep: RecordingSleep,
) -> None:
    factory, calls = _flaky([MalformedResponseError("no text")])

    with pytest.raises(MalformedResponseError):
        await retry_async(factory, policy=RetryPolicy(), sleep=fake_sleep)

    assert calls["n"] == 1
    assert fake_sleep.delays == []


@pytest.mark.asyncio
async def test_cancellation_is_not_retried(fake_sleep: RecordingSleep) -> None:
    factory, calls = _flaky([asyncio.CancelledError()])

    with pytest.raises(asyncio.CancelledError):
        await retry_async(factory, policy=RetryPolicy(), sleep=fake_sleep)

    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_zero_max_attempts_override_is_rejected() -> None:
    factory, calls = _flaky([])

    with pytest.raises(ValueError, match="max_attempts"):
        await retry_async(factory, policy=RetryPolicy(), max_attempts=0)

    assert calls["n"] == 0


def test_every_status_code_is_retryable() -> None:
    assert should_retry_attempt(HttpError("bad request", status_code=400))
    assert should_retry_attempt(HttpError("unavailable", status_code=503))
    assert should_retry_attempt(TransportError("reset"))
    assert not should_retry_attempt(MalformedResponseError("empty"))
    assert not should_retry_attempt(ValueError("other"))


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"max_attempts": 0}, "max_attempts"),
        ({"initial_delay_s": -1.0}, "initial_delay_s"),
        ({"backoff_multiplier": 0.0}, "backoff_multiplier"),
    ],
)
def test_policy_validates_invariants(kwargs: dict[str, float], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        RetryPolicy(**kwargs)  # type: ignore[arg-type]


@given(st.integers(min_value=0, max_value=20))
def test_default_schedule_doubles_from_one_second(attempt_index: int) -> None:
    assert RetryPolicy().delay_for(attempt_index) == float(2**attempt_index)
