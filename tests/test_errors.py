from __future__ import annotations

import pytest

from folio.errors import (
    APIError,
    ExhaustedRetriesError,
    FolioError,
    GenerationFailed,
    HttpError,
    MalformedResponseError,
    TransportError,
)

pytestmark = pytest.mark.unit


def test_api_error_structured_metadata() -> None:
    err = APIError("boom", hint="do this", status_code=503, attempt=1)

    assert str(err) == "boom"
    assert err.hint == "do this"
    assert err.status_code == 503
    assert err.attempt == 1


def test_api_error_defaults_to_none() -> None:
    err = APIError("fail")
    assert err.hint is None
    assert err.status_code is None
    assert err.attempt is None


def test_subclass_hierarchy() -> None:
    """Call failures are catchable as APIError and FolioError."""
    for err in (
        TransportError("reset"),
        HttpError("bad", status_code=500),
        MalformedResponseError("empty"),
        ExhaustedRetriesError("gave up", attempts=3, last_error=TransportError("x")),
    ):
        assert isinstance(err, APIError)
        assert isinstance(err, FolioError)

    assert not isinstance(GenerationFailed("sorry", operation="chat"), APIError)


def test_exhausted_retries_copies_status_from_last_error() -> None:
    last = HttpError("bad", status_code=429, body="slow down")
    err = ExhaustedRetriesError("gave up", attempts=2, last_error=last)

    assert err.attempts == 2
    assert err.attempt == 1
    assert err.status_code == 429
    assert err.last_error is last


def test_exhausted_retries_without_status_on_transport_failure() -> None:
    err = ExhaustedRetriesError("gave up", attempts=3, last_error=TransportError("x"))
    assert err.status_code is None


def test_generation_failed_keeps_user_message_and_cause() -> None:
    cause = MalformedResponseError("no text")
    try:
        raise GenerationFailed("Please try again.", operation="summary") from cause
    except GenerationFailed as exc:
        assert str(exc) == "Please try again."
        assert exc.user_message == "Please try again."
        assert exc.operation == "summary"
        assert exc.cause is cause
