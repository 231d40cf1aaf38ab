from __future__ import annotations

import asyncio
import types

import pytest

from model_picker.base.errors import (
    CatalogError,
    ErrorCode,
    FetchError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
    classify_exception,
    describe_exception,
)


def test_classify_catalog_error_passthrough():
    e = FetchError("nope", provider="x", code=ErrorCode.AUTH)
    assert classify_exception(e) is ErrorCode.AUTH


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE
    e3 = types.SimpleNamespace(status=401)
    assert classify_exception(e3) is ErrorCode.AUTH


def test_classify_timeouts_and_cancellation():
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT
    assert classify_exception(TimeoutError("slow")) is ErrorCode.TIMEOUT
    assert classify_exception(asyncio.CancelledError()) is ErrorCode.CANCELLED


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT
    assert classify_exception(Exception("Invalid API key")) is ErrorCode.AUTH
    assert classify_exception(Exception("connection refused")) is ErrorCode.UNAVAILABLE
    assert classify_exception(Exception("random")) is ErrorCode.FETCH_FAILED


def test_describe_exception_falls_back_to_class_name():
    assert describe_exception(RuntimeError("boom")) == "boom"
    assert describe_exception(ConnectionError()) == "ConnectionError"


@pytest.mark.parametrize(
    "cls, code",
    [
        (NotFoundError, ErrorCode.NOT_FOUND),
        (FetchError, ErrorCode.FETCH_FAILED),
        (PersistenceError, ErrorCode.PERSISTENCE),
        (InvalidIdentifierError, ErrorCode.VALIDATION),
    ],
)
def test_error_default_codes(cls, code):
    err = cls("msg", provider="p", model="m")
    assert isinstance(err, CatalogError)
    assert err.code is code
    assert str(err) == "msg"
    assert (err.provider, err.model) == ("p", "m")
