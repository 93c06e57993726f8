"""Error taxonomy and request-time classification."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from chat_runtime.base.errors import (
    ErrorCode,
    FailedToLoadModel,
    InvalidParamError,
    ModelSourceUnknown,
    UnsupportedTaskForModel,
    classify_exception,
)


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class _ResponseError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.response = SimpleNamespace(status_code=status)


def test_model_errors_carry_codes_and_messages() -> None:
    assert str(FailedToLoadModel("missing key")) == "Failed to load model: missing key"
    assert ModelSourceUnknown("x").code is ErrorCode.NOT_FOUND
    assert UnsupportedTaskForModel("spiceai", "llm").code is ErrorCode.UNSUPPORTED
    assert InvalidParamError("p", "Bad.").param == "p"


def test_model_errors_are_raisable() -> None:
    with pytest.raises(FailedToLoadModel, match="boom"):
        raise FailedToLoadModel("boom", model="m")


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (FailedToLoadModel("x"), ErrorCode.VALIDATION),
        (TimeoutError(), ErrorCode.TIMEOUT),
        (_StatusError("nope", 401), ErrorCode.AUTH),
        (_StatusError("slow down", 429), ErrorCode.RATE_LIMIT),
        (_ResponseError("gateway", 503), ErrorCode.UNAVAILABLE),
        (RuntimeError("Rate limit exceeded"), ErrorCode.RATE_LIMIT),
        (RuntimeError("request timed out"), ErrorCode.TIMEOUT),
        (RuntimeError("model does not exist"), ErrorCode.NOT_FOUND),
        (RuntimeError("something odd"), ErrorCode.UNKNOWN),
    ],
)
def test_classify_exception(exc, code) -> None:
    assert classify_exception(exc) is code
