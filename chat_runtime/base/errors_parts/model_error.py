"""
Structured model construction errors.

Model registration fails terminally (no retry) with one of the exceptions in
this module. Each carries a normalized `ErrorCode` so structured logs and the
HTTP surface can classify the failure without string matching.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ChatModelError(Exception):
    """Base class for errors raised while turning a descriptor into a chat model.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        model: Optional model name associated with the failure.
    """

    code: ErrorCode
    message: str
    model: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ModelSourceUnknown(ChatModelError):
    """The descriptor's source prefix does not name a known backend."""

    def __init__(self, source: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Unknown model source: {source}",
        )
        self.source = source


class UnsupportedTaskForModel(ChatModelError):
    """The backend is recognized but cannot serve the requested task."""

    def __init__(self, source: str, task: str) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED,
            message=f"Model source '{source}' does not support the '{task}' task",
        )
        self.source = source
        self.task = task


class FailedToLoadModel(ChatModelError):
    """A required parameter is missing/invalid or the adapter failed to build."""

    def __init__(self, reason: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"Failed to load model: {reason}",
            model=model,
        )
        self.reason = reason


class InvalidParamError(ChatModelError):
    """A user supplied override could not be accepted."""

    def __init__(self, param: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"Invalid value for parameter '{param}'. {reason}",
        )
        self.param = param
        self.reason = reason


__all__ = [
    "ChatModelError",
    "ModelSourceUnknown",
    "UnsupportedTaskForModel",
    "FailedToLoadModel",
    "InvalidParamError",
]
