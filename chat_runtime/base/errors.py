"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chat_runtime.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    ChatModelError,
    ErrorCode,
    FailedToLoadModel,
    InvalidParamError,
    ModelSourceUnknown,
    UnsupportedTaskForModel,
    classify_exception,
)

__all__ = [
    "ErrorCode",
    "ChatModelError",
    "FailedToLoadModel",
    "InvalidParamError",
    "ModelSourceUnknown",
    "UnsupportedTaskForModel",
    "classify_exception",
]
