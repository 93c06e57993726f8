"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chat_runtime.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .model_error import (
    ChatModelError,
    FailedToLoadModel,
    InvalidParamError,
    ModelSourceUnknown,
    UnsupportedTaskForModel,
)
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "ChatModelError",
    "FailedToLoadModel",
    "InvalidParamError",
    "ModelSourceUnknown",
    "UnsupportedTaskForModel",
    "classify_exception",
]
