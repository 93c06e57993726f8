"""
Chat runtime base package.

Exports backend-agnostic contracts, DTOs and the provider dispatcher:
- Interfaces: the ``ChatModel`` capability every adapter implements
- Models (DTOs): OpenAI-shaped requests, responses and stream chunks; model
  descriptors and secret parameters
- Errors: load-time taxonomy and request-time classification
- Factory: lazy construction of adapters from descriptors
"""

from .errors import (
    ChatModelError,
    ErrorCode,
    FailedToLoadModel,
    InvalidParamError,
    ModelSourceUnknown,
    UnsupportedTaskForModel,
    classify_exception,
)
from .factory import build_adapter, resolve_selector
from .interfaces import ChatModel, SqlGeneration
from .models import (
    BackendSelector,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    DefaultParameterList,
    ModelDescriptor,
    ModelFile,
    ModelFileType,
    SecretParameterMap,
    StreamOptions,
    Usage,
)

__all__ = [
    # Models
    "BackendSelector",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "DefaultParameterList",
    "ModelDescriptor",
    "ModelFile",
    "ModelFileType",
    "SecretParameterMap",
    "StreamOptions",
    "Usage",
    # Interfaces
    "ChatModel",
    "SqlGeneration",
    # Errors
    "ChatModelError",
    "ErrorCode",
    "FailedToLoadModel",
    "InvalidParamError",
    "ModelSourceUnknown",
    "UnsupportedTaskForModel",
    "classify_exception",
    # Factory
    "build_adapter",
    "resolve_selector",
]
