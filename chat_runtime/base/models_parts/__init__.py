"""Domain model parts (one cohesive group of DTOs per module)."""

from .chat_request import ChatCompletionRequest, ChatMessage, MessageRole, StreamOptions
from .chat_response import (
    ChatCompletionChunk,
    ChatCompletionResponse,
    Choice,
    ChunkChoice,
    ChunkDelta,
    Usage,
)
from .model_descriptor import (
    BackendSelector,
    ModelDescriptor,
    ModelFile,
    ModelFileType,
    infer_file_type,
)
from .secrets import SecretParameterMap

__all__ = [
    "ChatCompletionRequest",
    "ChatMessage",
    "MessageRole",
    "StreamOptions",
    "ChatCompletionChunk",
    "ChatCompletionResponse",
    "Choice",
    "ChunkChoice",
    "ChunkDelta",
    "Usage",
    "BackendSelector",
    "ModelDescriptor",
    "ModelFile",
    "ModelFileType",
    "infer_file_type",
    "SecretParameterMap",
]
