"""
Domain models (DTOs) public surface.

This module re-exports the implementations under
``chat_runtime.base.models_parts`` to keep imports stable.
"""

from typing import Any, List, Tuple

from .models_parts import (
    BackendSelector,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    ChunkChoice,
    ChunkDelta,
    MessageRole,
    ModelDescriptor,
    ModelFile,
    ModelFileType,
    SecretParameterMap,
    StreamOptions,
    Usage,
    infer_file_type,
)

# Ordered (field, value) defaults applied to unset request fields.
DefaultParameterList = List[Tuple[str, Any]]

__all__ = [
    "BackendSelector",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "Choice",
    "ChunkChoice",
    "ChunkDelta",
    "DefaultParameterList",
    "MessageRole",
    "ModelDescriptor",
    "ModelFile",
    "ModelFileType",
    "SecretParameterMap",
    "StreamOptions",
    "Usage",
    "infer_file_type",
]
