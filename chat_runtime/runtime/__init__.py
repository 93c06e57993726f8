"""Runtime layer: request policy, model construction and registration."""

from .chat_wrapper import ChatWrapper
from .model_store import ModelStore, load_model
from .request_prep import DEFAULTABLE_FIELDS, prepare_request
from .tool_gate import (
    ToolOrchestrator,
    ToolsMode,
    ToolsOptions,
    construct_model,
    try_to_chat_model,
)

__all__ = [
    "ChatWrapper",
    "DEFAULTABLE_FIELDS",
    "ModelStore",
    "ToolOrchestrator",
    "ToolsMode",
    "ToolsOptions",
    "construct_model",
    "load_model",
    "prepare_request",
    "try_to_chat_model",
]
