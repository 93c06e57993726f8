"""chat_runtime: OpenAI-shaped chat completions over hosted and local backends.

Public entry points:

- :func:`construct_model` / :func:`try_to_chat_model` turn a
  :class:`ModelDescriptor` into a :class:`ChatModel`.
- :class:`ModelStore` keeps loaded models by public name.
- :mod:`chat_runtime.service` serves a store over HTTP.
"""

from .base import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatModel,
    ChatModelError,
    ModelDescriptor,
)
from .runtime import ChatWrapper, ModelStore, construct_model, load_model, try_to_chat_model

__version__ = "0.1.0"

__all__ = [
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatModel",
    "ChatModelError",
    "ChatWrapper",
    "ModelDescriptor",
    "ModelStore",
    "__version__",
    "construct_model",
    "load_model",
    "try_to_chat_model",
]
