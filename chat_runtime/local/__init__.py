"""Local inference adapters (llama.cpp for GGUF, transformers otherwise)."""

from .llama_cpp_chat import LlamaCppChat
from .loaders import create_local_model, is_gguf
from .transformers_chat import TransformersChat

__all__ = ["LlamaCppChat", "TransformersChat", "create_local_model", "is_gguf"]
