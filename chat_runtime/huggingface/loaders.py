"""Loaders for models declared with a ``huggingface:`` source.

A GGUF file listed in the descriptor is fetched from the Hub repository with
``hf_hub_download`` (cached locally) and served by llama.cpp. Without one, the
repository is loaded as a transformers checkpoint.
"""

from __future__ import annotations

from typing import Optional

from ..base.interfaces import ChatModel
from ..base.logging import LogContext, get_logger, log_event
from ..local.llama_cpp_chat import LlamaCppChat
from ..local.runtime_imports import require_module
from ..local.transformers_chat import TransformersChat

_logger = get_logger("chat_runtime.huggingface")


def create_hf_with_gguf(model_id: str, gguf_path: str, hf_token: Optional[str] = None) -> ChatModel:
    """Download ``gguf_path`` from the ``model_id`` repository and load it."""
    hub = require_module("huggingface_hub")
    log_event(_logger, "model.load.download", LogContext(provider="huggingface", model=model_id), filename=gguf_path)
    local_path = hub.hf_hub_download(repo_id=model_id, filename=gguf_path, token=hf_token)
    return LlamaCppChat.from_gguf(local_path, model_id=model_id)


def create_hf_model(model_id: str, model_type: Optional[str] = None, hf_token: Optional[str] = None) -> ChatModel:
    """Load a Hub checkpoint with transformers."""
    return TransformersChat.from_pretrained(model_id, model_type=model_type, token=hf_token)


__all__ = ["create_hf_model", "create_hf_with_gguf"]
