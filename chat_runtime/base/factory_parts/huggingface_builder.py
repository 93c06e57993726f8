"""Builder for ``huggingface:`` / ``hf:`` sources.

The loader functions are looked up on their module at call time so they can
be replaced (tests, embedding applications) without touching this builder.
"""

from __future__ import annotations

from importlib import import_module
from typing import Optional

from ..errors import FailedToLoadModel
from ..interfaces import ChatModel
from ..logging import LogContext, get_logger, log_event
from ..models import ModelDescriptor, ModelFileType, SecretParameterMap

LOADERS_MODULE = "chat_runtime.huggingface.loaders"

_logger = get_logger("chat_runtime.factory")


def first_gguf_path(descriptor: ModelDescriptor) -> Optional[str]:
    """Return the first declared weights path with a ``.gguf`` extension."""
    for path in descriptor.find_all_file_path(ModelFileType.WEIGHTS):
        if path.lower().endswith(".gguf"):
            return path
    return None


def build_huggingface(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    model_id = descriptor.get_model_id()
    if model_id is None:
        raise FailedToLoadModel("No model id for Huggingface model")
    model_type = params.get_secret("model_type")
    hf_token = params.get_secret("hf_token")
    loaders = import_module(LOADERS_MODULE)

    gguf_path = first_gguf_path(descriptor)
    if gguf_path is not None:
        log_event(
            _logger,
            "model.load.gguf_selected",
            LogContext(provider="huggingface", model=model_id, public_name=descriptor.name),
            path=gguf_path,
        )
        return loaders.create_hf_with_gguf(model_id, gguf_path, hf_token)
    return loaders.create_hf_model(model_id, model_type, hf_token)


__all__ = ["build_huggingface", "first_gguf_path"]
