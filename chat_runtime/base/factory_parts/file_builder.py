"""Builder for ``file:`` sources."""

from __future__ import annotations

from importlib import import_module

from ..errors import FailedToLoadModel
from ..interfaces import ChatModel
from ..models import ModelDescriptor, ModelFileType, SecretParameterMap

LOADERS_MODULE = "chat_runtime.local.loaders"


def build_file(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    weights = descriptor.find_all_file_path(ModelFileType.WEIGHTS)
    if not weights:
        raise FailedToLoadModel("No 'weights_path' parameter provided")
    loaders = import_module(LOADERS_MODULE)
    return loaders.create_local_model(
        weights,
        descriptor.find_any_file_path(ModelFileType.CONFIG),
        descriptor.find_any_file_path(ModelFileType.TOKENIZER),
        descriptor.find_any_file_path(ModelFileType.TOKENIZER_CONFIG),
        params.get_secret("chat_template"),
    )


__all__ = ["build_file"]
