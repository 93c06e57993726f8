"""Builder for ``xai:`` sources."""

from __future__ import annotations

from ..errors import FailedToLoadModel
from ..interfaces import ChatModel
from ..models import ModelDescriptor, SecretParameterMap


def build_xai(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    api_key = params.get_secret("xai_api_key")
    if api_key is None:
        raise FailedToLoadModel("No `xai_api_key` provided for xAI model.")

    from ...xai import XaiChat

    return XaiChat(descriptor.get_model_id(), api_key=api_key)


__all__ = ["build_xai"]
