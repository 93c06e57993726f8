"""Builder for ``anthropic:`` sources."""

from __future__ import annotations

from ..errors import FailedToLoadModel
from ..interfaces import ChatModel
from ..models import ModelDescriptor, SecretParameterMap


def build_anthropic(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    api_key = params.get_secret("anthropic_api_key")
    auth_token = params.get_secret("anthropic_auth_token")
    if api_key is None and auth_token is None:
        raise FailedToLoadModel(
            "One of following `model.params` is required: `anthropic_api_key` or `anthropic_auth_token`."
        )

    from ...anthropic import AnthropicChat, is_known_model

    model_id = descriptor.get_model_id()
    if model_id is not None and not is_known_model(model_id):
        raise FailedToLoadModel(f"Unknown anthropic model: {model_id!r}", model=descriptor.name)
    return AnthropicChat(
        model_id,
        api_key=api_key,
        auth_token=auth_token,
        base_url=params.get_secret("endpoint"),
    )


__all__ = ["build_anthropic"]
