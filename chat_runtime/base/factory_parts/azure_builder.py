"""Builder for ``azure:`` sources.

Every failure message names the descriptor so a misconfigured model is easy
to find among many.
"""

from __future__ import annotations

from ..errors import FailedToLoadModel
from ..interfaces import ChatModel
from ..models import ModelDescriptor, SecretParameterMap


def build_azure(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    name = descriptor.name
    model_id = descriptor.get_model_id()
    if model_id is None:
        raise FailedToLoadModel(
            f"Azure model '{name}' requires a model ID in the format `from:azure:<model_id>`.",
            model=name,
        )
    endpoint = params.get_secret("endpoint")
    api_key = params.get_secret("azure_api_key")
    entra_token = params.get_secret("azure_entra_token")
    if endpoint is None:
        raise FailedToLoadModel(f"Azure model '{model_id}' requires the 'endpoint' parameter.", model=name)
    if api_key is not None and entra_token is not None:
        raise FailedToLoadModel(
            f"Azure model '{model_id}' allows only one of 'azure_api_key' or 'azure_entra_token'.",
            model=name,
        )
    if api_key is None and entra_token is None:
        raise FailedToLoadModel(
            f"Azure model '{model_id}' requires either 'azure_api_key' or 'azure_entra_token'.",
            model=name,
        )

    from ...azure import AzureOpenAIChat

    return AzureOpenAIChat(
        model_id,
        endpoint=endpoint,
        api_version=params.get_secret("azure_api_version"),
        deployment_name=params.get_secret("azure_deployment_name"),
        api_key=api_key,
        entra_token=entra_token,
    )


__all__ = ["build_azure"]
