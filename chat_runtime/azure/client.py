"""Azure OpenAI adapter.

Uses ``openai.AzureOpenAI`` against the resource ``endpoint``. Exactly one
credential is configured: an API key or a Microsoft Entra ID token. The
deployment defaults to the model id, which is how Azure deployments are
usually named. The API version falls back to the layered config
(``AZURE_API_VERSION``), then to the pinned default.
"""

from __future__ import annotations

from typing import Callable, Optional

from openai import AzureOpenAI

from ..base.openai_style_parts import BaseOpenAIStyleChat, ChatCompletionsClient, OpenAIStyleInit
from ..config import get_provider_config

__all__ = ["AzureOpenAIChat"]


class AzureOpenAIChat(BaseOpenAIStyleChat):
    provider_name = "azure"

    def __init__(
        self,
        model_id: str,
        *,
        endpoint: str,
        api_version: Optional[str] = None,
        deployment_name: Optional[str] = None,
        api_key: Optional[str] = None,
        entra_token: Optional[str] = None,
        client_factory: Optional[Callable[[], ChatCompletionsClient]] = None,
    ) -> None:
        cfg = get_provider_config("azure", {"api_version": api_version})
        self.endpoint = endpoint
        self.api_version = cfg.get("api_version")
        self.deployment_name = deployment_name or model_id
        self._api_key = api_key
        self._entra_token = entra_token
        super().__init__(
            OpenAIStyleInit(
                model_id=model_id,
                logger_name="chat_runtime.azure",
                client_factory=client_factory,
            )
        )

    def _make_client(self) -> ChatCompletionsClient:
        if self._client_factory is not None:
            return self._client_factory()
        return AzureOpenAI(
            azure_endpoint=self.endpoint,
            api_version=self.api_version,
            azure_deployment=self.deployment_name,
            api_key=self._api_key,
            azure_ad_token=self._entra_token,
        )
