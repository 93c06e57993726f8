"""OpenAI adapter built on BaseOpenAIStyleChat.

Credentials and routing (``api_key``, ``base_url``, organization and project)
come from the model's parameters; when the key is absent the SDK falls back to
``OPENAI_API_KEY``. The base URL falls back to the layered config
(``OPENAI_BASE_URL``). The SDK client is created on first use.
"""

from __future__ import annotations

from typing import Callable, Optional

from openai import OpenAI

from ..base.openai_style_parts import BaseOpenAIStyleChat, ChatCompletionsClient, OpenAIStyleInit
from ..config import get_provider_config
from ..config.defaults import OPENAI_DEFAULT_MODEL

__all__ = ["OpenAIChat"]


class OpenAIChat(BaseOpenAIStyleChat):
    """Chat adapter for the OpenAI Chat Completions API."""

    provider_name = "openai"

    def __init__(
        self,
        model_id: Optional[str] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        org_id: Optional[str] = None,
        project_id: Optional[str] = None,
        client_factory: Optional[Callable[[], ChatCompletionsClient]] = None,
    ) -> None:
        cfg = get_provider_config("openai", {"base_url": base_url})
        self._api_key = api_key
        self._base_url = cfg.get("base_url")
        self._org_id = org_id
        self._project_id = project_id
        super().__init__(
            OpenAIStyleInit(
                model_id=model_id or cfg.get("model") or OPENAI_DEFAULT_MODEL,
                logger_name="chat_runtime.openai",
                client_factory=client_factory,
            )
        )

    def _make_client(self) -> ChatCompletionsClient:
        if self._client_factory is not None:
            return self._client_factory()
        return OpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            organization=self._org_id,
            project=self._project_id,
        )
