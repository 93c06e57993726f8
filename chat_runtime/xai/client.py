"""xAI adapter.

xAI serves an OpenAI-compatible API, so the adapter is the shared
``BaseOpenAIStyleChat`` pointed at the xAI base URL with the stock ``openai``
client.
"""

from __future__ import annotations

from typing import Callable, Optional

from openai import OpenAI

from ..base.openai_style_parts import BaseOpenAIStyleChat, ChatCompletionsClient, OpenAIStyleInit
from ..config import get_provider_config
from ..config.defaults import XAI_DEFAULT_BASE_URL, XAI_DEFAULT_MODEL


class XaiChat(BaseOpenAIStyleChat):
    provider_name = "xai"

    def __init__(
        self,
        model_id: Optional[str] = None,
        *,
        api_key: str,
        base_url: Optional[str] = None,
        client_factory: Optional[Callable[[], ChatCompletionsClient]] = None,
    ) -> None:
        cfg = get_provider_config("xai", {"base_url": base_url})
        self._api_key = api_key
        self._base_url = cfg.get("base_url") or XAI_DEFAULT_BASE_URL
        super().__init__(
            OpenAIStyleInit(
                model_id=model_id or cfg.get("model") or XAI_DEFAULT_MODEL,
                logger_name="chat_runtime.xai",
                client_factory=client_factory,
            )
        )

    def _make_client(self) -> ChatCompletionsClient:
        if self._client_factory is not None:
            return self._client_factory()
        return OpenAI(api_key=self._api_key, base_url=self._base_url)


__all__ = ["XaiChat"]
