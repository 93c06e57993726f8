"""AnthropicChat adapter.

Implements the ``ChatModel`` capability on top of the Anthropic Messages API
(``anthropic.Anthropic().messages.create``). Requests and responses are
translated by :mod:`chat_runtime.anthropic.helpers`; streams by
:mod:`chat_runtime.anthropic.stream_helpers`.

Authentication uses an API key (``x-api-key``) or an OAuth bearer token
(``auth_token``); at least one is required by the dispatcher. A custom
``base_url`` supports proxies and compatible gateways. The SDK client is
created on first use.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterator, Optional

import anthropic

from ..base.adapter_base import BaseChatAdapter
from ..base.logging import LogContext, log_event
from ..base.models import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse
from ..config import get_provider_config
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS, ANTHROPIC_DEFAULT_MODEL
from .helpers import build_params, to_response
from .stream_helpers import iterate_events


class AnthropicChat(BaseChatAdapter):
    """Adapter for Anthropic chat models."""

    provider_name = "anthropic"

    def __init__(
        self,
        model_id: Optional[str] = None,
        *,
        api_key: Optional[str] = None,
        auth_token: Optional[str] = None,
        base_url: Optional[str] = None,
        client_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        cfg = get_provider_config("anthropic", {"base_url": base_url})
        super().__init__(model_id or cfg.get("model") or ANTHROPIC_DEFAULT_MODEL, "chat_runtime.anthropic")
        self._api_key = api_key
        self._auth_token = auth_token
        self._base_url = cfg.get("base_url")
        self._max_tokens = int(cfg.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS)
        self._client_factory = client_factory
        self._client: Any = None
        self._client_lock = threading.Lock()

    def _create_client(self) -> Any:
        """Instantiate the Anthropic SDK client."""
        if self._client_factory is not None:
            return self._client_factory()
        return anthropic.Anthropic(
            api_key=self._api_key,
            auth_token=self._auth_token,
            base_url=self._base_url,
        )

    def client(self) -> Any:
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        params = build_params(self.model_id, req, self._max_tokens)
        self._log_start("chat.start", params)
        raw = self.client().messages.create(**params)
        return to_response(raw, self.model_id)

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        params = build_params(self.model_id, req, self._max_tokens)
        self._log_start("stream.start", params)
        events = self.client().messages.create(stream=True, **params)
        include_usage = bool(req.stream_options and req.stream_options.include_usage)
        return iterate_events(events, self.model_id, include_usage)

    def _log_start(self, event: str, params: dict) -> None:
        log_event(
            self._logger,
            event,
            LogContext(provider=self.provider_name, model=self.model_id),
            messages=len(params["messages"]),
            max_tokens=params["max_tokens"],
            temperature=params.get("temperature"),
            has_system=bool(params.get("system")),
            has_tools=bool(params.get("tools")),
        )


__all__ = ["AnthropicChat"]
