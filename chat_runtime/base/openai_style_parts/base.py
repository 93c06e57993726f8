"""BaseOpenAIStyleChat: reusable adapter for OpenAI-compatible APIs.

Purpose:
- Share the request/stream plumbing between every backend that speaks the
  Chat Completions API (OpenAI, Azure OpenAI, xAI).

External dependencies:
- The SDK client is supplied by the concrete subclass (``_make_client``) or by
  an injected factory. It is built lazily, once, on the first call, so
  constructing an adapter never performs network I/O.

Error semantics:
- SDK exceptions propagate unchanged. ``chat_stream`` raises start-phase
  errors from the call itself; mid-stream errors surface while iterating.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, Optional

from ..adapter_base import BaseChatAdapter
from ..interfaces import SqlGeneration
from ..logging import LogContext, log_event
from ..models import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse
from .adapter_init import OpenAIStyleInit
from .client_protocol import ChatCompletionsClient
from .conversions import to_chunk, to_response
from .sql import JsonSchemaSqlGeneration


class BaseOpenAIStyleChat(BaseChatAdapter):
    """Reusable base class for OpenAI-compatible adapters.

    Subclasses set ``provider_name`` and implement ``_make_client()`` unless a
    ``client_factory`` is passed through :class:`OpenAIStyleInit`.
    """

    provider_name = "openai_style"

    def __init__(self, init: OpenAIStyleInit) -> None:
        super().__init__(init.model_id, init.logger_name)
        self._client_factory = init.client_factory
        self._client: Optional[ChatCompletionsClient] = None
        self._client_lock = threading.Lock()
        self._sql: Optional[SqlGeneration] = JsonSchemaSqlGeneration() if init.sql_generation else None

    # ----- Client -----
    def _make_client(self) -> ChatCompletionsClient:
        """Create the underlying SDK client."""
        if self._client_factory is None:  # pragma: no cover - abstract
            raise NotImplementedError(f"{type(self).__name__} must implement _make_client")
        return self._client_factory()

    def client(self) -> ChatCompletionsClient:
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = self._make_client()
        return self._client

    # ----- Chat -----
    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        params = self._build_params(req, stream=False)
        self._log_start("chat.start", params)
        raw = self.client().chat.completions.create(**params)
        return to_response(raw)

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        params = self._build_params(req, stream=True)
        self._log_start("stream.start", params)
        raw_stream = self.client().chat.completions.create(**params)
        return self._iter_chunks(raw_stream)

    def as_sql(self) -> Optional[SqlGeneration]:
        return self._sql

    # ----- helpers -----
    def _build_params(self, req: ChatCompletionRequest, *, stream: bool) -> Dict[str, Any]:
        """Return SDK kwargs for ``req`` addressed to this adapter's model."""
        params = req.to_params()
        params["model"] = self.model_id
        params["stream"] = stream
        if not stream:
            params.pop("stream_options", None)
        return params

    def _log_start(self, event: str, params: Dict[str, Any]) -> None:
        log_event(
            self._logger,
            event,
            LogContext(provider=self.provider_name, model=self.model_id),
            messages=len(params.get("messages") or ()),
            temperature=params.get("temperature"),
            max_tokens=params.get("max_tokens") or params.get("max_completion_tokens"),
            has_tools=bool(params.get("tools")),
        )

    @staticmethod
    def _iter_chunks(raw_stream: Any) -> Iterator[ChatCompletionChunk]:
        try:
            for raw in raw_stream:
                yield to_chunk(raw)
        finally:
            close = getattr(raw_stream, "close", None)
            if callable(close):
                close()


__all__ = ["BaseOpenAIStyleChat"]
