"""LlamaCppChat: GGUF models served in-process by llama.cpp.

The ``Llama`` object already returns OpenAI-shaped dictionaries from
``create_chat_completion``; they are validated into the runtime DTOs. A
streamed completion reports no usage, so when usage is requested the final
chunk carries counts from the model's own tokenizer (prompt text tokens and
one token per streamed content chunk).

Loading is eager: the weights are memory-mapped when the adapter is built.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, Optional

from ..base.adapter_base import BaseChatAdapter
from ..base.logging import LogContext, log_event
from ..base.models import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Usage,
)
from ..config.defaults import LOCAL_DEFAULT_CONTEXT_SIZE
from .generation import chat_messages, max_new_tokens, stop_list, wants_usage
from .runtime_imports import require_module

_PASSTHROUGH_FIELDS = (
    "temperature",
    "top_p",
    "seed",
    "presence_penalty",
    "frequency_penalty",
    "response_format",
    "tools",
    "tool_choice",
    "logit_bias",
    "logprobs",
    "top_logprobs",
)


class LlamaCppChat(BaseChatAdapter):
    """Adapter over a loaded ``llama_cpp.Llama`` instance."""

    provider_name = "llama_cpp"

    def __init__(self, model_id: str, llm: Any) -> None:
        super().__init__(model_id, "chat_runtime.local")
        self.llm = llm
        # llama.cpp contexts are not safe for concurrent evaluation.
        self._lock = threading.Lock()

    @classmethod
    def from_gguf(
        cls,
        weights_path: str,
        *,
        model_id: Optional[str] = None,
        chat_template: Optional[str] = None,
        n_ctx: int = LOCAL_DEFAULT_CONTEXT_SIZE,
    ) -> "LlamaCppChat":
        llama_cpp = require_module("llama_cpp")
        llm = llama_cpp.Llama(model_path=weights_path, n_ctx=n_ctx, verbose=False)
        if chat_template:
            llm.chat_handler = _template_handler(llm, chat_template)
        chat = cls(model_id or weights_path, llm)
        log_event(
            chat._logger,
            "model.load.gguf",
            LogContext(provider=cls.provider_name, model=chat.model_id),
            path=weights_path,
            n_ctx=n_ctx,
            chat_template=bool(chat_template),
        )
        return chat

    def _completion_kwargs(self, req: ChatCompletionRequest) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "messages": chat_messages(req),
            "max_tokens": max_new_tokens(req),
        }
        if stop := stop_list(req):
            kwargs["stop"] = stop
        for name in _PASSTHROUGH_FIELDS:
            value = getattr(req, name)
            if value is not None:
                kwargs[name] = value
        return kwargs

    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        kwargs = self._completion_kwargs(req)
        with self._lock:
            raw = self.llm.create_chat_completion(**kwargs)
        raw = dict(raw, model=self.model_id)
        return ChatCompletionResponse.model_validate(raw)

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        kwargs = self._completion_kwargs(req)
        prompt_tokens = self._count_tokens(" ".join(m["content"] for m in kwargs["messages"])) if wants_usage(req) else 0
        raw_stream = self.llm.create_chat_completion(stream=True, **kwargs)
        return self._iter_chunks(raw_stream, prompt_tokens, wants_usage(req))

    def _iter_chunks(self, raw_stream: Any, prompt_tokens: int, include_usage: bool) -> Iterator[ChatCompletionChunk]:
        completion_tokens = 0
        last_id: Optional[str] = None
        raw_iter = iter(raw_stream)
        try:
            while True:
                # Locked per step, released across yield.
                with self._lock:
                    raw = next(raw_iter, None)
                if raw is None:
                    break
                chunk = ChatCompletionChunk.model_validate(dict(raw, model=self.model_id))
                last_id = chunk.id
                if chunk.delta_text():
                    completion_tokens += 1
                yield chunk
        finally:
            close = getattr(raw_stream, "close", None)
            if callable(close):
                close()
        if include_usage:
            kwargs: Dict[str, Any] = {
                "model": self.model_id,
                "usage": Usage.from_counts(prompt_tokens, completion_tokens),
            }
            if last_id:
                kwargs["id"] = last_id
            yield ChatCompletionChunk(**kwargs)

    def _count_tokens(self, text: str) -> int:
        return len(self.llm.tokenize(text.encode("utf-8"), add_bos=False))


def _template_handler(llm: Any, chat_template: str) -> Any:
    """Build a llama.cpp chat handler from an inline Jinja2 template."""
    chat_format = require_module("llama_cpp.llama_chat_format")
    eos = llm.detokenize([llm.token_eos()]).decode("utf-8", errors="ignore")
    bos = llm.detokenize([llm.token_bos()]).decode("utf-8", errors="ignore")
    formatter = chat_format.Jinja2ChatFormatter(template=chat_template, eos_token=eos, bos_token=bos)
    return formatter.to_chat_handler()


__all__ = ["LlamaCppChat"]
