"""Request preparation applied by :class:`ChatWrapper` before every call.

The three steps always run in this order on a deep copy of the caller's
request:

1. :func:`with_system_prompt` inserts the configured system message first.
2. :func:`with_model_defaults` fills fields the caller left unset.
3. :func:`with_stream_usage` forces usage accounting on streamed requests.

Defaults are ``(field, value)`` pairs. Only the fields in
:data:`DEFAULTABLE_FIELDS` are honored; a value is validated against the
field's declared type and silently skipped (debug log) when it does not fit.
Caller-supplied values always win.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from ..base.logging import get_logger, log_event
from ..base.models import ChatCompletionRequest, ChatMessage, StreamOptions

_logger = get_logger("chat_runtime.runtime")

DEFAULTABLE_FIELDS = (
    "frequency_penalty",
    "logit_bias",
    "logprobs",
    "top_logprobs",
    "max_completion_tokens",
    "store",
    "metadata",
    "n",
    "presence_penalty",
    "response_format",
    "seed",
    "stop",
    "stream",
    "stream_options",
    "temperature",
    "top_p",
    "tools",
    "tool_choice",
    "parallel_tool_calls",
    "user",
)


@lru_cache(maxsize=None)
def _field_adapter(name: str) -> TypeAdapter:
    return TypeAdapter(ChatCompletionRequest.model_fields[name].annotation)


def with_system_prompt(req: ChatCompletionRequest, system_prompt: Optional[str]) -> ChatCompletionRequest:
    if system_prompt is not None:
        req.messages.insert(0, ChatMessage(role="system", content=system_prompt))
    return req


def with_model_defaults(req: ChatCompletionRequest, defaults: Sequence[Tuple[str, Any]]) -> ChatCompletionRequest:
    for name, value in defaults:
        if name not in DEFAULTABLE_FIELDS:
            log_event(_logger, "chat.defaults.ignored", level=logging.DEBUG, field=name, reason="unknown")
            continue
        if getattr(req, name) is not None:
            continue
        try:
            coerced = _field_adapter(name).validate_python(value)
        except ValidationError:
            log_event(_logger, "chat.defaults.ignored", level=logging.DEBUG, field=name, reason="invalid")
            continue
        setattr(req, name, coerced)
    return req


def with_stream_usage(req: ChatCompletionRequest) -> ChatCompletionRequest:
    if req.stream is True:
        if req.stream_options is None:
            req.stream_options = StreamOptions(include_usage=True)
        else:
            req.stream_options.include_usage = True
    return req


def prepare_request(
    req: ChatCompletionRequest,
    system_prompt: Optional[str],
    defaults: Sequence[Tuple[str, Any]],
) -> ChatCompletionRequest:
    """Return the prepared copy of ``req``; ``req`` itself is not modified."""
    prepared = req.model_copy(deep=True)
    prepared = with_system_prompt(prepared, system_prompt)
    prepared = with_model_defaults(prepared, defaults)
    return with_stream_usage(prepared)


__all__ = [
    "DEFAULTABLE_FIELDS",
    "prepare_request",
    "with_model_defaults",
    "with_stream_usage",
    "with_system_prompt",
]
