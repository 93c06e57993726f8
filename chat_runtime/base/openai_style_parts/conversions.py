"""Conversion of OpenAI SDK objects into runtime DTOs.

SDK responses are pydantic models (``model_dump``); fakes and other
OpenAI-compatible clients may return plain dictionaries. Both normalize to
``ChatCompletionResponse`` / ``ChatCompletionChunk`` via ``model_validate``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import ChatCompletionChunk, ChatCompletionResponse


def as_plain_dict(obj: Any) -> Dict[str, Any]:
    if isinstance(obj, dict):
        return obj
    dump = getattr(obj, "model_dump", None)
    if callable(dump):
        return dump(exclude_none=True)
    raise TypeError(f"Unsupported completion payload: {type(obj).__name__}")


def to_response(raw: Any) -> ChatCompletionResponse:
    data = as_plain_dict(raw)
    # Some compatible servers omit the message on empty choices.
    for choice in data.get("choices") or []:
        choice.setdefault("message", {"role": "assistant"})
    return ChatCompletionResponse.model_validate(data)


def to_chunk(raw: Any) -> ChatCompletionChunk:
    return ChatCompletionChunk.model_validate(as_plain_dict(raw))


__all__ = ["as_plain_dict", "to_response", "to_chunk"]
