"""Anthropic streaming helpers.

Translates the raw Messages API event stream (``messages.create(stream=True)``)
into ``ChatCompletionChunk`` objects:

- ``message_start`` records the message id and input token count.
- ``content_block_delta`` with ``text_delta`` yields a text chunk;
  ``input_json_delta`` yields a tool-call argument chunk.
- ``content_block_start`` for ``tool_use`` yields the tool-call header chunk.
- ``message_delta`` yields the finish-reason chunk and records output tokens.
- After the stream ends, one usage-only chunk is yielded when requested.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

from ..base.models import ChatCompletionChunk, ChunkChoice, ChunkDelta, Usage
from .helpers import map_stop_reason


def _chunk(message_id: Optional[str], model: str, delta: ChunkDelta, finish_reason: Optional[str] = None) -> ChatCompletionChunk:
    kwargs: Dict[str, Any] = {
        "model": model,
        "choices": [ChunkChoice(index=0, delta=delta, finish_reason=finish_reason)],
    }
    if message_id:
        kwargs["id"] = message_id
    return ChatCompletionChunk(**kwargs)


def iterate_events(events: Any, model: str, include_usage: bool) -> Iterator[ChatCompletionChunk]:
    """Yield chunks for ``events``; the event stream is closed on exit."""
    message_id: Optional[str] = None
    input_tokens = 0
    output_tokens = 0
    tool_index = -1
    try:
        for event in events:
            event_type = getattr(event, "type", None)
            if event_type == "message_start":
                message = getattr(event, "message", None)
                message_id = getattr(message, "id", None)
                usage = getattr(message, "usage", None)
                input_tokens = int(getattr(usage, "input_tokens", 0) or 0)
                yield _chunk(message_id, model, ChunkDelta(role="assistant"))
            elif event_type == "content_block_start":
                block = getattr(event, "content_block", None)
                if getattr(block, "type", None) == "tool_use":
                    tool_index += 1
                    call = {
                        "index": tool_index,
                        "id": getattr(block, "id", None),
                        "type": "function",
                        "function": {"name": getattr(block, "name", None), "arguments": ""},
                    }
                    yield _chunk(message_id, model, ChunkDelta(tool_calls=[call]))
            elif event_type == "content_block_delta":
                delta = getattr(event, "delta", None)
                delta_type = getattr(delta, "type", None)
                if delta_type == "text_delta":
                    yield _chunk(message_id, model, ChunkDelta(content=getattr(delta, "text", "")))
                elif delta_type == "input_json_delta":
                    call = {"index": max(tool_index, 0), "function": {"arguments": getattr(delta, "partial_json", "")}}
                    yield _chunk(message_id, model, ChunkDelta(tool_calls=[call]))
            elif event_type == "message_delta":
                usage = getattr(event, "usage", None)
                output_tokens = int(getattr(usage, "output_tokens", 0) or 0)
                stop_reason = getattr(getattr(event, "delta", None), "stop_reason", None)
                yield _chunk(message_id, model, ChunkDelta(), map_stop_reason(stop_reason))
    finally:
        close = getattr(events, "close", None)
        if callable(close):
            close()
    if include_usage:
        kwargs: Dict[str, Any] = {"model": model, "choices": [], "usage": Usage.from_counts(input_tokens, output_tokens)}
        if message_id:
            kwargs["id"] = message_id
        yield ChatCompletionChunk(**kwargs)


__all__ = ["iterate_events"]
