"""Test doubles shared across the chat runtime tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional

from chat_runtime.base.adapter_base import BaseChatAdapter
from chat_runtime.base.models import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    ChunkChoice,
    ChunkDelta,
    Usage,
)


class FakeChat(BaseChatAdapter):
    """Scripted adapter recording every request it receives."""

    provider_name = "fake"

    def __init__(
        self,
        model_id: str = "fake-model",
        *,
        reply: str = "hello",
        deltas: Optional[List[str]] = None,
        fail_on_start: Optional[Exception] = None,
        fail_mid_stream: Optional[Exception] = None,
        usage: Usage = Usage.from_counts(3, 2),
    ) -> None:
        super().__init__(model_id)
        self.reply = reply
        self.deltas = deltas if deltas is not None else ["hel", "lo"]
        self.fail_on_start = fail_on_start
        self.fail_mid_stream = fail_mid_stream
        self.usage = usage
        self.requests: List[ChatCompletionRequest] = []
        self.stream_closed = False

    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        self.requests.append(req)
        if self.fail_on_start is not None:
            raise self.fail_on_start
        return ChatCompletionResponse(
            model=self.model_id,
            choices=[Choice(message=ChatMessage(role="assistant", content=self.reply), finish_reason="stop")],
            usage=self.usage,
        )

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        self.requests.append(req)
        if self.fail_on_start is not None:
            raise self.fail_on_start
        include_usage = bool(req.stream_options and req.stream_options.include_usage)
        return self._chunks(include_usage)

    def _chunks(self, include_usage: bool) -> Iterator[ChatCompletionChunk]:
        try:
            for text in self.deltas:
                yield ChatCompletionChunk(
                    model=self.model_id,
                    choices=[ChunkChoice(delta=ChunkDelta(content=text))],
                )
            if self.fail_mid_stream is not None:
                raise self.fail_mid_stream
            yield ChatCompletionChunk(
                model=self.model_id,
                choices=[ChunkChoice(delta=ChunkDelta(), finish_reason="stop")],
            )
            if include_usage:
                yield ChatCompletionChunk(model=self.model_id, usage=self.usage)
        finally:
            self.stream_closed = True


class ClosableStream:
    """Iterable over raw payloads that records ``close()``."""

    def __init__(self, items: List[Any]) -> None:
        self._items = list(items)
        self.closed = False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def close(self) -> None:
        self.closed = True


class FakeCompletions:
    def __init__(self, response: Any = None, stream_items: Optional[List[Any]] = None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.response = response
        self.stream_items = stream_items or []
        self.last_stream: Optional[ClosableStream] = None

    def create(self, **params: Any) -> Any:
        self.calls.append(params)
        if params.get("stream"):
            self.last_stream = ClosableStream(self.stream_items)
            return self.last_stream
        return self.response


class FakeOpenAIClient:
    """Minimal stand-in for ``openai.OpenAI`` (``client.chat.completions``)."""

    def __init__(self, response: Any = None, stream_items: Optional[List[Any]] = None) -> None:
        self.completions = FakeCompletions(response, stream_items)
        self.chat = SimpleNamespace(completions=self.completions)


def openai_response(text: str = "pong", model: str = "gpt-4o-mini") -> Dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 1, "total_tokens": 6},
    }


def openai_chunk(content: Optional[str] = None, *, usage: Optional[Dict[str, int]] = None, model: str = "gpt-4o-mini") -> Dict[str, Any]:
    chunk: Dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": model,
        "choices": [] if usage else [{"index": 0, "delta": {"content": content}}],
    }
    if usage:
        chunk["usage"] = usage
    return chunk


def anthropic_events(text_parts: List[str], *, input_tokens: int = 7, output_tokens: int = 4) -> List[SimpleNamespace]:
    """Build a Messages API event sequence for a plain text answer."""
    events = [
        SimpleNamespace(
            type="message_start",
            message=SimpleNamespace(id="msg_01", usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=1)),
        ),
        SimpleNamespace(type="content_block_start", index=0, content_block=SimpleNamespace(type="text", text="")),
    ]
    for part in text_parts:
        events.append(
            SimpleNamespace(type="content_block_delta", index=0, delta=SimpleNamespace(type="text_delta", text=part))
        )
    events.append(SimpleNamespace(type="content_block_stop", index=0))
    events.append(
        SimpleNamespace(
            type="message_delta",
            delta=SimpleNamespace(stop_reason="end_turn"),
            usage=SimpleNamespace(output_tokens=output_tokens),
        )
    )
    events.append(SimpleNamespace(type="message_stop"))
    return events


def user_request(text: str = "hi", **fields: Any) -> ChatCompletionRequest:
    return ChatCompletionRequest(model="public", messages=[ChatMessage(role="user", content=text)], **fields)
