"""Anthropic translation helpers, streaming and adapter wiring."""

from __future__ import annotations

import json
from types import SimpleNamespace

from chat_runtime.anthropic import AnthropicChat
from chat_runtime.anthropic.helpers import build_params, map_stop_reason, split_messages, to_response
from chat_runtime.anthropic.stream_helpers import iterate_events
from chat_runtime.base.models import ChatCompletionRequest, ChatMessage
from chat_runtime.tests.utils import ClosableStream, anthropic_events, user_request


def test_split_messages_lifts_system_and_merges_turns() -> None:
    system, turns = split_messages(
        [
            ChatMessage(role="system", content="rule one"),
            ChatMessage(role="developer", content="rule two"),
            ChatMessage(role="user", content="a"),
            ChatMessage(role="user", content="b"),
            ChatMessage(role="assistant", content="c"),
        ]
    )
    assert system == "rule one\n\nrule two"
    assert [t["role"] for t in turns] == ["user", "assistant"]
    assert [b["text"] for b in turns[0]["content"]] == ["a", "b"]


def test_tool_round_trip_messages() -> None:
    _, turns = split_messages(
        [
            ChatMessage(role="user", content="weather?"),
            ChatMessage(
                role="assistant",
                tool_calls=[{"id": "call_1", "type": "function", "function": {"name": "weather", "arguments": '{"city": "Oslo"}'}}],
            ),
            ChatMessage(role="tool", tool_call_id="call_1", content="rainy"),
        ]
    )
    assert turns[1]["content"] == [{"type": "tool_use", "id": "call_1", "name": "weather", "input": {"city": "Oslo"}}]
    assert turns[2] == {
        "role": "user",
        "content": [{"type": "tool_result", "tool_use_id": "call_1", "content": "rainy"}],
    }


def test_build_params_maps_openai_fields() -> None:
    req = ChatCompletionRequest(
        model="public",
        messages=[{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}],
        stop="END",
        user="u-1",
        temperature=0.5,
        tools=[{"type": "function", "function": {"name": "lookup", "parameters": {"type": "object"}}}],
        tool_choice="required",
    )
    params = build_params("claude-3-5-haiku-latest", req, 4096)
    assert params["model"] == "claude-3-5-haiku-latest"
    assert params["system"] == "sys"
    assert params["max_tokens"] == 4096
    assert params["stop_sequences"] == ["END"]
    assert params["metadata"] == {"user_id": "u-1"}
    assert params["tools"][0]["name"] == "lookup"
    assert params["tool_choice"] == {"type": "any"}


def test_max_tokens_prefers_request_values() -> None:
    assert build_params("c", user_request(max_tokens=10), 4096)["max_tokens"] == 10
    assert build_params("c", user_request(max_completion_tokens=20), 4096)["max_tokens"] == 20


def test_to_response_collects_text_and_tool_use() -> None:
    raw = SimpleNamespace(
        id="msg_1",
        content=[
            SimpleNamespace(type="text", text="Let me check."),
            SimpleNamespace(type="tool_use", id="tu_1", name="weather", input={"city": "Oslo"}),
        ],
        stop_reason="tool_use",
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
    )
    resp = to_response(raw, "claude-3-5-haiku-latest")
    assert resp.id == "msg_1"
    choice = resp.choices[0]
    assert choice.finish_reason == "tool_calls"
    assert choice.message.content == "Let me check."
    assert json.loads(choice.message.tool_calls[0]["function"]["arguments"]) == {"city": "Oslo"}
    assert resp.usage.total_tokens == 15


def test_stop_reason_mapping() -> None:
    assert map_stop_reason("end_turn") == "stop"
    assert map_stop_reason("max_tokens") == "length"
    assert map_stop_reason("pause_turn") == "pause_turn"
    assert map_stop_reason(None) is None


def test_iterate_events_yields_text_finish_and_usage() -> None:
    events = ClosableStream(anthropic_events(["Hel", "lo"], input_tokens=7, output_tokens=4))
    chunks = list(iterate_events(events, "claude-x", include_usage=True))

    assert chunks[0].choices[0].delta.role == "assistant"
    assert "".join(c.delta_text() or "" for c in chunks) == "Hello"
    assert chunks[-2].choices[0].finish_reason == "stop"
    assert chunks[-1].choices == []
    assert chunks[-1].usage.prompt_tokens == 7
    assert chunks[-1].usage.completion_tokens == 4
    assert {c.id for c in chunks} == {"msg_01"}
    assert events.closed is True


def test_iterate_events_without_usage() -> None:
    chunks = list(iterate_events(anthropic_events(["x"]), "claude-x", include_usage=False))
    assert all(c.usage is None for c in chunks)


def test_adapter_uses_messages_api() -> None:
    calls = []
    message = SimpleNamespace(
        id="msg_2",
        content=[SimpleNamespace(type="text", text="hi back")],
        stop_reason="end_turn",
        usage=SimpleNamespace(input_tokens=1, output_tokens=2),
    )

    def create(**params):
        calls.append(params)
        if params.get("stream"):
            return ClosableStream(anthropic_events(["s"]))
        return message

    client = SimpleNamespace(messages=SimpleNamespace(create=create))
    chat = AnthropicChat("claude-3-5-haiku-latest", api_key="k", client_factory=lambda: client)

    assert chat.run("hi") == "hi back"
    assert calls[0]["max_tokens"] == 4096
    assert list(chat.stream("hi")) == [None, "s", None]
    assert calls[1]["stream"] is True
