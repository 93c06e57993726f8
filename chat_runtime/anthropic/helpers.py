"""Anthropic request/response translation helpers.

Purpose:
- Translate OpenAI-shaped ``ChatCompletionRequest`` objects into Messages API
  parameters and Messages API responses back into ``ChatCompletionResponse``.
  Kept free of SDK imports so the translation is testable with plain objects.

Translation rules:
- ``system``/``developer`` messages are lifted into the top-level ``system``
  string (joined by blank lines, in order).
- ``tool`` messages become ``tool_result`` blocks in a user turn; assistant
  ``tool_calls`` become ``tool_use`` blocks.
- ``stop`` maps to ``stop_sequences``; ``user`` maps to ``metadata.user_id``.
- ``max_tokens`` is required by the API: ``max_completion_tokens`` or the
  configured default is used when ``max_tokens`` is unset.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from ..base.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    Usage,
)

STOP_REASON_MAP = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
    "tool_use": "tool_calls",
}


def map_stop_reason(reason: Optional[str]) -> Optional[str]:
    if reason is None:
        return None
    return STOP_REASON_MAP.get(reason, reason)


def _content_blocks(message: ChatMessage) -> List[Dict[str, Any]]:
    if message.content is None:
        return []
    if isinstance(message.content, str):
        return [{"type": "text", "text": message.content}] if message.content else []
    blocks: List[Dict[str, Any]] = []
    for part in message.content:
        if part.get("type") == "text":
            blocks.append({"type": "text", "text": str(part.get("text", ""))})
    return blocks


def _tool_use_blocks(message: ChatMessage) -> List[Dict[str, Any]]:
    blocks: List[Dict[str, Any]] = []
    for call in message.tool_calls or []:
        function = call.get("function") or {}
        arguments = function.get("arguments") or "{}"
        try:
            tool_input = json.loads(arguments) if isinstance(arguments, str) else arguments
        except ValueError:
            tool_input = {"arguments": arguments}
        blocks.append(
            {
                "type": "tool_use",
                "id": call.get("id"),
                "name": function.get("name"),
                "input": tool_input,
            }
        )
    return blocks


def split_messages(messages: List[ChatMessage]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Return ``(system, messages)`` in Messages API shape.

    Consecutive turns with the same role are merged since the API requires
    alternating roles.
    """
    system_parts: List[str] = []
    turns: List[Dict[str, Any]] = []
    for message in messages:
        if message.role in ("system", "developer"):
            if text := message.text():
                system_parts.append(text)
            continue
        if message.role == "tool":
            role = "user"
            blocks = [
                {
                    "type": "tool_result",
                    "tool_use_id": message.tool_call_id,
                    "content": message.text(),
                }
            ]
        elif message.role == "assistant":
            role = "assistant"
            blocks = _content_blocks(message) + _tool_use_blocks(message)
        else:
            role = "user"
            blocks = _content_blocks(message)
        if not blocks:
            continue
        if turns and turns[-1]["role"] == role:
            turns[-1]["content"].extend(blocks)
        else:
            turns.append({"role": role, "content": blocks})
    system = "\n\n".join(system_parts) if system_parts else None
    return system, turns


def _translate_tools(tools: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for tool in tools:
        function = tool.get("function") or tool
        out.append(
            {
                "name": function.get("name"),
                "description": function.get("description", ""),
                "input_schema": function.get("parameters") or {"type": "object", "properties": {}},
            }
        )
    return out


def _translate_tool_choice(choice: Any) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    if isinstance(choice, dict):
        name = (choice.get("function") or {}).get("name")
        return {"type": "tool", "name": name} if name else {"type": "auto"}
    return {"auto": {"type": "auto"}, "required": {"type": "any"}, "none": {"type": "none"}}.get(choice)


def build_params(model_id: str, req: ChatCompletionRequest, default_max_tokens: int) -> Dict[str, Any]:
    """Build keyword arguments for ``client.messages.create``."""
    system, turns = split_messages(req.messages)
    params: Dict[str, Any] = {
        "model": model_id,
        "messages": turns,
        "max_tokens": req.max_tokens or req.max_completion_tokens or default_max_tokens,
    }
    if system:
        params["system"] = system
    if req.temperature is not None:
        params["temperature"] = req.temperature
    if req.top_p is not None:
        params["top_p"] = req.top_p
    if req.stop is not None:
        params["stop_sequences"] = [req.stop] if isinstance(req.stop, str) else list(req.stop)
    if req.user:
        params["metadata"] = {"user_id": req.user}
    if req.tools:
        params["tools"] = _translate_tools(req.tools)
        tool_choice = _translate_tool_choice(req.tool_choice)
        if tool_choice is not None:
            params["tool_choice"] = tool_choice
    return params


def usage_from(raw_usage: Any) -> Optional[Usage]:
    if raw_usage is None:
        return None
    prompt = getattr(raw_usage, "input_tokens", None) or 0
    completion = getattr(raw_usage, "output_tokens", None) or 0
    return Usage.from_counts(int(prompt), int(completion))


def to_response(raw: Any, model: str) -> ChatCompletionResponse:
    """Convert a Messages API ``Message`` into a chat-completion response."""
    texts: List[str] = []
    tool_calls: List[Dict[str, Any]] = []
    for block in getattr(raw, "content", None) or []:
        block_type = getattr(block, "type", None)
        if block_type == "text":
            texts.append(getattr(block, "text", "") or "")
        elif block_type == "tool_use":
            tool_calls.append(
                {
                    "id": getattr(block, "id", None),
                    "type": "function",
                    "function": {
                        "name": getattr(block, "name", None),
                        "arguments": json.dumps(getattr(block, "input", None) or {}),
                    },
                }
            )
    message = ChatMessage(
        role="assistant",
        content="".join(texts) if texts or not tool_calls else None,
        tool_calls=tool_calls or None,
    )
    kwargs: Dict[str, Any] = {
        "model": model,
        "choices": [Choice(index=0, message=message, finish_reason=map_stop_reason(getattr(raw, "stop_reason", None)))],
        "usage": usage_from(getattr(raw, "usage", None)),
    }
    if getattr(raw, "id", None):
        kwargs["id"] = raw.id
    return ChatCompletionResponse(**kwargs)


__all__ = [
    "STOP_REASON_MAP",
    "build_params",
    "map_stop_reason",
    "split_messages",
    "to_response",
    "usage_from",
]
