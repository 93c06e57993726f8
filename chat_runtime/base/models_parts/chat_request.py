"""
ChatCompletionRequest DTO for chat-completion invocations.

The request mirrors the OpenAI chat-completions schema because every backend
(hosted or local) is normalized to that shape at the adapter boundary. All
generation fields are optional; ``None`` means "unset by the caller", which is
the condition under which per-model defaults may be applied.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


MessageRole = Literal["system", "developer", "user", "assistant", "tool", "function"]


class ChatMessage(BaseModel):
    """A single conversation message.

    Attributes:
        role: Author role of the message.
        content: Plain text or a list of structured content parts. May be
            ``None`` for assistant messages that only carry tool calls.
        name: Optional participant name.
        tool_calls: Tool calls requested by an assistant message.
        tool_call_id: Identifier of the call a ``tool`` message answers.
    """

    model_config = ConfigDict(extra="allow")

    role: MessageRole
    content: Optional[Union[str, List[Dict[str, Any]]]] = None
    name: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None
    tool_call_id: Optional[str] = None

    def text(self) -> str:
        """Return a flattened text view of the content for prompts and logs."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for part in self.content:
            if part.get("type") == "text" and part.get("text"):
                parts.append(str(part["text"]))
            else:
                parts.append(f"[{part.get('type', 'part')}]")
        return "\n".join(parts)


class StreamOptions(BaseModel):
    """Options applied to streaming responses."""

    model_config = ConfigDict(extra="allow")

    include_usage: bool = False


class ChatCompletionRequest(BaseModel):
    """Chat-completion request routed through the runtime.

    Only ``model`` and ``messages`` are required. Unknown keys sent by callers
    are preserved so adapters can forward provider-specific extensions.
    """

    model_config = ConfigDict(extra="allow")

    model: str
    messages: List[ChatMessage] = Field(default_factory=list)
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, float]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    store: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None
    n: Optional[int] = None
    presence_penalty: Optional[float] = None
    response_format: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: Optional[bool] = None
    stream_options: Optional[StreamOptions] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    parallel_tool_calls: Optional[bool] = None
    user: Optional[str] = None

    def is_streaming(self) -> bool:
        """Return True when the caller asked for a streamed response."""
        return self.stream is True

    def to_params(self) -> Dict[str, Any]:
        """Return SDK keyword arguments with unset fields dropped."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "MessageRole",
    "ChatMessage",
    "StreamOptions",
    "ChatCompletionRequest",
]
