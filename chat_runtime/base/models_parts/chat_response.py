"""
Chat-completion response and stream chunk DTOs.

Adapters normalize every backend's output into these shapes. ``raw`` SDK
objects are never returned upstream; conversions go through
``model_validate`` on plain dictionaries.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .chat_request import ChatMessage


def _completion_id() -> str:
    return f"chatcmpl-{uuid.uuid4().hex}"


def _now() -> int:
    return int(time.time())


class Usage(BaseModel):
    """Token accounting reported by a backend."""

    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(cls, prompt: int, completion: int) -> "Usage":
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)


class Choice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None


class ChatCompletionResponse(BaseModel):
    """Full (non-streamed) chat-completion response."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=_completion_id)
    object: str = "chat.completion"
    created: int = Field(default_factory=_now)
    model: str
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def first_text(self) -> Optional[str]:
        """Return the text of the first choice, if any."""
        if not self.choices:
            return None
        content = self.choices[0].message.content
        if content is None:
            return None
        return self.choices[0].message.text()


class ChunkDelta(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class ChunkChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    delta: ChunkDelta = Field(default_factory=ChunkDelta)
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None


class ChatCompletionChunk(BaseModel):
    """One incremental element of a streamed chat completion.

    ``usage`` is populated on at most one chunk per stream (normally the last),
    and only when usage accounting was requested.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=_completion_id)
    object: str = "chat.completion.chunk"
    created: int = Field(default_factory=_now)
    model: str
    choices: List[ChunkChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def delta_text(self) -> Optional[str]:
        """Return the text delta of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].delta.content


__all__ = [
    "Usage",
    "Choice",
    "ChatCompletionResponse",
    "ChunkDelta",
    "ChunkChoice",
    "ChatCompletionChunk",
]
