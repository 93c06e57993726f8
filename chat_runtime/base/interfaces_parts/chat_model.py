"""ChatModel Protocol (single-class module).

Defines the capability contract every adapter, and every decorator wrapping an
adapter, must satisfy.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from ..models import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse
from .sql_generation import SqlGeneration


@runtime_checkable
class ChatModel(Protocol):
    """Uniform chat capability interface.

    Structured paths (``chat_request``/``chat_stream``) exchange OpenAI-shaped
    DTOs. Free-text paths (``run``/``stream``) take a bare prompt. Errors are
    raised, never encoded into the return value.
    """

    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:
        """Execute a single non-streamed chat completion."""
        ...

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:
        """Start a streamed chat completion.

        Errors that prevent the stream from starting are raised by this call;
        the returned iterator is consumed lazily and may raise mid-stream.
        """
        ...

    def run(self, prompt: str) -> Optional[str]:
        """Complete a bare prompt and return the generated text, if any."""
        ...

    def stream(self, prompt: str) -> Iterator[Optional[str]]:
        """Stream text deltas for a bare prompt."""
        ...

    def health(self) -> None:
        """Raise when the backend is not able to serve requests."""
        ...

    def as_sql(self) -> Optional[SqlGeneration]:
        """Return the SQL-generation capability when the backend offers one."""
        ...


__all__ = ["ChatModel"]
