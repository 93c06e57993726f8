"""Shared behavior for concrete chat adapters.

Adapters implement the two structured paths (``chat_request`` and
``chat_stream``); the free-text paths, the health probe and the default
``as_sql`` are derived from them here.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .interfaces import SqlGeneration
from .logging import get_logger
from .models import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)


class BaseChatAdapter:
    """Base class for adapters exposing the ``ChatModel`` capability."""

    provider_name: str = "base"

    def __init__(self, model_id: str, logger_name: Optional[str] = None) -> None:
        self.model_id = model_id
        self._logger = get_logger(logger_name or f"chat_runtime.{self.provider_name}")

    # ----- Abstract surface -----
    def chat_request(self, req: ChatCompletionRequest) -> ChatCompletionResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def chat_stream(self, req: ChatCompletionRequest) -> Iterator[ChatCompletionChunk]:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- Derived surface -----
    def prompt_request(self, prompt: str, *, stream: bool = False, max_tokens: Optional[int] = None) -> ChatCompletionRequest:
        """Build a single user-message request against this adapter's model."""
        return ChatCompletionRequest(
            model=self.model_id,
            messages=[ChatMessage(role="user", content=prompt)],
            stream=stream or None,
            max_tokens=max_tokens,
        )

    def run(self, prompt: str) -> Optional[str]:
        return self.chat_request(self.prompt_request(prompt)).first_text()

    def stream(self, prompt: str) -> Iterator[Optional[str]]:
        for chunk in self.chat_stream(self.prompt_request(prompt, stream=True)):
            # Usage-only chunks carry no choices.
            if chunk.choices:
                yield chunk.delta_text()

    def health(self) -> None:
        """Issue a one-token completion; any failure propagates."""
        self.chat_request(self.prompt_request("health", max_tokens=1))

    def as_sql(self) -> Optional[SqlGeneration]:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_id={self.model_id!r})"


__all__ = ["BaseChatAdapter"]
