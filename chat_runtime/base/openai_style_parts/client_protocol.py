"""Protocol describing the OpenAI-compatible client surface the base uses.

Both ``openai.OpenAI`` and ``openai.AzureOpenAI`` satisfy it, as do the fakes
used in tests.
"""

from __future__ import annotations

from typing import Any, Protocol


class ChatCompletionsClient(Protocol):
    """Client exposing ``chat.completions.create(**params)``.

    The call returns a completion object (``model_dump()`` able) or, when
    ``stream=True``, an iterable of chunk objects that may expose ``close()``.
    """

    class _ChatNS(Protocol):  # pragma: no cover - structural hint only
        class _CompletionsNS(Protocol):
            def create(self, **params: Any) -> Any:  # noqa: D401 - SDK parity
                """Start a chat completion request (streaming or non-streaming)."""
                ...

        completions: _CompletionsNS

    chat: _ChatNS


__all__ = ["ChatCompletionsClient"]
