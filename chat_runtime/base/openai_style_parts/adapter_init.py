"""Initialization dataclass for OpenAI-style adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .client_protocol import ChatCompletionsClient


@dataclass(frozen=True)
class OpenAIStyleInit:
    """Construction bundle for ``BaseOpenAIStyleChat``.

    Attributes:
        model_id: Model identifier sent to the API (``model`` request field).
        logger_name: Structured logger name (e.g. ``chat_runtime.openai``).
        client_factory: Zero-argument callable building the SDK client. It is
            invoked once, on first use, so construction performs no I/O.
        sql_generation: Whether the adapter advertises JSON-schema SQL generation.
    """

    model_id: str
    logger_name: str
    client_factory: Optional[Callable[[], ChatCompletionsClient]] = None
    sql_generation: bool = True


__all__ = ["OpenAIStyleInit"]
