"""Shared helpers for the local runtimes: sampling arguments and usage."""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import ChatCompletionRequest
from ..config.defaults import LOCAL_DEFAULT_MAX_NEW_TOKENS


def max_new_tokens(req: ChatCompletionRequest) -> int:
    return req.max_completion_tokens or req.max_tokens or LOCAL_DEFAULT_MAX_NEW_TOKENS


def stop_list(req: ChatCompletionRequest) -> List[str]:
    if req.stop is None:
        return []
    return [req.stop] if isinstance(req.stop, str) else list(req.stop)


def chat_messages(req: ChatCompletionRequest) -> List[Dict[str, Any]]:
    """Flatten request messages to ``{"role", "content"}`` text pairs."""
    return [{"role": m.role, "content": m.text()} for m in req.messages]


def wants_usage(req: ChatCompletionRequest) -> bool:
    return bool(req.stream_options and req.stream_options.include_usage)


__all__ = ["chat_messages", "max_new_tokens", "stop_list", "wants_usage"]
