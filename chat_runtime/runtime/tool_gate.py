"""Model construction entry points and the tool-augmentation gate.

:func:`construct_model` builds the adapter for a descriptor and wraps it in a
:class:`ChatWrapper`. :func:`try_to_chat_model` additionally hands the wrapped
model to a :class:`ToolOrchestrator` when the descriptor's parameters enable
tools. Tool resolution and invocation belong to the orchestrator; this module
only decides whether to involve it.

Parameters read here:

- ``tools`` (falling back to ``spice_tools``): ``auto``, ``none``/empty,
  ``builtin`` or a comma-separated list of tool names.
- ``tool_recursion_limit``: non-negative integer bounding nested tool calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ..base.errors import FailedToLoadModel
from ..base.factory import ParamsLike, as_secret_params, build_adapter, resolve_selector
from ..base.interfaces import ChatModel
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelDescriptor, SecretParameterMap
from .chat_wrapper import ChatWrapper

_logger = get_logger("chat_runtime.tools")

TOOLS_PARAM_KEYS = ("tools", "spice_tools")
RECURSION_LIMIT_PARAM = "tool_recursion_limit"


class ToolsMode(str, Enum):
    NONE = "none"
    AUTO = "auto"
    BUILTIN = "builtin"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class ToolsOptions:
    """Parsed ``tools`` parameter."""

    mode: ToolsMode = ToolsMode.NONE
    names: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ToolsOptions":
        """Parse the parameter text; never fails."""
        text = (raw or "").strip()
        lowered = text.lower()
        if lowered in ("", "none"):
            return cls(ToolsMode.NONE)
        if lowered == "auto":
            return cls(ToolsMode.AUTO)
        if lowered == "builtin":
            return cls(ToolsMode.BUILTIN)
        names = tuple(part.strip() for part in text.split(",") if part.strip())
        if not names:
            return cls(ToolsMode.NONE)
        return cls(ToolsMode.SPECIFIC, names)

    def can_use_tools(self) -> bool:
        return self.mode is not ToolsMode.NONE


@runtime_checkable
class ToolOrchestrator(Protocol):
    """External collaborator that resolves tools and augments a chat model."""

    def resolve_tools(self, options: ToolsOptions) -> Sequence[Any]:
        ...

    def wrap(self, chat: ChatModel, tools: Sequence[Any], recursion_limit: Optional[int]) -> ChatModel:
        ...


def parse_recursion_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        limit = int(raw.strip())
    except ValueError:
        limit = -1
    if limit < 0:
        raise FailedToLoadModel(f"Invalid value specified for `params.{RECURSION_LIMIT_PARAM}`: {raw}")
    return limit


def construct_model(descriptor: ModelDescriptor, params: ParamsLike | None = None) -> ChatModel:
    """Build the adapter for ``descriptor`` and wrap it with runtime policy."""
    adapter = build_adapter(resolve_selector(descriptor), descriptor, params)
    return ChatWrapper(
        descriptor.name,
        adapter,
        system_prompt=descriptor.system_prompt(),
        defaults=descriptor.get_openai_request_overrides(),
    )


def try_to_chat_model(
    descriptor: ModelDescriptor,
    params: ParamsLike | None = None,
    orchestrator: Optional[ToolOrchestrator] = None,
) -> ChatModel:
    """Build the model for ``descriptor``, tool-augmented when enabled."""
    secrets: SecretParameterMap = as_secret_params(params)
    chat = construct_model(descriptor, secrets)

    options = ToolsOptions.parse(secrets.first_present(*TOOLS_PARAM_KEYS))
    recursion_limit = parse_recursion_limit(secrets.get_secret(RECURSION_LIMIT_PARAM))
    if not options.can_use_tools():
        return chat

    ctx = LogContext(model=descriptor.get_model_id(), public_name=descriptor.name)
    if orchestrator is None:
        log_event(
            _logger,
            "tools.orchestrator_missing",
            ctx,
            level=logging.WARNING,
            mode=options.mode.value,
        )
        return chat

    tools = orchestrator.resolve_tools(options)
    log_event(
        _logger,
        "tools.enabled",
        ctx,
        mode=options.mode.value,
        tools=len(tools),
        recursion_limit=recursion_limit,
    )
    return orchestrator.wrap(chat, tools, recursion_limit)


__all__ = [
    "RECURSION_LIMIT_PARAM",
    "TOOLS_PARAM_KEYS",
    "ToolOrchestrator",
    "ToolsMode",
    "ToolsOptions",
    "construct_model",
    "parse_recursion_limit",
    "try_to_chat_model",
]
