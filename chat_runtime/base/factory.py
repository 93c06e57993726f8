"""Provider dispatcher.

Purpose
-------
Turn a :class:`ModelDescriptor` plus its secret parameters into exactly one
adapter implementing :class:`ChatModel`. The selector derived from the
descriptor's source prefix picks a builder from ``_BUILDERS``; builders live
in :mod:`chat_runtime.base.factory_parts` and are imported with ``importlib``
on demand, so no provider SDK is imported before a model of that kind is
loaded.

Failure semantics
-----------------
- Unknown source prefix: :class:`ModelSourceUnknown`.
- ``spiceai`` sources: :class:`UnsupportedTaskForModel` (no chat capability).
- Parameter contract violations: :class:`FailedToLoadModel` /
  :class:`InvalidParamError`, raised by the builders.

Secrets never appear in log events; only parameter names do.
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from .errors import ChatModelError, ModelSourceUnknown, UnsupportedTaskForModel
from .interfaces import ChatModel
from .logging import LogContext, get_logger, log_event
from .models import BackendSelector, ModelDescriptor, SecretParameterMap

Builder = Callable[[ModelDescriptor, SecretParameterMap], ChatModel]

_logger = get_logger("chat_runtime.factory")

_PARTS = "chat_runtime.base.factory_parts"

# Selector -> builder location; resolved lazily.
_BUILDERS: Dict[BackendSelector, Dict[str, str]] = {
    BackendSelector.HUGGINGFACE: {"module": f"{_PARTS}.huggingface_builder", "function": "build_huggingface"},
    BackendSelector.FILE: {"module": f"{_PARTS}.file_builder", "function": "build_file"},
    BackendSelector.ANTHROPIC: {"module": f"{_PARTS}.anthropic_builder", "function": "build_anthropic"},
    BackendSelector.AZURE: {"module": f"{_PARTS}.azure_builder", "function": "build_azure"},
    BackendSelector.XAI: {"module": f"{_PARTS}.xai_builder", "function": "build_xai"},
    BackendSelector.OPENAI: {"module": f"{_PARTS}.openai_builder", "function": "build_openai"},
}

ParamsLike = Union[SecretParameterMap, Mapping[str, Any]]


def as_secret_params(params: ParamsLike | None) -> SecretParameterMap:
    if isinstance(params, SecretParameterMap):
        return params
    return SecretParameterMap.from_params(params or {})


def resolve_selector(descriptor: ModelDescriptor) -> BackendSelector:
    """Return the descriptor's backend or raise ``ModelSourceUnknown``."""
    selector = descriptor.get_source()
    if selector is None:
        raise ModelSourceUnknown(descriptor.from_)
    return selector


def get_builder(selector: BackendSelector) -> Builder:
    if selector is BackendSelector.SPICEAI:
        raise UnsupportedTaskForModel(source=selector.value, task="llm")
    spec = _BUILDERS[selector]
    return getattr(import_module(spec["module"]), spec["function"])


def build_adapter(selector: BackendSelector, descriptor: ModelDescriptor, params: ParamsLike | None = None) -> ChatModel:
    """Build the undecorated adapter for ``selector``."""
    secrets = as_secret_params(params)
    ctx = LogContext(provider=selector.value, model=descriptor.get_model_id(), public_name=descriptor.name)
    log_event(_logger, "model.load.start", ctx, params=sorted(secrets))
    try:
        adapter = get_builder(selector)(descriptor, secrets)
    except ChatModelError as exc:
        log_event(
            _logger,
            "model.load.error",
            ctx,
            level=logging.WARNING,
            error=str(exc),
            error_type=type(exc).__name__,
            code=exc.code.value,
        )
        raise
    log_event(_logger, "model.load.ok", ctx, adapter=type(adapter).__name__)
    return adapter


def supported() -> Tuple[BackendSelector, ...]:
    """Return the selectors that can produce a chat model."""
    return tuple(_BUILDERS)


__all__ = [
    "Builder",
    "as_secret_params",
    "build_adapter",
    "get_builder",
    "resolve_selector",
    "supported",
]
