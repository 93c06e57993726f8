"""Model definitions loader for the HTTP service.

Reads model descriptors from a YAML (or JSON) document and registers each one
in a :class:`ModelStore` through the tool gate.

YAML schema
-----------

.. code-block:: yaml

    models:
      - name: assistant
        from: openai:gpt-4o-mini
        params:
          openai_api_key: ${OPENAI_API_KEY}
          system_prompt: You are terse.
          openai_temperature: "0.2"
      - name: local
        from: file:/models/qwen2.5-0.5b-instruct-q4_k_m.gguf

``${VAR}`` references inside string params are expanded from the process
environment at load time. A model that fails to load is logged and skipped;
the remaining models are still registered.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..base.errors import ChatModelError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelDescriptor
from ..runtime import ModelStore, ToolOrchestrator, load_model

_logger = get_logger("chat_runtime.service")


def _expand(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: os.path.expandvars(v) if isinstance(v, str) else v for k, v in params.items()}


def read_descriptors(path: str) -> List[ModelDescriptor]:
    """Parse the models document at ``path``."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    entries = data.get("models", []) if isinstance(data, dict) else []
    return [ModelDescriptor.model_validate(entry) for entry in entries]


def register_models(
    store: ModelStore,
    descriptors: List[ModelDescriptor],
    orchestrator: Optional[ToolOrchestrator] = None,
) -> List[Tuple[str, str]]:
    """Load every descriptor into ``store``; return ``(name, error)`` failures."""
    failures: List[Tuple[str, str]] = []
    for descriptor in descriptors:
        descriptor = descriptor.model_copy(update={"params": _expand(descriptor.params)})
        try:
            load_model(store, descriptor, descriptor.params, orchestrator)
        except (ChatModelError, ValidationError) as exc:
            failures.append((descriptor.name, str(exc)))
            log_event(
                _logger,
                "model.load.failed",
                LogContext(public_name=descriptor.name),
                level=logging.ERROR,
                source=descriptor.from_,
                error=str(exc),
            )
    return failures


__all__ = ["read_descriptors", "register_models"]
