"""In-memory registry of loaded chat models keyed by public name."""

from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional

from ..base.interfaces import ChatModel
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelDescriptor
from ..base.factory import ParamsLike
from .tool_gate import ToolOrchestrator, try_to_chat_model

_logger = get_logger("chat_runtime.store")


class ModelStore:
    """Thread-safe name -> ``ChatModel`` mapping.

    Registering under an existing name replaces the previous model. Stored
    models are shared by all callers and are never mutated by the store.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._models: Dict[str, ChatModel] = {}

    def register(self, name: str, chat: ChatModel) -> None:
        with self._lock:
            replaced = name in self._models
            self._models[name] = chat
        log_event(_logger, "model.registered", LogContext(public_name=name), replaced=replaced)

    def get(self, name: str) -> Optional[ChatModel]:
        with self._lock:
            return self._models.get(name)

    def remove(self, name: str) -> Optional[ChatModel]:
        with self._lock:
            chat = self._models.pop(name, None)
        if chat is not None:
            log_event(_logger, "model.removed", LogContext(public_name=name))
        return chat

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._models)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._models

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)


def load_model(
    store: ModelStore,
    descriptor: ModelDescriptor,
    params: ParamsLike | None = None,
    orchestrator: Optional[ToolOrchestrator] = None,
) -> ChatModel:
    """Build ``descriptor`` through the tool gate and register it."""
    chat = try_to_chat_model(descriptor, params, orchestrator)
    store.register(descriptor.name, chat)
    return chat


__all__ = ["ModelStore", "load_model"]
