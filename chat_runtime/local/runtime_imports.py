"""On-demand imports of the optional local inference runtimes.

``llama-cpp-python``, ``transformers``, ``torch`` and ``huggingface_hub`` are
installed through the ``local`` extra. They are imported only when a local
model is actually loaded; a missing runtime is reported as a load failure.
"""

from __future__ import annotations

from importlib import import_module
from types import ModuleType

from ..base.errors import FailedToLoadModel

# import name -> distribution name
DISTRIBUTIONS = {
    "llama_cpp": "llama-cpp-python",
    "llama_cpp.llama_chat_format": "llama-cpp-python",
    "transformers": "transformers",
    "torch": "torch",
    "huggingface_hub": "huggingface_hub",
}


def require_module(name: str) -> ModuleType:
    try:
        return import_module(name)
    except ImportError as exc:
        dist = DISTRIBUTIONS.get(name, name)
        raise FailedToLoadModel(
            f"`{dist}` is required to load this model; install the `local` extra (pip install 'chat-runtime[local]')"
        ) from exc


__all__ = ["require_module"]
