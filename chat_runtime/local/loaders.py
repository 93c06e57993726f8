"""Loader for models declared with a ``file:`` source.

GGUF weights are served by llama.cpp; any other weights format is loaded with
transformers from the directory holding the weights (which must also hold, or
be pointed at, the config and tokenizer files).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from ..base.errors import FailedToLoadModel
from ..base.interfaces import ChatModel
from .llama_cpp_chat import LlamaCppChat
from .transformers_chat import TransformersChat


def is_gguf(path: str) -> bool:
    return Path(path).suffix.lower() == ".gguf"


def create_local_model(
    weights: Sequence[str],
    config_path: Optional[str] = None,
    tokenizer_path: Optional[str] = None,
    tokenizer_config_path: Optional[str] = None,
    chat_template: Optional[str] = None,
) -> ChatModel:
    """Load a chat model from local files."""
    if not weights:
        raise FailedToLoadModel("No 'weights_path' parameter provided")
    gguf = next((w for w in weights if is_gguf(w)), None)
    if gguf is not None:
        return LlamaCppChat.from_gguf(gguf, chat_template=chat_template)

    model_dir = Path(config_path).parent if config_path else Path(weights[0]).parent
    if not model_dir.is_dir():
        raise FailedToLoadModel(f"Model directory '{model_dir}' does not exist")
    tokenizer_dir = None
    for candidate in (tokenizer_config_path, tokenizer_path):
        if candidate:
            tokenizer_dir = str(Path(candidate).parent)
            break
    return TransformersChat.from_pretrained(
        str(model_dir),
        tokenizer_path=tokenizer_dir,
        chat_template=chat_template,
        local_files_only=True,
    )


__all__ = ["create_local_model", "is_gguf"]
