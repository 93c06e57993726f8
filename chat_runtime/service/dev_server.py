from __future__ import annotations

import os

import uvicorn

from ..base.logging import configure_logger
from ..runtime import ModelStore
from .app import create_app
from .models_file import read_descriptors, register_models

MODELS_FILE_ENV = "CHAT_RUNTIME_MODELS_FILE"


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start a development server for the chat completions surface.

    Environment:

    - CHAT_RUNTIME_MODELS_FILE: YAML document of models to register
    - CHAT_RUNTIME_HOST: interface to bind (default "127.0.0.1")
    - CHAT_RUNTIME_PORT: port to bind (default 8091)
    - CHAT_RUNTIME_LOG_FILE: optional rotating JSON log file
    """
    configure_logger(file_path=os.getenv("CHAT_RUNTIME_LOG_FILE"))
    store = ModelStore()
    models_file = os.getenv(MODELS_FILE_ENV)
    if models_file:
        register_models(store, read_descriptors(models_file))

    uvicorn.run(
        create_app(store),
        host=os.getenv("CHAT_RUNTIME_HOST", "127.0.0.1"),
        port=_parse_port(os.getenv("CHAT_RUNTIME_PORT"), 8091),
    )


if __name__ == "__main__":
    main()
