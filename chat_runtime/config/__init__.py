"""Unified configuration layer for the chat runtime.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (:mod:`chat_runtime.config.defaults`)
2. Optional external config file (JSON or YAML) named by
   ``CHAT_RUNTIME_CONFIG_FILE``
3. Environment variables ``<PROVIDER>_MODEL``, ``<PROVIDER>_BASE_URL``,
   ``<PROVIDER>_API_VERSION``
4. In-code overrides passed to :func:`get_provider_config`

External config file structure example::

    openai:
      model: gpt-4o-mini
    xai:
      base_url: https://api.x.ai/v1
    azure:
      api_version: "2024-10-21"

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
    AZURE_DEFAULT_API_VERSION,
    OPENAI_DEFAULT_MODEL,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)
from .env import CONFIG_FILE_ENV, env_overrides

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "xai": {"model": XAI_DEFAULT_MODEL, "base_url": XAI_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "max_tokens": ANTHROPIC_DEFAULT_MAX_TOKENS},
    "azure": {"api_version": AZURE_DEFAULT_API_VERSION},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``CHAT_RUNTIME_CONFIG_FILE``.

    JSON is tried first, then YAML. A missing file or a document that is not a
    mapping yields an empty config.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config (re-read on next access)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` do not clobber earlier layers.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "reset_config_cache",
]
