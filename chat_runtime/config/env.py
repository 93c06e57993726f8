"""chat_runtime.config.env
=======================

Environment variable names read by the configuration layer.

Credentials are not read from the environment here: they arrive through the
descriptor's secret parameters. The SDKs keep their own environment fallbacks
(``OPENAI_API_KEY``, ``ANTHROPIC_API_KEY``) when a parameter is absent.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

CONFIG_FILE_ENV = "CHAT_RUNTIME_CONFIG_FILE"

# config key -> environment suffix, read as <PROVIDER>_<SUFFIX>
ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "base_url": "BASE_URL",
    "api_version": "API_VERSION",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder left in a template.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def env_overrides(provider: str) -> Dict[str, str]:
    """Return the non-empty, non-placeholder env values for ``provider``."""
    out: Dict[str, str] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val and not is_placeholder(val):
            out[field] = val
    return out


__all__ = ["CONFIG_FILE_ENV", "ENV_FIELD_MAP", "is_placeholder", "env_overrides"]
