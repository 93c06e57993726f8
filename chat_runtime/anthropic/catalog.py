"""Anthropic model catalog used to validate descriptor model ids."""

from __future__ import annotations

from typing import Optional

KNOWN_MODELS = (
    "claude-3-5-sonnet-latest",
    "claude-3-5-sonnet-20241022",
    "claude-3-5-sonnet-20240620",
    "claude-3-5-haiku-latest",
    "claude-3-5-haiku-20241022",
    "claude-3-opus-latest",
    "claude-3-opus-20240229",
    "claude-3-sonnet-20240229",
    "claude-3-haiku-20240307",
)

# Newer releases follow the same naming scheme and are accepted without an
# entry above.
MODEL_PREFIX = "claude-"


def is_known_model(model_id: Optional[str]) -> bool:
    if not model_id:
        return False
    return model_id in KNOWN_MODELS or model_id.startswith(MODEL_PREFIX)


__all__ = ["KNOWN_MODELS", "MODEL_PREFIX", "is_known_model"]
