"""chat_runtime.config.defaults
============================

Small, stable default values used by the adapters, the dispatcher and the
HTTP surface. Every value here can be overridden through the layered
configuration in :mod:`chat_runtime.config`; this module only holds plain
constants and performs no I/O.
"""

from __future__ import annotations

# ---- Providers ----

OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

XAI_DEFAULT_MODEL = "grok-2-latest"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-latest"
# The Messages API requires max_tokens; used when the request leaves it unset.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

AZURE_DEFAULT_API_VERSION = "2024-10-21"

# Local runtimes
LOCAL_DEFAULT_CONTEXT_SIZE = 4096
LOCAL_DEFAULT_MAX_NEW_TOKENS = 512

# ---- Runtime ----

# Name of the task-history span opened for every completion.
COMPLETION_SPAN_NAME = "ai_completion"

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the HTTP surface.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "XAI_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "AZURE_DEFAULT_API_VERSION",
    "LOCAL_DEFAULT_CONTEXT_SIZE",
    "LOCAL_DEFAULT_MAX_NEW_TOKENS",
    "COMPLETION_SPAN_NAME",
    "SERVICE_CORS_DEFAULT_ORIGINS",
]
