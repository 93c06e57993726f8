"""Pytest configuration for the chat runtime test suite.

The ``chat_runtime`` base logger does not propagate to the root logger, so
``caplog`` never sees its records. ``log_events`` attaches a capturing handler
to the base logger directly and exposes the decoded JSON payloads.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from chat_runtime.base.logging import BASE_LOGGER_NAME, get_logger
from chat_runtime.base.metrics import CountingMetricsExporter, set_default_exporter
from chat_runtime.config import reset_config_cache

_PROVIDER_ENV = [
    f"{provider}_{suffix}"
    for provider in ("OPENAI", "XAI", "ANTHROPIC", "AZURE")
    for suffix in ("MODEL", "BASE_URL", "API_VERSION")
]


class _CapturingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class LogEvents:
    """Decoded ``log_event`` payloads captured during one test."""

    def __init__(self, handler: _CapturingHandler) -> None:
        self._handler = handler

    @property
    def all(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in self._handler.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict):
                payload["_level"] = record.levelname
                payload["_logger"] = record.name
                out.append(payload)
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [p for p in self.all if p.get("event") == event]

    def names(self) -> List[str]:
        return [p["event"] for p in self.all if "event" in p]


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset process-wide state (config cache, metrics sink, env overrides)."""

    monkeypatch.delenv("CHAT_RUNTIME_CONFIG_FILE", raising=False)
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    set_default_exporter(None)
    yield
    reset_config_cache()
    set_default_exporter(None)


@pytest.fixture()
def log_events() -> Iterator[LogEvents]:
    base = get_logger(BASE_LOGGER_NAME)
    handler = _CapturingHandler()
    previous_level = base.level
    base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    try:
        yield LogEvents(handler)
    finally:
        base.removeHandler(handler)
        base.setLevel(previous_level)


@pytest.fixture()
def counting_exporter() -> CountingMetricsExporter:
    exporter = CountingMetricsExporter()
    set_default_exporter(exporter)
    return exporter
