"""Request labels attached to completion metrics."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..models import ChatCompletionRequest


@dataclass(frozen=True)
class TelemetryLabels:
    """Low-cardinality description of a prepared request."""

    model: str
    stream: bool
    tools: bool
    tool_choice: Optional[str] = None
    response_format: Optional[str] = None
    has_metadata: bool = False

    @classmethod
    def from_request(cls, req: ChatCompletionRequest) -> "TelemetryLabels":
        tool_choice = req.tool_choice
        if isinstance(tool_choice, dict):
            # {"type": "function", "function": {...}} -> "function"
            tool_choice = str(tool_choice.get("type", "object"))
        response_format = None
        if req.response_format:
            response_format = str(req.response_format.get("type", "object"))
        return cls(
            model=req.model,
            stream=req.is_streaming(),
            tools=bool(req.tools),
            tool_choice=tool_choice,
            response_format=response_format,
            has_metadata=bool(req.metadata),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["TelemetryLabels"]
