"""SqlGeneration Protocol (single-class module).

Optional capability exposed by chat models able to turn a natural-language
question into SQL through structured output.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..models import ChatCompletionRequest, ChatCompletionResponse


@runtime_checkable
class SqlGeneration(Protocol):
    def create_request_for_query(
        self,
        model_id: str,
        query: str,
        schemas: Sequence[str] = (),
    ) -> ChatCompletionRequest:
        """Build a chat request asking the model for SQL answering ``query``."""
        ...

    def parse_response(self, response: ChatCompletionResponse) -> Optional[str]:
        """Extract the SQL statement from a completed response."""
        ...


__all__ = ["SqlGeneration"]
