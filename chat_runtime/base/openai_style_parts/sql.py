"""SQL generation through JSON-schema structured output.

The request asks for a single JSON object ``{"sql": "<statement>"}`` using a
strict ``json_schema`` response format; the response parser extracts and
trims the statement. Backends that ignore the schema but still answer with a
fenced SQL block are handled by the fallback in ``parse_response``.
"""

from __future__ import annotations

import json
import re
from typing import Optional, Sequence

from ..models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

SQL_RESPONSE_SCHEMA = {
    "name": "sql_mode",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {"sql": {"type": "string"}},
        "required": ["sql"],
        "additionalProperties": False,
    },
}

_SYSTEM_PROMPT = (
    "Convert the user's question into a single SQL query. "
    "Respond only with JSON of the form {\"sql\": \"<query>\"}."
)

_FENCED_SQL = re.compile(r"```(?:sql)?\s*(.+?)```", re.DOTALL | re.IGNORECASE)


class JsonSchemaSqlGeneration:
    """``SqlGeneration`` implementation for OpenAI-compatible backends."""

    def create_request_for_query(
        self,
        model_id: str,
        query: str,
        schemas: Sequence[str] = (),
    ) -> ChatCompletionRequest:
        messages = [ChatMessage(role="system", content=_SYSTEM_PROMPT)]
        if schemas:
            messages.append(ChatMessage(role="user", content="Schemas:\n" + "\n".join(schemas)))
        messages.append(ChatMessage(role="user", content=query))
        return ChatCompletionRequest(
            model=model_id,
            messages=messages,
            response_format={"type": "json_schema", "json_schema": SQL_RESPONSE_SCHEMA},
        )

    def parse_response(self, response: ChatCompletionResponse) -> Optional[str]:
        text = response.first_text()
        if not text:
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            fenced = _FENCED_SQL.search(text)
            return fenced.group(1).strip() if fenced else None
        if isinstance(payload, dict) and isinstance(payload.get("sql"), str):
            return payload["sql"].strip() or None
        return None


__all__ = ["JsonSchemaSqlGeneration", "SQL_RESPONSE_SCHEMA"]
