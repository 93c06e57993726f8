"""OpenAI-compatible adapter base and its helpers.

Re-exports provide a stable import surface for the provider packages.
"""

from .adapter_init import OpenAIStyleInit
from .base import BaseOpenAIStyleChat
from .client_protocol import ChatCompletionsClient
from .conversions import to_chunk, to_response
from .sql import SQL_RESPONSE_SCHEMA, JsonSchemaSqlGeneration

__all__ = [
    "BaseOpenAIStyleChat",
    "ChatCompletionsClient",
    "JsonSchemaSqlGeneration",
    "OpenAIStyleInit",
    "SQL_RESPONSE_SCHEMA",
    "to_chunk",
    "to_response",
]
