"""Protocol parts for the chat runtime (one Protocol per module)."""

from .chat_model import ChatModel
from .sql_generation import SqlGeneration

__all__ = ["ChatModel", "SqlGeneration"]
