"""
Anthropic provider package.

Exports:
- AnthropicChat: Messages API adapter
- is_known_model: model id validation used by the dispatcher
"""

from .catalog import KNOWN_MODELS, is_known_model
from .client import AnthropicChat

__all__ = ["AnthropicChat", "KNOWN_MODELS", "is_known_model"]
