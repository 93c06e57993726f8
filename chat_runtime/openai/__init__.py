"""
OpenAI provider package.

Exports:
- OpenAIChat: OpenAI Chat Completions adapter
"""

from .client import OpenAIChat

__all__ = ["OpenAIChat"]
