"""
Capability interfaces (Protocols) for the chat runtime.

Re-exports the Protocols split into single-class modules under
``chat_runtime.base.interfaces_parts`` while keeping imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatModel, SqlGeneration

__all__ = ["ChatModel", "SqlGeneration"]
