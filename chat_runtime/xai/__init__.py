"""xAI provider package."""

from .client import XaiChat

__all__ = ["XaiChat"]
