"""Azure OpenAI provider package."""

from .client import AzureOpenAIChat

__all__ = ["AzureOpenAIChat"]
