"""Hugging Face Hub model loading."""

from .loaders import create_hf_model, create_hf_with_gguf

__all__ = ["create_hf_model", "create_hf_with_gguf"]
