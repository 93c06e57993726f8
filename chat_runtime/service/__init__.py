"""HTTP service exposing registered models through an OpenAI-compatible API."""

from .app import create_app
from .models_file import read_descriptors, register_models

__all__ = ["create_app", "read_descriptors", "register_models"]
