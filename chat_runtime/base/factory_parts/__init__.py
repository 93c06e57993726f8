"""Per-backend builders used by :mod:`chat_runtime.base.factory`.

Each builder validates the backend's parameter contract and constructs one
adapter. Adapter packages are imported inside the builders so that only the
selected backend's SDK is ever loaded.
"""

from .anthropic_builder import build_anthropic
from .azure_builder import build_azure
from .file_builder import build_file
from .huggingface_builder import build_huggingface, first_gguf_path
from .openai_builder import build_openai, validate_temperature
from .xai_builder import build_xai

__all__ = [
    "build_anthropic",
    "build_azure",
    "build_file",
    "build_huggingface",
    "build_openai",
    "build_xai",
    "first_gguf_path",
    "validate_temperature",
]
