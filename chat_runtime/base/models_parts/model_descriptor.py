"""
Model descriptor DTOs.

A ``ModelDescriptor`` is the declarative definition of one model: its public
name, a ``"<prefix>[:<id>]"`` source string selecting the backend, a generic
parameter map and a list of typed file references. The descriptor is parsed
once per model registration.
"""
from __future__ import annotations

import json
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BackendSelector(str, Enum):
    """Closed set of backends a descriptor can select."""

    HUGGINGFACE = "huggingface"
    FILE = "file"
    ANTHROPIC = "anthropic"
    AZURE = "azure"
    XAI = "xai"
    OPENAI = "openai"
    SPICEAI = "spiceai"


# Source prefix -> selector. ``hf`` is accepted as a short alias.
SOURCE_PREFIXES: Dict[str, BackendSelector] = {
    "huggingface": BackendSelector.HUGGINGFACE,
    "hf": BackendSelector.HUGGINGFACE,
    "file": BackendSelector.FILE,
    "anthropic": BackendSelector.ANTHROPIC,
    "azure": BackendSelector.AZURE,
    "xai": BackendSelector.XAI,
    "openai": BackendSelector.OPENAI,
    "spiceai": BackendSelector.SPICEAI,
}

HUGGINGFACE_HOST_PREFIX = "huggingface.co/"

# Request-override params are declared as ``openai_<field>`` on the descriptor.
REQUEST_OVERRIDE_PREFIX = "openai_"


class ModelFileType(str, Enum):
    WEIGHTS = "weights"
    TOKENIZER = "tokenizer"
    TOKENIZER_CONFIG = "tokenizer_config"
    CONFIG = "config"


_WEIGHT_SUFFIXES = (".gguf", ".ggml", ".safetensors", ".bin", ".pth")


def infer_file_type(path: str) -> Optional[ModelFileType]:
    """Infer a file's role from its name; ``None`` when it cannot be told."""
    name = PurePath(path).name.lower()
    if name == "tokenizer.json":
        return ModelFileType.TOKENIZER
    if name == "tokenizer_config.json":
        return ModelFileType.TOKENIZER_CONFIG
    if name == "config.json":
        return ModelFileType.CONFIG
    if name.endswith(_WEIGHT_SUFFIXES):
        return ModelFileType.WEIGHTS
    return None


class ModelFile(BaseModel):
    """A typed file reference attached to a model descriptor."""

    path: str
    type: Optional[ModelFileType] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def _infer_type(self) -> "ModelFile":
        if self.type is None:
            self.type = infer_file_type(self.path)
        return self


class ModelDescriptor(BaseModel):
    """Declarative definition of a model to load.

    Attributes:
        name: Public name the model is registered and reported under.
        from_: Source string (``from`` in serialized form), e.g.
            ``"openai:gpt-4o"`` or ``"file:/models/llama.gguf"``.
        params: Generic parameter map (system prompt, request overrides, ...).
        files: Typed file references (weights, tokenizer, configs).
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    from_: str = Field(alias="from")
    params: Dict[str, Any] = Field(default_factory=dict)
    files: List[ModelFile] = Field(default_factory=list)

    def _split_source(self) -> Tuple[str, Optional[str]]:
        prefix, sep, rest = self.from_.partition(":")
        return prefix.strip().lower(), (rest if sep else None)

    def get_source(self) -> Optional[BackendSelector]:
        """Return the backend selected by the source prefix, if recognized."""
        prefix, _ = self._split_source()
        return SOURCE_PREFIXES.get(prefix)

    def get_model_id(self) -> Optional[str]:
        """Return the backend-specific model identifier from the source string."""
        _, rest = self._split_source()
        if rest is None:
            return None
        model_id = rest.strip()
        if self.get_source() is BackendSelector.HUGGINGFACE and model_id.startswith(HUGGINGFACE_HOST_PREFIX):
            model_id = model_id[len(HUGGINGFACE_HOST_PREFIX):]
        return model_id or None

    def find_all_file_path(self, file_type: ModelFileType) -> List[str]:
        """Return every declared path of ``file_type`` in declaration order.

        For ``file:`` sources the source path itself counts as weights when no
        weights are declared explicitly.
        """
        paths = [f.path for f in self.files if f.type is file_type]
        if (
            not paths
            and file_type is ModelFileType.WEIGHTS
            and self.get_source() is BackendSelector.FILE
        ):
            source_path = self.get_model_id()
            if source_path:
                paths.append(source_path)
        return paths

    def find_any_file_path(self, file_type: ModelFileType) -> Optional[str]:
        paths = self.find_all_file_path(file_type)
        return paths[0] if paths else None

    def get_openai_request_overrides(self) -> List[Tuple[str, Any]]:
        """Return ``(field, value)`` defaults declared as ``openai_<field>`` params.

        String values are decoded as JSON when they parse (``"0.1"`` -> ``0.1``,
        ``'["END"]'`` -> ``["END"]``); otherwise the raw string is kept.
        """
        overrides: List[Tuple[str, Any]] = []
        for key, value in self.params.items():
            if not key.startswith(REQUEST_OVERRIDE_PREFIX):
                continue
            field = key[len(REQUEST_OVERRIDE_PREFIX):]
            if isinstance(value, str):
                try:
                    value = json.loads(value)
                except ValueError:
                    pass
            overrides.append((field, value))
        return overrides

    def system_prompt(self) -> Optional[str]:
        value = self.params.get("system_prompt")
        return None if value is None else str(value)


__all__ = [
    "BackendSelector",
    "SOURCE_PREFIXES",
    "ModelFileType",
    "ModelFile",
    "ModelDescriptor",
    "infer_file_type",
]
