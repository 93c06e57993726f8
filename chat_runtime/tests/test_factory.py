"""Dispatcher coverage: selector resolution and per-backend parameter contracts."""

from __future__ import annotations

import pytest

from chat_runtime.anthropic import AnthropicChat
from chat_runtime.azure import AzureOpenAIChat
from chat_runtime.base.errors import (
    ErrorCode,
    FailedToLoadModel,
    InvalidParamError,
    ModelSourceUnknown,
    UnsupportedTaskForModel,
)
from chat_runtime.base.factory import build_adapter, resolve_selector, supported
from chat_runtime.base.models import BackendSelector, ModelDescriptor
from chat_runtime.openai import OpenAIChat
from chat_runtime.xai import XaiChat


def _descriptor(source: str, **extra) -> ModelDescriptor:
    return ModelDescriptor.model_validate({"name": "m", "from": source, **extra})


def _build(source: str, params=None, **extra):
    descriptor = _descriptor(source, **extra)
    return build_adapter(resolve_selector(descriptor), descriptor, params or {})


def test_unknown_source_prefix() -> None:
    with pytest.raises(ModelSourceUnknown) as info:
        resolve_selector(_descriptor("bedrock:claude"))
    assert info.value.code is ErrorCode.NOT_FOUND
    assert "bedrock:claude" in str(info.value)


def test_spiceai_has_no_chat_capability() -> None:
    with pytest.raises(UnsupportedTaskForModel) as info:
        _build("spiceai:foo")
    assert info.value.task == "llm"
    assert BackendSelector.SPICEAI not in supported()


def test_openai_builds_lazily_without_credentials() -> None:
    adapter = _build("openai:gpt-4o")
    assert isinstance(adapter, OpenAIChat)
    assert adapter.model_id == "gpt-4o"


def test_openai_without_model_id_uses_default() -> None:
    adapter = _build("openai")
    assert adapter.model_id == "gpt-4o-mini"


@pytest.mark.parametrize("value", ["-0.5", "warm"])
def test_openai_rejects_bad_temperature(value: str) -> None:
    with pytest.raises(InvalidParamError) as info:
        _build("openai:gpt-4o", {"openai_temperature": value})
    assert str(info.value) == "Invalid value for parameter 'openai_temperature'. Ensure it is a non-negative number."


def test_azure_requires_model_id() -> None:
    with pytest.raises(FailedToLoadModel) as info:
        _build("azure", {"endpoint": "https://x", "azure_api_key": "k"})
    assert "Azure model 'm' requires a model ID" in str(info.value)


def test_azure_requires_endpoint() -> None:
    with pytest.raises(FailedToLoadModel) as info:
        _build("azure:gpt-4o", {"azure_api_key": "k"})
    assert "Azure model 'gpt-4o' requires the 'endpoint' parameter." in str(info.value)


def test_azure_rejects_both_credentials() -> None:
    with pytest.raises(FailedToLoadModel, match="allows only one"):
        _build("azure:gpt-4o", {"endpoint": "https://x", "azure_api_key": "k", "azure_entra_token": "t"})


def test_azure_requires_a_credential() -> None:
    with pytest.raises(FailedToLoadModel, match="requires either"):
        _build("azure:gpt-4o", {"endpoint": "https://x"})


def test_azure_builds_with_deployment_defaulting_to_model() -> None:
    adapter = _build("azure:gpt-4o", {"endpoint": "https://x", "azure_entra_token": "t"})
    assert isinstance(adapter, AzureOpenAIChat)
    assert adapter.deployment_name == "gpt-4o"
    assert adapter.api_version == "2024-10-21"


def test_anthropic_requires_key_or_token() -> None:
    with pytest.raises(FailedToLoadModel, match="`anthropic_api_key` or `anthropic_auth_token`"):
        _build("anthropic:claude-3-5-sonnet-latest")


def test_anthropic_rejects_unknown_model() -> None:
    with pytest.raises(FailedToLoadModel, match="Unknown anthropic model: 'gpt-4o'"):
        _build("anthropic:gpt-4o", {"anthropic_api_key": "k"})


def test_anthropic_accepts_auth_token() -> None:
    adapter = _build("anthropic:claude-3-5-haiku-latest", {"anthropic_auth_token": "t"})
    assert isinstance(adapter, AnthropicChat)


def test_xai_requires_key() -> None:
    with pytest.raises(FailedToLoadModel, match="No `xai_api_key` provided for xAI model."):
        _build("xai:grok-2")


def test_xai_builds() -> None:
    adapter = _build("xai", {"xai_api_key": "k"})
    assert isinstance(adapter, XaiChat)
    assert adapter.model_id == "grok-2-latest"


def test_huggingface_requires_model_id() -> None:
    with pytest.raises(FailedToLoadModel, match="No model id for Huggingface model"):
        _build("huggingface")


def test_file_requires_weights() -> None:
    with pytest.raises(FailedToLoadModel, match="No 'weights_path' parameter provided"):
        _build("file")


def test_load_events_never_include_secret_values(log_events) -> None:
    _build("openai:gpt-4o", {"openai_api_key": "sk-very-secret"})
    start = log_events.named("model.load.start")[0]
    assert start["params"] == ["openai_api_key"]
    assert all("sk-very-secret" not in str(p) for p in log_events.all)
    assert log_events.named("model.load.ok")[0]["adapter"] == "OpenAIChat"


def test_load_error_is_logged(log_events) -> None:
    with pytest.raises(FailedToLoadModel):
        _build("xai:grok-2")
    [error] = log_events.named("model.load.error")
    assert error["code"] == "validation"
    assert error["_level"] == "WARNING"


def test_openai_accepts_valid_temperature() -> None:
    assert isinstance(_build("openai:gpt-4o", {"openai_temperature": "0.7"}), OpenAIChat)


def test_azure_builds_with_api_key_only() -> None:
    adapter = _build(
        "azure:gpt-4o",
        {"endpoint": "https://x", "azure_api_key": "k", "azure_deployment_name": "prod-gpt4o"},
    )
    assert adapter.deployment_name == "prod-gpt4o"


def test_first_gguf_path_is_case_insensitive() -> None:
    from chat_runtime.base.factory_parts import first_gguf_path

    descriptor = _descriptor(
        "huggingface:org/repo",
        files=[{"path": "config.json"}, {"path": "weights/model.Q4.GGUF"}, {"path": "other.gguf"}],
    )
    assert first_gguf_path(descriptor) == "weights/model.Q4.GGUF"
    assert first_gguf_path(_descriptor("huggingface:org/repo", files=[{"path": "model.safetensors"}])) is None
