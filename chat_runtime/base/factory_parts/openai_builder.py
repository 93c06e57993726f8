"""Builder for ``openai:`` sources."""

from __future__ import annotations

from typing import Optional

from ..errors import InvalidParamError
from ..interfaces import ChatModel
from ..models import ModelDescriptor, SecretParameterMap

TEMPERATURE_PARAM = "openai_temperature"


def validate_temperature(raw: Optional[str]) -> None:
    """Reject a temperature that is not a non-negative number.

    The value itself reaches requests through the ``openai_`` request
    overrides; only its validity is checked at load time.
    """
    if raw is None:
        return
    try:
        temperature = float(raw)
    except ValueError as exc:
        raise InvalidParamError(TEMPERATURE_PARAM, "Ensure it is a non-negative number.") from exc
    if temperature < 0.0:
        raise InvalidParamError(TEMPERATURE_PARAM, "Ensure it is a non-negative number.")


def build_openai(descriptor: ModelDescriptor, params: SecretParameterMap) -> ChatModel:
    validate_temperature(params.get_secret(TEMPERATURE_PARAM))
    from ...openai import OpenAIChat

    # A missing model id resolves to the configured default inside the adapter.
    return OpenAIChat(
        descriptor.get_model_id(),
        api_key=params.get_secret("openai_api_key"),
        base_url=params.get_secret("endpoint"),
        org_id=params.get_secret("openai_org_id"),
        project_id=params.get_secret("openai_project_id"),
    )


__all__ = ["build_openai", "validate_temperature"]
