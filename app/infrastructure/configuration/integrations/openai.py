"""OpenAI integration settings."""

from typing import Any, Dict

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings


def _default_model_parameters() -> Dict[str, Any]:
    return {
        "text": {"verbosity": "low"},
        "reasoning": {"effort": "minimal"},
    }


class OpenAISettings(IntegrationSettings):
    """OpenAI configuration used by the translation provider.

    Environment Variables:
        OPENAI_APIKEY: API key for the OpenAI platform (required to translate)
        OPENAI_MODEL: Model name (default: gpt-5)
        OPENAI_MODEL_PARAMETERS: JSON object merged into every request

    Example:
        ```python
        from infrastructure.configuration import settings

        api_key = settings.openai.api_key
        model = settings.openai.model
        ```
    """

    api_key: str | None = Field(default=None, alias="OPENAI_APIKEY")
    model: str = Field(default="gpt-5", alias="OPENAI_MODEL")
    model_parameters: Dict[str, Any] = Field(
        default_factory=_default_model_parameters,
        alias="OPENAI_MODEL_PARAMETERS",
    )

    @field_validator("model_parameters", mode="before")
    @classmethod
    def validate_model_parameters(cls, v: Any) -> Any:
        """Coerce anything that is not a mapping to an empty dict."""
        if v is None or not isinstance(v, dict):
            return {}
        return v
