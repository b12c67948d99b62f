"""Translation provider backed by the OpenAI Responses API.

The request is rendered as plain text with an ITEMS TO TRANSLATE section and
a CONTEXT section; the reply is parsed into a pydantic schema of
key/translation pairs.
"""

import copy
from typing import Any, Dict, List, Optional

import openai
from pydantic import BaseModel, ValidationError

from infrastructure.clients.openai_platform import (
    MissingCredentialsError,
    create_openai_client,
)
from infrastructure.configuration import OpenAISettings, settings
from infrastructure.logging import get_module_logger
from modules.bundles.errors import (
    MalformedReplyError,
    ProviderConfigurationError,
    ProviderRequestError,
)
from modules.bundles.providers.base import TranslationRequest, TranslationResult

logger = get_module_logger()


class TranslationEntry(BaseModel):
    key: str
    translation: str


class TranslationReply(BaseModel):
    translations: List[TranslationEntry]


def render_input(request: TranslationRequest) -> str:
    """Render a request as the text input sent to the model."""
    lines = ["ITEMS TO TRANSLATE"]
    lines.extend(f"{item.key}: {item.text}" for item in request.items)
    lines.append("")
    lines.append("CONTEXT")
    lines.extend(f"{item.key}: {item.text}" for item in request.context)
    lines.append("")
    return "\n".join(lines)


def merge_parameters(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two parameter dicts without mutating either."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_parameters(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class OpenAITranslationProvider:
    """TranslationProvider using structured output from an OpenAI model.

    Args:
        client: AsyncOpenAI client; created from settings when omitted.
        model: Model name (default: settings.openai.model).
        model_parameters: Extra request parameters merged into every call
            (default: settings.openai.model_parameters).
        openai_settings: Settings used for the defaults above.

    Raises:
        ProviderConfigurationError: If no client is given and no API key is set.
    """

    def __init__(
        self,
        client: Optional[openai.AsyncOpenAI] = None,
        model: Optional[str] = None,
        model_parameters: Optional[Dict[str, Any]] = None,
        openai_settings: Optional[OpenAISettings] = None,
    ):
        openai_settings = openai_settings or settings.openai
        if client is None:
            try:
                client = create_openai_client(openai_settings)
            except MissingCredentialsError as e:
                raise ProviderConfigurationError(str(e)) from e

        self.client = client
        self.model = model or openai_settings.model
        self.model_parameters = (
            model_parameters
            if model_parameters is not None
            else openai_settings.model_parameters
        )

    async def translate(self, request: TranslationRequest) -> List[TranslationResult]:
        """Send one batch to the model and return the parsed pairs.

        Raises:
            ProviderRequestError: If the API call fails.
            MalformedReplyError: If the reply does not match the schema.
        """
        params = merge_parameters(
            {
                "model": self.model,
                "instructions": request.instructions,
                "input": render_input(request),
            },
            self.model_parameters,
        )

        logger.debug(
            "openai_request_started",
            model=self.model,
            target_language=request.target_language.code,
            item_count=len(request.items),
            context_count=len(request.context),
        )

        try:
            response = await self.client.responses.parse(
                text_format=TranslationReply, **params
            )
        except openai.OpenAIError as e:
            logger.error("openai_request_failed", model=self.model, error=str(e))
            raise ProviderRequestError(f"OpenAI request failed: {e}", response=e) from e
        except (ValidationError, ValueError) as e:
            logger.error("openai_reply_malformed", model=self.model, error=str(e))
            raise MalformedReplyError(f"Malformed reply from OpenAI: {e}") from e

        reply = response.output_parsed
        if not isinstance(reply, TranslationReply):
            logger.error("openai_reply_missing", model=self.model)
            raise MalformedReplyError(
                "OpenAI reply did not contain parsed translations", response=response
            )

        logger.debug(
            "openai_request_finished",
            model=self.model,
            returned=len(reply.translations),
        )
        return [
            TranslationResult(entry.key, entry.translation)
            for entry in reply.translations
        ]
