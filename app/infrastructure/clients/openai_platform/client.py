"""OpenAI client factory.

Builds an async OpenAI client from settings. The credential is checked here,
before any request is made.
"""

from typing import Any, Optional

from openai import AsyncOpenAI

from infrastructure.configuration import OpenAISettings, settings
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class MissingCredentialsError(ValueError):
    """Raised when no OpenAI API key is configured."""

    pass


def create_openai_client(
    openai_settings: Optional[OpenAISettings] = None, **client_options: Any
) -> AsyncOpenAI:
    """Create an AsyncOpenAI client.

    Args:
        openai_settings: Settings to read the API key from (default: global settings).
        **client_options: Extra AsyncOpenAI options (timeout, base_url, ...).

    Returns:
        Configured AsyncOpenAI client.

    Raises:
        MissingCredentialsError: If no API key is configured.
    """
    openai_settings = openai_settings or settings.openai
    if not openai_settings.api_key:
        logger.error("openai_api_key_missing")
        raise MissingCredentialsError("OpenAI API key is not configured (OPENAI_APIKEY)")

    logger.debug("openai_client_created", model=openai_settings.model)
    return AsyncOpenAI(api_key=openai_settings.api_key, **client_options)
