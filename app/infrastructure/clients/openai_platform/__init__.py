"""OpenAI platform client."""

from infrastructure.clients.openai_platform.client import (
    MissingCredentialsError,
    create_openai_client,
)

__all__ = ["MissingCredentialsError", "create_openai_client"]
