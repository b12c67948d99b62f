"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    OpenAISettings: OpenAI integration settings class
    BundleSettings: Bundle feature settings class

Example:
    ```python
    from infrastructure.configuration import settings

    api_key = settings.openai.api_key
    batch_size = settings.bundles.batch_size
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.integrations import OpenAISettings
from infrastructure.configuration.features import BundleSettings

__all__ = ["settings", "Settings", "OpenAISettings", "BundleSettings"]
