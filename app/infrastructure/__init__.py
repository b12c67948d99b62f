"""Infrastructure modules for the bundle sync application.

Centralized infrastructure components:
- configuration: Settings management (settings, Settings)
- logging: Structured logging (configure_logging, get_module_logger)
- i18n: Language registry
- clients: External service clients (OpenAI)
"""

from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger

__all__ = [
    "settings",
    "get_module_logger",
]
