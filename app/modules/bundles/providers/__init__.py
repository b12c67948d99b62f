"""Translation providers for bundles."""

from modules.bundles.providers.base import (
    TranslationItem,
    TranslationProvider,
    TranslationRequest,
    TranslationResult,
)

__all__ = [
    "TranslationItem",
    "TranslationProvider",
    "TranslationRequest",
    "TranslationResult",
]
