"""Language registry.

Main components:
- languages: Language, LANGUAGES, get_language, is_known_language,
  resolve_per_language
"""

from infrastructure.i18n.languages import (
    LANGUAGES,
    Language,
    PerLanguage,
    get_language,
    is_known_language,
    resolve_per_language,
)

__all__ = [
    "LANGUAGES",
    "Language",
    "PerLanguage",
    "get_language",
    "is_known_language",
    "resolve_per_language",
]
