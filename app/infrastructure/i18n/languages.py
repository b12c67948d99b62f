"""Language registry for translation bundles.

Closed catalogue of the languages a bundle directory may be named after,
plus helpers to resolve values that vary per language.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Language:
    """A supported language.

    Attributes:
        code: ISO 639-1 code, also the name of the bundle subdirectory.
        name: English name of the language.
        local_name: Name of the language in the language itself.
    """

    code: str
    name: str
    local_name: str

    def __str__(self) -> str:
        return self.code


LANGUAGES = (
    Language("en", "English", "English"),
    Language("es", "Spanish", "Español"),
    Language("fr", "French", "Français"),
    Language("de", "German", "Deutsch"),
    Language("it", "Italian", "Italiano"),
    Language("pt", "Portuguese", "Português"),
    Language("ru", "Russian", "Русский"),
    Language("ja", "Japanese", "日本語"),
    Language("ko", "Korean", "한국어"),
    Language("zh", "Chinese", "中文"),
    Language("ar", "Arabic", "العربية"),
    Language("hi", "Hindi", "हिन्दी"),
    Language("nl", "Dutch", "Nederlands"),
    Language("sv", "Swedish", "Svenska"),
    Language("no", "Norwegian", "Norsk"),
    Language("da", "Danish", "Dansk"),
    Language("fi", "Finnish", "Suomi"),
    Language("pl", "Polish", "Polski"),
    Language("tr", "Turkish", "Türkçe"),
    Language("he", "Hebrew", "עברית"),
    Language("th", "Thai", "ไทย"),
    Language("vi", "Vietnamese", "Tiếng Việt"),
    Language("cs", "Czech", "Čeština"),
    Language("hu", "Hungarian", "Magyar"),
    Language("ro", "Romanian", "Română"),
    Language("el", "Greek", "Ελληνικά"),
)

_BY_CODE: Dict[str, Language] = {language.code: language for language in LANGUAGES}


def get_language(code: str) -> Optional[Language]:
    """Look up a language by its code.

    Args:
        code: Language code (e.g., "fr").

    Returns:
        The matching Language, or None if the code is not in the registry.
    """
    return _BY_CODE.get(code)


def is_known_language(code: str) -> bool:
    """Check whether a code belongs to the registry."""
    return code in _BY_CODE


# A value given either per language code (with "*" as fallback) or computed
# from the Language itself.
PerLanguage = Union[Mapping[str, T], Callable[[Language], T]]


def resolve_per_language(
    value: Union[T, PerLanguage, None], language: Language
) -> Optional[T]:
    """Resolve a possibly per-language value for a specific language.

    Args:
        value: A plain value, a mapping keyed by language code (``"*"`` is
            the fallback key), a callable taking the Language, or None.
        language: Language to resolve for.

    Returns:
        The resolved value, or None.
    """
    if value is None:
        return None
    if callable(value):
        return value(language)
    if isinstance(value, Mapping):
        if language.code in value:
            return value[language.code]
        return value.get("*")
    return value
