"""Translation provider contract.

A provider receives the items to translate plus same-root context items and
returns key/translation pairs. It may return fewer pairs than requested.
"""

from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from infrastructure.i18n import Language


@dataclass(frozen=True)
class TranslationItem:
    """A source key and its source-language text."""

    key: str
    text: str


@dataclass(frozen=True)
class TranslationResult:
    """A key and its translated text, as returned by a provider."""

    key: str
    translation: str


@dataclass
class TranslationRequest:
    """One batch of work for a provider.

    Attributes:
        instructions: Free-text guidance (purpose, per-language notes).
        source_language: Language the items are written in.
        target_language: Language to translate into.
        items: Items to translate.
        context: Other items sharing a root with the batch, for disambiguation.
    """

    instructions: str
    source_language: Language
    target_language: Language
    items: List[TranslationItem] = field(default_factory=list)
    context: List[TranslationItem] = field(default_factory=list)


@runtime_checkable
class TranslationProvider(Protocol):
    """Protocol implemented by translation backends."""

    async def translate(
        self, request: TranslationRequest
    ) -> List[TranslationResult]:  # pragma: no cover - typing helper
        ...
