"""Translator - turns a list of keys into a Patch using a provider.

Keys are sent to the provider in batches, strictly one after another. Each
reply pair becomes a Set modification in the shared Patch, in reply order.
Any batch failure aborts the whole call and no Patch is returned.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Union

from infrastructure.i18n import PerLanguage, resolve_per_language
from infrastructure.logging import get_module_logger
from modules.bundles.patch import Patch
from modules.bundles.providers.base import (
    TranslationItem,
    TranslationProvider,
    TranslationRequest,
)

if TYPE_CHECKING:
    from modules.bundles.bundle import Bundle

logger = get_module_logger()

INSTRUCTIONS = """\
You are translating the user interface strings of a software application
from {source_language} into {target_language} ({target_local_name}).
{purpose}
You receive a list of ITEMS TO TRANSLATE, one per line as "key: text", followed
by a CONTEXT section with other strings from the same part of the application.
Use the context only to choose consistent wording; do not translate it.

Rules:
- Return one translation per item, using the item's key unchanged.
- Keep placeholders such as {{{{name}}}}, {{count}} or %(value)s exactly as written.
- Keep markup, line breaks and surrounding whitespace.
- Match the tone and length of the source text.
{notes}"""


@dataclass
class TranslateOptions:
    """Options for a translation run.

    Attributes:
        purpose: Short description of the application, given to the provider.
        notes: Extra guidance lines, either a list or a per-language value
            (mapping keyed by language code with "*" fallback, or a callable).
        batch_size: Keys per provider request; None sends all keys at once.
    """

    purpose: Optional[str] = None
    notes: Union[List[str], PerLanguage, None] = None
    batch_size: Optional[int] = None


def enumerate_batches(keys: Sequence[str], size: Optional[int]) -> Iterator[List[str]]:
    """Split keys into consecutive batches of at most `size`, in order."""
    if size is None:
        yield list(keys)
        return
    if size <= 0:
        raise ValueError(f"Batch size must be positive: {size}")
    for start in range(0, len(keys), size):
        yield list(keys[start : start + size])


def _root_of(key: str) -> str:
    return key.split(".")[0]


class Translator:
    """Computes translations for a target bundle from a source bundle.

    Attributes:
        source: Authoritative bundle providing the source text.
        target: Bundle being translated into.
        provider: Backend that performs the translation.
    """

    def __init__(self, source: "Bundle", target: "Bundle", provider: TranslationProvider):
        self.source = source
        self.target = target
        self.provider = provider

    async def translate(
        self,
        keys: Optional[Sequence[str]] = None,
        options: Optional[TranslateOptions] = None,
    ) -> Patch:
        """Translate keys of the source bundle into a Patch for the target.

        Args:
            keys: Flattened keys to translate; defaults to every source key.
            options: Purpose, notes and batch size.

        Returns:
            Patch with one Set modification per returned translation.

        Raises:
            ProviderError: If any batch fails; nothing is returned.
        """
        options = options or TranslateOptions()
        keys = list(self.source.flat_keys() if keys is None else keys)
        patch = Patch()
        if not keys:
            logger.info("translation_skipped", reason="no_keys")
            return patch

        instructions = self.build_instructions(options)
        batches = list(enumerate_batches(keys, options.batch_size))
        logger.info(
            "translation_started",
            source_language=self.source.language.code,
            target_language=self.target.language.code,
            key_count=len(keys),
            batch_count=len(batches),
        )

        for index, batch in enumerate(batches):
            try:
                await self._translate_batch(batch, instructions, patch)
            except Exception as e:
                logger.error(
                    "translation_batch_failed",
                    target_language=self.target.language.code,
                    batch_index=index,
                    batch_size=len(batch),
                    error=str(e),
                )
                raise

        logger.info(
            "translation_finished",
            target_language=self.target.language.code,
            modification_count=len(patch),
        )
        return patch

    async def _translate_batch(
        self, keys: List[str], instructions: str, patch: Patch
    ) -> None:
        request = TranslationRequest(
            instructions=instructions,
            source_language=self.source.language,
            target_language=self.target.language,
            items=self.build_items(keys),
            context=self.build_context(keys),
        )
        if not request.items:
            return

        results = await self.provider.translate(request)
        for result in results:
            patch.set(result.key, result.translation)

        logger.debug(
            "translation_batch_finished",
            requested=len(request.items),
            returned=len(results),
        )

    def build_items(self, keys: Sequence[str]) -> List[TranslationItem]:
        """Source text for each key; keys without source text are left out."""
        flattened = self.source.flattened()
        return [
            TranslationItem(key, flattened[key]) for key in keys if key in flattened
        ]

    def build_context(self, keys: Sequence[str]) -> List[TranslationItem]:
        """Every other source key sharing a root with one of the batch keys."""
        roots = {_root_of(key) for key in keys}
        batch = set(keys)
        return [
            TranslationItem(key, text)
            for key, text in self.source.flat_entries()
            if key not in batch and _root_of(key) in roots
        ]

    def build_instructions(self, options: TranslateOptions) -> str:
        notes = resolve_per_language(options.notes, self.target.language) or []
        purpose = (
            f"The purpose of the application is defined as: {options.purpose}.\n"
            if options.purpose
            else ""
        )
        return INSTRUCTIONS.format(
            source_language=self.source.language.name,
            target_language=self.target.language.name,
            target_local_name=self.target.language.local_name,
            purpose=purpose,
            notes="".join(f"- {note}\n" for note in notes),
        )
