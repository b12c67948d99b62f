"""Entry point: synchronize translation bundles from a source language."""

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from infrastructure.configuration import settings
from infrastructure.i18n import get_language
from infrastructure.logging import configure_logging, get_module_logger
from modules.bundles import Bundle, ResourceFormat, TranslateOptions
from modules.bundles.providers import TranslationProvider
from modules.bundles.providers.openai_responses import OpenAITranslationProvider

logger = get_module_logger()


async def sync_bundles(
    root_path: Path,
    source_code: str,
    target_codes: Optional[Sequence[str]] = None,
    provider: Optional[TranslationProvider] = None,
    incremental: bool = True,
    batch_size: Optional[int] = None,
    purpose: Optional[str] = None,
) -> List[Bundle]:
    """Translate target bundles from the source bundle and write them.

    Args:
        root_path: Directory with one subdirectory per language code.
        source_code: Language code of the authoritative bundle.
        target_codes: Languages to produce; defaults to every other loaded bundle.
            Targets without a directory yet start from an empty bundle.
        provider: Translation backend (default: OpenAI from settings).
        incremental: Only translate keys missing from each target.
        batch_size: Keys per provider request (default: settings).
        purpose: Short description of the application for the provider.

    Returns:
        The written target bundles.
    """
    default_format = ResourceFormat(settings.bundles.default_format)
    bundles = {
        bundle.language.code: bundle
        for bundle in await Bundle.load_many(root_path, default_format)
    }

    source = bundles.get(source_code)
    if source is None:
        raise ValueError(f"No bundle found for source language: {source_code}")

    if target_codes is None:
        target_codes = [code for code in bundles if code != source_code]

    targets = []
    for code in target_codes:
        language = get_language(code)
        if language is None:
            raise ValueError(f"Unknown target language: {code}")
        targets.append(
            bundles.get(code) or Bundle(language, Path(root_path) / code, default_format)
        )

    provider = provider or OpenAITranslationProvider()
    options = TranslateOptions(
        purpose=purpose,
        batch_size=batch_size or settings.bundles.batch_size,
    )

    written = []
    for target in targets:
        result = await target.translate_from(
            source, provider, incremental=incremental, options=options
        )
        await result.write()
        written.append(result)

    logger.info(
        "bundles_synchronized",
        source_language=source_code,
        target_languages=[bundle.language.code for bundle in written],
    )
    return written


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Command-line wrapper around sync_bundles."""
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("root", type=Path, help="directory of language subdirectories")
    parser.add_argument("source", help="source language code")
    parser.add_argument("targets", nargs="*", help="target language codes")
    parser.add_argument("--full", action="store_true", help="retranslate every key")
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--purpose", default=None)
    args = parser.parse_args(argv)

    asyncio.run(
        sync_bundles(
            args.root,
            args.source,
            args.targets or None,
            incremental=not args.full,
            batch_size=args.batch_size,
            purpose=args.purpose,
        )
    )


if __name__ == "__main__":
    main()
