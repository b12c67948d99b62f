"""Bundle - every translation resource for one language.

A bundle is a directory of resource files named after a language code. Key
reads go through the union of all resources' flat views; key writes are
routed to the resource that owns the key's root (its first dotted segment).
"""

import asyncio
import json
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple, Union

from infrastructure.i18n import Language, get_language
from infrastructure.logging import get_module_logger
from modules.bundles.models import ResourceFormat, Translation
from modules.bundles.patch import Patch
from modules.bundles.providers.base import TranslationProvider
from modules.bundles.resource import Resource
from modules.bundles.translator import TranslateOptions, Translator

logger = get_module_logger()

RESOURCE_PATTERNS = ("*.yml", "*.yaml", "*.json")

KeyFilter = Union[re.Pattern, Callable[[str], bool]]
PatchHook = Callable[["Bundle", Patch], None]


class Bundle:
    """Translation resources for a single language.

    Attributes:
        language: Language of every resource in the bundle.
        bundle_path: Directory the bundle is loaded from and written to.
        default_format: Format for new resources when the bundle has none yet.
    """

    def __init__(
        self,
        language: Language,
        bundle_path: Union[str, Path],
        default_format: ResourceFormat = ResourceFormat.YAML,
    ):
        self.language = language
        self.bundle_path = Path(bundle_path)
        self.default_format = default_format
        self._resources: List[Resource] = []

    def __repr__(self) -> str:
        return (
            f"Bundle(language={self.language.code!r}, "
            f"resources={[it.relpath for it in self._resources]!r})"
        )

    def clone(self) -> "Bundle":
        """Return a deep, independent copy of the bundle and its resources."""
        clone = Bundle(self.language, self.bundle_path, self.default_format)
        for resource in self._resources:
            clone._resources.append(resource.clone())
        return clone

    # Loading

    @classmethod
    async def load_many(
        cls,
        root_path: Union[str, Path],
        default_format: ResourceFormat = ResourceFormat.YAML,
    ) -> List["Bundle"]:
        """Load one bundle per language subdirectory of a root directory.

        Subdirectories whose name is not a known language code are skipped.

        Args:
            root_path: Directory containing one subdirectory per language.
            default_format: Default format passed to every loaded bundle.

        Returns:
            Loaded bundles, ordered by language code.
        """
        bundles: List[Bundle] = []
        for entry in sorted(Path(root_path).iterdir()):
            if not entry.is_dir():
                continue

            language = get_language(entry.name)
            if language is None:
                logger.warning(
                    "unknown_language_skipped",
                    language_code=entry.name,
                    path=str(entry),
                )
                continue

            bundles.append(await cls.load(language, entry, default_format))

        logger.info(
            "bundles_loaded",
            root_path=str(root_path),
            languages=[bundle.language.code for bundle in bundles],
        )
        return bundles

    @classmethod
    async def load(
        cls,
        language: Language,
        bundle_path: Union[str, Path],
        default_format: ResourceFormat = ResourceFormat.YAML,
    ) -> "Bundle":
        """Load every resource file found under a bundle directory.

        Raises:
            InvalidDocumentError: If a resource file cannot be decoded.
        """
        bundle = cls(language, bundle_path, default_format)
        files = sorted(
            {
                path
                for pattern in RESOURCE_PATTERNS
                for path in bundle.bundle_path.rglob(pattern)
                if path.is_file()
            }
        )
        for file_path in files:
            relpath = file_path.relative_to(bundle.bundle_path).as_posix()
            await bundle.load_resource(relpath, file_path)

        logger.info(
            "bundle_loaded",
            language=language.code,
            path=str(bundle.bundle_path),
            resource_count=len(bundle._resources),
        )
        return bundle

    # Resources

    @property
    def resources(self) -> Tuple[Resource, ...]:
        return tuple(self._resources)

    def add_resource(self, resource: Resource) -> Resource:
        self._resources.append(resource)
        return resource

    def add_empty_resource(
        self, name_or_relpath: str, format: Optional[ResourceFormat] = None
    ) -> Resource:
        """Create and add an empty resource.

        Args:
            name_or_relpath: A relative path, or a bare name to which the
                format's extension is appended.
            format: Format of the new resource; defaults to the format of the
                first existing resource, then to the bundle's default format.
        """
        if format is None:
            format = self._resources[0].format if self._resources else self.default_format

        if "." in Path(name_or_relpath).name:
            relpath = name_or_relpath
        else:
            relpath = f"{name_or_relpath}.{format.extension}"

        logger.debug("resource_created", language=self.language.code, relpath=relpath)
        return self.add_resource(Resource.empty(relpath, format))

    async def load_resource(self, relpath: str, file_path: Union[str, Path]) -> Resource:
        resource = await Resource.load(relpath, file_path)
        return self.add_resource(resource)

    def resource_for(self, relpath: str) -> Optional[Resource]:
        """Return the resource at a relative path, if any."""
        for resource in self._resources:
            if resource.relpath == relpath:
                return resource
        return None

    def resource_for_root(self, root: str) -> Optional[Resource]:
        """Return the first resource owning a root, if any."""
        for resource in self._resources:
            if root in resource.roots():
                return resource
        return None

    # Accessors

    def flattened(self) -> Dict[str, str]:
        """Union of all resources' flat views; later resources win on collision."""
        flattened: Dict[str, str] = {}
        for resource in self._resources:
            flattened.update(resource.flattened())
        return flattened

    def flat_keys(self) -> List[str]:
        return list(self.flattened().keys())

    def flat_entries(self) -> List[Tuple[str, str]]:
        return list(self.flattened().items())

    # Get & set

    def get(self, key: str) -> Optional[str]:
        return self.flattened().get(key)

    def set(self, key: str, value: Translation) -> None:
        """Write a key to the resource owning its root.

        If no resource owns the root, a new one named after the root is
        created and receives the write.
        """
        root = key.split(".")[0]
        resource = self.resource_for_root(root)
        if resource is None:
            resource = self.add_empty_resource(root)
        resource.set(key, value)

    def remove(self, key: str) -> None:
        """Remove a key from every resource that has it."""
        for resource in self._resources:
            resource.remove(key)

    # Merge

    def merge_defaults_from(self, other: "Bundle") -> None:
        """Backfill structure and content from another bundle.

        Each of the other bundle's resources is matched by relative path,
        created locally if missing, and merged without overwriting.
        """
        for source in other.resources:
            target = self.resource_for(source.relpath)
            if target is None:
                target = self.add_resource(Resource.empty(source.relpath, source.format))
            target.merge_defaults_from(source)

    # Diffing & translating

    async def translate_from(
        self,
        source: "Bundle",
        provider: TranslationProvider,
        *,
        incremental: bool = True,
        filter: Optional[KeyFilter] = None,
        options: Optional[TranslateOptions] = None,
        on_pre_apply: Optional[PatchHook] = None,
        on_post_apply: Optional[PatchHook] = None,
    ) -> "Bundle":
        """Bring a copy of this bundle in line with a source bundle.

        Keys missing here are translated (or, when not incremental, every key
        currently here is retranslated); keys absent from the source are
        removed. The resulting patch is applied to a clone, which is returned;
        this bundle is left untouched.

        Args:
            source: Authoritative bundle.
            provider: Translation backend.
            incremental: Only translate keys missing from this bundle.
            filter: Regex or predicate restricting the keys to translate.
            options: Purpose, notes and batch size for the provider.
            on_pre_apply: Called with the clone and patch before applying.
            on_post_apply: Called with the clone and patch after applying.

        Raises:
            ProviderError: If translation fails; nothing is applied.
        """
        theirs = source.flat_keys()
        ours = self.flat_keys()
        their_set, our_set = set(theirs), set(ours)

        if incremental:
            keys = [key for key in theirs if key not in our_set]
        else:
            keys = list(ours)
        keys = select_keys(keys, filter)

        translator = Translator(source, self, provider)
        patch = await translator.translate(keys, options)

        # A local leaf on a parent path of a source key is replaced by that
        # key's Set; removing it afterwards would drop the new namespace.
        their_parents = _parent_paths(theirs)
        keys_to_remove = [
            key for key in ours if key not in their_set and key not in their_parents
        ]
        for key in keys_to_remove:
            patch.remove(key)

        logger.info(
            "bundle_diffed",
            source_language=source.language.code,
            target_language=self.language.code,
            translated=len(keys),
            removed=len(keys_to_remove),
        )

        clone = self.clone()
        if on_pre_apply is not None:
            on_pre_apply(clone, patch)
        patch.apply(clone, source)
        if on_post_apply is not None:
            on_post_apply(clone, patch)
        return clone

    # Writing

    async def write(self) -> List[Path]:
        """Write every resource under the bundle directory.

        Resources target distinct files and are written concurrently.
        """
        self.bundle_path.mkdir(parents=True, exist_ok=True)
        paths = await asyncio.gather(
            *(resource.write(self.bundle_path) for resource in self._resources)
        )
        logger.info(
            "bundle_written",
            language=self.language.code,
            path=str(self.bundle_path),
            resource_count=len(paths),
        )
        return list(paths)

    # Diagnostics

    def describe(self) -> List[str]:
        """Human-readable lines listing every resource and its entries."""
        lines: List[str] = []
        for resource in self._resources:
            lines.append(resource.relpath)
            for key, value in resource.flat_entries():
                lines.append(f"  {key} = {json.dumps(value, ensure_ascii=False)}")
            lines.append("")
        return lines


def _matches(key_filter: KeyFilter, key: str) -> bool:
    if isinstance(key_filter, re.Pattern):
        return key_filter.search(key) is not None
    return bool(key_filter(key))


def select_keys(keys: Sequence[str], key_filter: Optional[KeyFilter]) -> List[str]:
    """Keys accepted by a filter, in order."""
    if key_filter is None:
        return list(keys)
    return [key for key in keys if _matches(key_filter, key)]


def _parent_paths(keys: Sequence[str]) -> Set[str]:
    """Every proper dotted prefix of the given keys."""
    parents: Set[str] = set()
    for key in keys:
        segments = key.split(".")
        for depth in range(1, len(segments)):
            parents.add(".".join(segments[:depth]))
    return parents
