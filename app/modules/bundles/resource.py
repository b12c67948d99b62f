"""Resource - one translation document and its place in a bundle.

A Resource owns a single document tree, identified by its path relative to
the bundle directory and by its serialization format. It exposes the tree as
a flat mapping of dotted keys and supports point mutation by dotted key.
"""

import asyncio
import copy
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from infrastructure.logging import get_module_logger
from modules.bundles.codecs import codec_for
from modules.bundles.models import (
    Leaf,
    Namespace,
    ResourceFormat,
    Translation,
    flatten,
    to_node,
    to_plain,
)

logger = get_module_logger()


class Resource:
    """A single translation document.

    Attributes:
        relpath: Path of the document relative to its bundle directory.
        format: Serialization format, fixed for the lifetime of the resource.
    """

    def __init__(
        self,
        relpath: str,
        format: ResourceFormat,
        root: Optional[Namespace] = None,
    ):
        self.relpath = relpath
        self.format = format
        self._root = root if root is not None else Namespace()
        self._registered_roots: Set[str] = set()
        self._flattened: Optional[Dict[str, str]] = None
        self._roots: Optional[List[str]] = None

    def __repr__(self) -> str:
        return f"Resource(relpath={self.relpath!r}, format={self.format.value})"

    @property
    def label(self) -> str:
        return self.relpath

    @property
    def codec(self):
        return codec_for(self.format)

    # Construction

    @classmethod
    def empty(cls, relpath: str, format: ResourceFormat) -> "Resource":
        """Create a resource with an empty document."""
        return cls(relpath, format)

    @classmethod
    async def load(cls, relpath: str, file_path: Union[str, Path]) -> "Resource":
        """Load a resource from a file, inferring the format from its extension.

        Args:
            relpath: Path relative to the bundle directory.
            file_path: Full path of the file to read.

        Raises:
            UnsupportedFormatError: If the file extension is not supported.
            InvalidDocumentError: If the file cannot be decoded to a mapping.
        """
        fmt = ResourceFormat.from_path(file_path)
        text = await asyncio.to_thread(Path(file_path).read_text, encoding="utf-8")
        root = codec_for(fmt).decode(text)
        resource = cls(relpath, fmt, root)
        logger.debug(
            "resource_loaded",
            relpath=relpath,
            format=fmt.value,
            key_count=len(resource.flattened()),
        )
        return resource

    def clone(self) -> "Resource":
        """Return an independent deep copy with the same identity."""
        clone = Resource(self.relpath, self.format, copy.deepcopy(self._root))
        clone._registered_roots = set(self._registered_roots)
        return clone

    # Flat view

    def flattened(self) -> Dict[str, str]:
        """Dotted key to leaf string for every leaf in the document.

        The flat view is cached until the next mutation; callers get a copy.
        """
        if self._flattened is None:
            self._flattened = flatten(self._root)
        return dict(self._flattened)

    def flat_keys(self) -> List[str]:
        return list(self.flattened().keys())

    def flat_entries(self) -> List[Tuple[str, str]]:
        return list(self.flattened().items())

    def roots(self) -> List[str]:
        """Sorted top-level keys, including roots registered ahead of content."""
        if self._roots is None:
            self._roots = sorted(set(self._root.children) | self._registered_roots)
        return self._roots

    def add_root(self, name: str) -> None:
        """Register a top-level key before any content is written under it.

        Lets a bundle route keys for a new namespace to this resource.
        """
        self._registered_roots.add(name)
        if self._roots is not None and name not in self._roots:
            self._roots = sorted([*self._roots, name])

    def to_plain(self) -> dict:
        return to_plain(self._root)

    # Mutation

    def _invalidate(self) -> None:
        self._flattened = None
        self._roots = None

    def get(self, key: str) -> Optional[Union[str, dict]]:
        """Read the value at a dotted key.

        Returns:
            The leaf string, a plain dict for a namespace, or None if absent.
        """
        node: Union[Leaf, Namespace] = self._root
        for segment in key.split("."):
            if not isinstance(node, Namespace) or segment not in node.children:
                return None
            node = node.children[segment]
        return to_plain(node)

    def set(self, key: str, value: Translation) -> None:
        """Write a value at a dotted key, creating namespaces along the way.

        A non-namespace value found at an intermediate segment is replaced
        by a new namespace, discarding that value.
        """
        node = to_node(value)
        if node is None:
            raise TypeError(
                f"Translation value must be a string or a mapping, got {type(value).__name__}"
            )
        *parents, last = key.split(".")
        current = self._root
        for segment in parents:
            child = current.children.get(segment)
            if not isinstance(child, Namespace):
                child = Namespace()
                current.children[segment] = child
            current = child

        current.children[last] = node
        self._invalidate()

    def remove(self, key: str) -> None:
        """Delete the value at a dotted key.

        Missing paths are ignored. Namespaces left empty are kept.
        """
        *parents, last = key.split(".")
        current = self._root
        for segment in parents:
            child = current.children.get(segment)
            if not isinstance(child, Namespace):
                return
            current = child

        if last in current.children:
            del current.children[last]
            self._invalidate()

    def merge_defaults_from(self, other: "Resource") -> None:
        """Copy every leaf of another resource that is absent here.

        Existing local values are never overwritten, including when the two
        trees disagree on shape: a key is skipped when a local leaf sits on
        one of its parent segments, or when a local namespace sits at the key.
        """
        for key, value in other.flat_entries():
            if self.get(key) is None and not self._has_leaf_above(key):
                self.set(key, value)

    def _has_leaf_above(self, key: str) -> bool:
        segments = key.split(".")
        return any(
            isinstance(self.get(".".join(segments[:depth])), str)
            for depth in range(1, len(segments))
        )

    # Writing

    async def write(self, bundle_path: Union[str, Path]) -> Path:
        """Encode the document and write it under the bundle directory.

        Returns:
            The path of the written file.
        """
        file_path = Path(bundle_path) / self.relpath
        text = self.codec.encode(self._root)

        def _write() -> None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(text, encoding="utf-8")

        await asyncio.to_thread(_write)
        logger.debug("resource_written", path=str(file_path), format=self.format.value)
        return file_path
