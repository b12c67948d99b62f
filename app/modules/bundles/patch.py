"""Patch - an ordered record of edits between two bundle states.

Modifications are kept in the order they were recorded and applied in that
order; later writes to the same key win.
"""

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from infrastructure.logging import get_module_logger
from modules.bundles.models import Leaf, Namespace, Translation, to_plain

if TYPE_CHECKING:
    from modules.bundles.bundle import Bundle

logger = get_module_logger()


@dataclass(frozen=True)
class SetModification:
    """Add or replace the value at a key."""

    key: str
    value: Translation


@dataclass(frozen=True)
class RemoveModification:
    """Remove the value at a key."""

    key: str


@dataclass(frozen=True)
class TranslateModification:
    """Record that a key was translated from another language.

    Informational only; applying a patch skips it.
    """

    key: str
    source_language: str
    source_value: Translation


Modification = Union[SetModification, RemoveModification, TranslateModification]


def _dump(value: Translation) -> str:
    if isinstance(value, (Leaf, Namespace)):
        value = to_plain(value)
    return json.dumps(value, ensure_ascii=False)


class Patch:
    """Ordered list of pending edits to a bundle."""

    def __init__(self):
        self._modifications: List[Modification] = []

    @property
    def modifications(self) -> Tuple[Modification, ...]:
        return tuple(self._modifications)

    def __len__(self) -> int:
        return len(self._modifications)

    def is_empty(self) -> bool:
        return not self._modifications

    # Building

    def set(self, key: str, value: Translation) -> None:
        self._modifications.append(SetModification(key, value))

    def remove(self, key: str) -> None:
        self._modifications.append(RemoveModification(key))

    def translate(self, key: str, source_language: str, source_value: Translation) -> None:
        self._modifications.append(
            TranslateModification(key, source_language, source_value)
        )

    # Application

    def apply(self, target: "Bundle", source: Optional["Bundle"] = None) -> None:
        """Apply every modification to the target bundle, in order.

        When a source bundle is given, a key whose root is new to the target
        is written to a resource at the same relative path as the source
        resource holding that root, creating it if needed. Without a source,
        new roots go wherever Bundle.set puts them.

        Args:
            target: Bundle to modify in place.
            source: Bundle whose file layout new roots should follow.
        """
        set_count = remove_count = 0
        for modification in self._modifications:
            match modification:
                case SetModification(key=key, value=value):
                    if source is not None:
                        self._follow_source_layout(key, target, source)
                    target.set(key, value)
                    set_count += 1
                case RemoveModification(key=key):
                    target.remove(key)
                    remove_count += 1
                case TranslateModification():
                    pass

        logger.info(
            "patch_applied",
            language=target.language.code,
            set_count=set_count,
            remove_count=remove_count,
        )

    @staticmethod
    def _follow_source_layout(key: str, target: "Bundle", source: "Bundle") -> None:
        root = key.split(".")[0]
        if target.resource_for_root(root) is not None:
            return

        source_resource = source.resource_for_root(root)
        if source_resource is None:
            return

        resource = target.resource_for(source_resource.relpath)
        if resource is None:
            resource = target.add_empty_resource(
                source_resource.relpath, source_resource.format
            )
        resource.add_root(root)

    # Diagnostics

    def describe(self) -> List[str]:
        """Human-readable lines, one per modification."""
        lines = []
        for modification in self._modifications:
            match modification:
                case SetModification(key=key, value=value):
                    lines.append(f"+ {key} = {_dump(value)}")
                case TranslateModification(
                    key=key, source_language=language, source_value=value
                ):
                    lines.append(f"~ {key} = {_dump(value)} (from {language})")
                case RemoveModification(key=key):
                    lines.append(f"- {key}")
        return lines
