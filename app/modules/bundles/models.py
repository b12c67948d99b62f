"""Document tree model for translation resources.

A document is a tree of namespaces whose leaves are strings. The tree is
modelled with two node types:

  - Leaf: a translated string
  - Namespace: an ordered mapping from key to child node

Plain data (as produced by the YAML/JSON decoders) is converted into nodes
with from_plain(); values that are neither strings nor mappings are dropped
at that point, so the tree never contains them.

The flattened form of a tree maps dotted keys ("nav.home") to leaf strings.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Union

from modules.bundles.errors import UnsupportedFormatError


@dataclass
class Leaf:
    """A string value at the end of a key path."""

    text: str


@dataclass
class Namespace:
    """An ordered mapping of keys to child nodes."""

    children: Dict[str, "Node"] = field(default_factory=dict)


Node = Union[Leaf, Namespace]

# Values accepted wherever a translation value is written: a string, a nested
# mapping of strings, or an already-built node.
Translation = Union[str, Mapping[str, Any], Leaf, Namespace]


class ResourceFormat(str, Enum):
    """Serialization format of a resource file."""

    YAML = "yaml"
    JSON = "json"

    @property
    def extension(self) -> str:
        """File extension used when creating new resources of this format."""
        return "yml" if self is ResourceFormat.YAML else "json"

    @classmethod
    def from_path(cls, path: Union[str, PurePath]) -> "ResourceFormat":
        """Infer the format from a file path's extension.

        Raises:
            UnsupportedFormatError: If the extension is not .yml, .yaml or .json.
        """
        suffix = PurePath(path).suffix.lower()
        if suffix in (".yml", ".yaml"):
            return cls.YAML
        if suffix == ".json":
            return cls.JSON
        raise UnsupportedFormatError(f"Unsupported file extension: {suffix}")


def from_plain(data: Mapping[str, Any]) -> Namespace:
    """Build a Namespace from decoded plain data, skipping invalid leaves."""
    namespace = Namespace()
    for key, value in data.items():
        node = to_node(value)
        if node is not None:
            namespace.children[str(key)] = node
    return namespace


def to_node(value: Any) -> Union[Node, None]:
    """Convert a single translation value to a node.

    Nodes are copied, so the result never shares structure with the input.

    Returns:
        The node, or None when the value is neither a string nor a mapping.
    """
    match value:
        case Leaf() | Namespace():
            return copy.deepcopy(value)
        case str():
            return Leaf(value)
        case Mapping():
            return from_plain(value)
        case _:
            return None


def to_plain(node: Node) -> Union[str, Dict[str, Any]]:
    """Convert a node back to plain strings and dicts."""
    match node:
        case Leaf(text=text):
            return text
        case Namespace(children=children):
            return {key: to_plain(child) for key, child in children.items()}


def flatten(namespace: Namespace, prefix: str = "") -> Dict[str, str]:
    """Flatten a tree into dotted keys, depth first, in document order."""
    flattened: Dict[str, str] = {}
    for key, child in namespace.children.items():
        path = f"{prefix}.{key}" if prefix else key
        match child:
            case Leaf(text=text):
                flattened[path] = text
            case Namespace():
                flattened.update(flatten(child, path))
    return flattened


def unflatten(flattened: Mapping[str, str]) -> Dict[str, Any]:
    """Rebuild nested plain data from dotted keys."""
    result: Dict[str, Any] = {}
    for key, value in flattened.items():
        *parents, last = key.split(".")
        current = result
        for segment in parents:
            current = current.setdefault(segment, {})
        current[last] = value
    return result
