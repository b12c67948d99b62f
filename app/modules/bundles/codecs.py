"""Text codecs for resource files.

Each ResourceFormat has one codec that turns a document tree into file text
and back. YAML keeps the tree's key order; JSON is pretty-printed with a
trailing newline.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict, Protocol

import yaml

from modules.bundles.errors import InvalidDocumentError
from modules.bundles.models import Namespace, ResourceFormat, from_plain, to_plain


class Codec(Protocol):
    """Encode/decode capability for one serialization format."""

    def encode(self, root: Namespace) -> str: ...

    def decode(self, text: str) -> Namespace: ...


def _as_document(data: Any, fmt: ResourceFormat) -> Namespace:
    # An empty file decodes to None and is treated as an empty document.
    if data is None:
        return Namespace()
    if not isinstance(data, Mapping):
        raise InvalidDocumentError(
            f"Top level of a {fmt.value} document must be a mapping, "
            f"got {type(data).__name__}"
        )
    return from_plain(data)


class YAMLCodec:
    """Tree-native serialization."""

    format = ResourceFormat.YAML

    def encode(self, root: Namespace) -> str:
        return yaml.safe_dump(
            to_plain(root),
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )

    def decode(self, text: str) -> Namespace:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InvalidDocumentError(f"Failed to parse YAML: {e}") from e
        return _as_document(data, self.format)


class JSONCodec:
    """Pretty-printed serialization."""

    format = ResourceFormat.JSON

    def encode(self, root: Namespace) -> str:
        return json.dumps(to_plain(root), indent=2, ensure_ascii=False) + "\n"

    def decode(self, text: str) -> Namespace:
        if not text.strip():
            return Namespace()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(f"Failed to parse JSON: {e}") from e
        return _as_document(data, self.format)


_CODECS: Dict[ResourceFormat, Codec] = {
    ResourceFormat.YAML: YAMLCodec(),
    ResourceFormat.JSON: JSONCodec(),
}


def codec_for(fmt: ResourceFormat) -> Codec:
    """Return the codec for a format."""
    return _CODECS[fmt]
