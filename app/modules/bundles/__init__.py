"""Translation bundles - diff, merge and patch engine.

Keeps a target-language bundle in sync with a source-language bundle:
computes which keys are missing or stale, translates the missing ones through
a provider, and applies the result as a Patch that follows the source
bundle's file layout.

Main components:
- models: Leaf/Namespace document tree, ResourceFormat, flatten/unflatten
- codecs: YAML and JSON codecs
- resource: Resource (one document)
- bundle: Bundle (all documents of one language)
- patch: Patch and its modifications
- translator: Translator, TranslateOptions
- providers: TranslationProvider contract and the OpenAI provider
"""

from modules.bundles.bundle import Bundle
from modules.bundles.errors import (
    BundleError,
    InvalidDocumentError,
    MalformedReplyError,
    ProviderConfigurationError,
    ProviderError,
    ProviderRequestError,
    UnsupportedFormatError,
)
from modules.bundles.models import Leaf, Namespace, ResourceFormat, flatten, unflatten
from modules.bundles.patch import (
    Patch,
    RemoveModification,
    SetModification,
    TranslateModification,
)
from modules.bundles.resource import Resource
from modules.bundles.translator import TranslateOptions, Translator

__all__ = [
    "Bundle",
    "BundleError",
    "InvalidDocumentError",
    "Leaf",
    "MalformedReplyError",
    "Namespace",
    "Patch",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderRequestError",
    "RemoveModification",
    "Resource",
    "ResourceFormat",
    "SetModification",
    "TranslateModification",
    "TranslateOptions",
    "Translator",
    "UnsupportedFormatError",
    "flatten",
    "unflatten",
]
