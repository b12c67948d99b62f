"""Errors for the bundles module."""

from typing import Any


class BundleError(Exception):
    """Base exception for all bundle-related errors.

    Example:
        try:
            bundle = await Bundle.load(language, path)
        except BundleError as e:
            logger.error("bundle_error", error=str(e))
    """

    pass


class UnsupportedFormatError(BundleError):
    """Raised when a document file has an extension no codec handles.

    Example:
        >>> ResourceFormat.from_path("messages.properties")
        Traceback (most recent call last):
        ...
        UnsupportedFormatError: Unsupported file extension: .properties
    """

    pass


class InvalidDocumentError(BundleError):
    """Raised when a decoded document is not a mapping at its top level."""

    pass


class ProviderError(BundleError):
    """Raised when the translation provider cannot produce a usable reply.

    Attributes:
        message: human-friendly message
        response: the raw provider response or error, when one is available
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class ProviderConfigurationError(ProviderError):
    """Raised at provider construction when its credential is missing."""

    pass


class ProviderRequestError(ProviderError):
    """Raised when a request to the provider fails in transport or at the API."""

    pass


class MalformedReplyError(ProviderError):
    """Raised when a provider reply cannot be read as key/translation pairs."""

    pass
