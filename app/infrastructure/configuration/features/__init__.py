"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.bundles import BundleSettings

__all__ = [
    "BundleSettings",
]
