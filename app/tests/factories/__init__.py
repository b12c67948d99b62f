"""Test data factories for deterministic test data generation."""

from tests.factories.bundles import (
    FailingProvider,
    StubProvider,
    make_bundle,
    make_language,
    make_resource,
)

__all__ = [
    "FailingProvider",
    "StubProvider",
    "make_bundle",
    "make_language",
    "make_resource",
]
