import sys
from pathlib import Path

# Ensure the application root (app/) is importable regardless of how pytest
# was invoked.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from tests.factories.bundles import StubProvider, make_bundle  # noqa: E402


@pytest.fixture
def stub_provider():
    """Provider returning "<lang>:<source text>" for every item."""
    return StubProvider()


@pytest.fixture
def source_bundle():
    """English bundle with one common.yml resource."""
    return make_bundle(
        "en",
        {"common.yml": {"greeting": "Hello", "nav": {"home": "Home"}}},
    )


@pytest.fixture
def empty_target_bundle():
    """French bundle without any resources."""
    return make_bundle("fr")
