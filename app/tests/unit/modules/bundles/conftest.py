"""Feature-level fixtures for bundle engine tests."""

import json

import pytest
import yaml


@pytest.fixture
def bundles_root(tmp_path):
    """Create a root directory with language subdirectories.

    Returns a directory structure like:
    - en/common.yml
    - en/pages/home.json
    - fr/common.yml
    - xx/common.yml      (unknown language code)
    - README.md          (not a directory)
    """
    en = tmp_path / "en"
    (en / "pages").mkdir(parents=True)
    with open(en / "common.yml", "w", encoding="utf-8") as f:
        yaml.safe_dump({"greeting": "Hello", "nav": {"home": "Home"}}, f)
    with open(en / "pages" / "home.json", "w", encoding="utf-8") as f:
        json.dump({"home": {"title": "Welcome", "cta": "Start"}}, f)

    fr = tmp_path / "fr"
    fr.mkdir()
    with open(fr / "common.yml", "w", encoding="utf-8") as f:
        yaml.safe_dump({"greeting": "Bonjour", "obsolete": "x"}, f)

    xx = tmp_path / "xx"
    xx.mkdir()
    with open(xx / "common.yml", "w", encoding="utf-8") as f:
        yaml.safe_dump({"greeting": "?"}, f)

    (tmp_path / "README.md").write_text("not a bundle", encoding="utf-8")
    return tmp_path


@pytest.fixture
def nested_document():
    """Nested document with only string leaves."""
    return {
        "greeting": "Hello",
        "nav": {
            "home": "Home",
            "account": {"login": "Log in", "logout": "Log out"},
        },
        "footer": {"copyright": "© 2024"},
    }
