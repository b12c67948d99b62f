"""Tests for modules.bundles.bundle module."""

import json
import re

import pytest
import yaml

from modules.bundles.bundle import Bundle
from modules.bundles.errors import ProviderRequestError
from modules.bundles.models import ResourceFormat
from modules.bundles.patch import Patch
from tests.factories.bundles import (
    FailingProvider,
    StubProvider,
    make_bundle,
    make_language,
)


class TestBundleAccessors:
    """Tests for flattened(), get(), set() and remove()."""

    def test_flattened_unions_resources(self):
        """The bundle view combines every resource's keys."""
        bundle = make_bundle(
            "en",
            {"common.yml": {"greeting": "Hello"}, "pages.yml": {"home": {"title": "Home"}}},
        )
        assert bundle.flattened() == {"greeting": "Hello", "home.title": "Home"}
        assert bundle.get("home.title") == "Home"
        assert bundle.get("missing") is None

    def test_flattened_later_resource_wins(self):
        """On a key collision the later resource's value is read."""
        bundle = make_bundle(
            "en",
            {"a.yml": {"greeting": "first"}, "b.yml": {"greeting": "second"}},
        )
        assert bundle.get("greeting") == "second"

    def test_set_routes_to_resource_owning_root(self):
        """set() writes to the resource whose roots include the key's root."""
        bundle = make_bundle(
            "en",
            {"common.yml": {"nav": {"home": "Home"}}, "pages.yml": {"home": {"title": "x"}}},
        )
        bundle.set("nav.about", "About")

        common = bundle.resource_for("common.yml")
        assert common.get("nav.about") == "About"
        assert bundle.resource_for("pages.yml").get("nav.about") is None

    def test_set_creates_resource_for_new_root(self):
        """An unowned root gets its own resource, in the first resource's format."""
        bundle = make_bundle("en", {"common.json": {"greeting": "Hello"}})
        bundle.set("errors.not_found", "Not found")

        resource = bundle.resource_for("errors.json")
        assert resource is not None
        assert resource.format is ResourceFormat.JSON
        assert resource.get("errors.not_found") == "Not found"

    def test_set_on_empty_bundle_uses_default_format(self):
        """Without resources, new ones use the bundle's default format."""
        bundle = make_bundle("en", default_format=ResourceFormat.JSON)
        bundle.set("greeting", "Hello")
        assert [it.relpath for it in bundle.resources] == ["greeting.json"]

    def test_remove_broadcasts_to_all_resources(self):
        """remove() deletes the key wherever it lives."""
        bundle = make_bundle(
            "en",
            {"a.yml": {"greeting": "first"}, "b.yml": {"greeting": "second", "x": "y"}},
        )
        bundle.remove("greeting")
        bundle.remove("does.not.exist")
        assert bundle.flattened() == {"x": "y"}


class TestBundleStructure:
    """Tests for resource management, merge and clone."""

    def test_add_empty_resource_name_gets_extension(self):
        """A bare name gets the format's extension; a relpath is kept."""
        bundle = make_bundle("en")
        assert bundle.add_empty_resource("nav").relpath == "nav.yml"
        assert (
            bundle.add_empty_resource("pages/home.json", ResourceFormat.JSON).relpath
            == "pages/home.json"
        )

    def test_merge_defaults_from_creates_and_backfills(self):
        """Missing resources are created; existing values are kept."""
        target = make_bundle("fr", {"common.yml": {"greeting": "Bonjour"}})
        source = make_bundle(
            "en",
            {
                "common.yml": {"greeting": "Hello", "bye": "Bye"},
                "pages/home.json": {"home": {"title": "Home"}},
            },
        )

        target.merge_defaults_from(source)

        assert [it.relpath for it in target.resources] == ["common.yml", "pages/home.json"]
        assert target.resource_for("pages/home.json").format is ResourceFormat.JSON
        assert target.flattened() == {
            "greeting": "Bonjour",
            "bye": "Bye",
            "home.title": "Home",
        }

    def test_clone_is_deep(self):
        """Changes to a clone do not reach the original."""
        original = make_bundle("fr", {"common.yml": {"greeting": "Bonjour"}})
        clone = original.clone()

        clone.set("greeting", "Salut")
        clone.set("nav.home", "Accueil")

        assert original.flattened() == {"greeting": "Bonjour"}
        assert len(original.resources) == 1
        assert clone.language == original.language
        assert clone.bundle_path == original.bundle_path

    def test_describe(self):
        """describe() lists each resource followed by its entries."""
        bundle = make_bundle("en", {"common.yml": {"greeting": "Hello"}})
        assert bundle.describe() == ["common.yml", '  greeting = "Hello"', ""]


class TestBundleIO:
    """Tests for load(), load_many() and write()."""

    @pytest.mark.asyncio
    async def test_load_finds_nested_resources(self, bundles_root):
        """load() reads YAML and JSON files recursively, keyed by relative path."""
        bundle = await Bundle.load(make_language("en"), bundles_root / "en")

        assert [it.relpath for it in bundle.resources] == ["common.yml", "pages/home.json"]
        assert bundle.get("home.title") == "Welcome"

    @pytest.mark.asyncio
    async def test_load_many_skips_unknown_languages(self, bundles_root):
        """Unknown language directories and plain files are skipped."""
        bundles = await Bundle.load_many(bundles_root)

        assert [bundle.language.code for bundle in bundles] == ["en", "fr"]

    @pytest.mark.asyncio
    async def test_load_many_passes_default_format(self, bundles_root):
        """Every loaded bundle carries the configured default format."""
        bundles = await Bundle.load_many(bundles_root, ResourceFormat.JSON)
        assert all(b.default_format is ResourceFormat.JSON for b in bundles)

    @pytest.mark.asyncio
    async def test_write_round_trip(self, tmp_path):
        """write() persists every resource in its own format."""
        bundle = make_bundle(
            "fr",
            {"common.yml": {"greeting": "Bonjour"}, "pages/home.json": {"title": "Accueil"}},
            bundle_path=tmp_path / "fr",
        )

        paths = await bundle.write()

        assert sorted(p.name for p in paths) == ["common.yml", "home.json"]
        assert yaml.safe_load((tmp_path / "fr" / "common.yml").read_text()) == {
            "greeting": "Bonjour"
        }
        assert json.loads((tmp_path / "fr" / "pages" / "home.json").read_text()) == {
            "title": "Accueil"
        }

        reloaded = await Bundle.load(make_language("fr"), tmp_path / "fr")
        assert reloaded.flattened() == bundle.flattened()


class TestTranslateFrom:
    """Tests for translate_from()."""

    @pytest.mark.asyncio
    async def test_empty_target_reproduces_source_layout(
        self, source_bundle, empty_target_bundle, stub_provider
    ):
        """An empty target receives every key in a same-named resource."""
        result = await empty_target_bundle.translate_from(source_bundle, stub_provider)

        assert [it.relpath for it in result.resources] == ["common.yml"]
        assert result.resource_for("common.yml").to_plain() == {
            "greeting": "fr:Hello",
            "nav": {"home": "fr:Home"},
        }

    @pytest.mark.asyncio
    async def test_original_target_is_untouched(
        self, source_bundle, empty_target_bundle, stub_provider
    ):
        """translate_from() returns a clone and leaves the target as it was."""
        result = await empty_target_bundle.translate_from(source_bundle, stub_provider)

        assert result is not empty_target_bundle
        assert empty_target_bundle.resources == ()

    @pytest.mark.asyncio
    async def test_incremental_adds_missing_and_removes_stale(self, stub_provider):
        """Keys in S\\T are added, T\\S removed, S∩T keep target values."""
        source = make_bundle(
            "en",
            {"common.yml": {"greeting": "Hello", "nav": {"home": "Home", "about": "About"}}},
        )
        target = make_bundle(
            "fr",
            {"common.yml": {"greeting": "Bonjour", "obsolete": "x", "nav": {"home": "Accueil"}}},
        )

        result = await target.translate_from(source, stub_provider)

        assert set(result.flat_keys()) == set(source.flat_keys())
        assert result.get("greeting") == "Bonjour"
        assert result.get("nav.home") == "Accueil"
        assert result.get("nav.about") == "fr:About"
        assert "obsolete" not in result.flattened()
        assert [item.key for item in stub_provider.requests[0].items] == ["nav.about"]

    @pytest.mark.asyncio
    async def test_leaf_becoming_namespace_keeps_new_keys(self, stub_provider):
        """A target leaf that is a namespace in the source is replaced, not removed."""
        source = make_bundle("en", {"common.yml": {"nav": {"home": "Home"}}})
        target = make_bundle("fr", {"common.yml": {"nav": "Menu"}})

        result = await target.translate_from(source, stub_provider)

        assert result.flattened() == {"nav.home": "fr:Home"}

    @pytest.mark.asyncio
    async def test_namespace_becoming_leaf_drops_old_keys(self, stub_provider):
        """A target namespace that is a leaf in the source ends up as that leaf."""
        source = make_bundle("en", {"common.yml": {"nav": "Menu"}})
        target = make_bundle("fr", {"common.yml": {"nav": {"home": "Accueil"}}})

        result = await target.translate_from(source, stub_provider)

        assert result.flattened() == {"nav": "fr:Menu"}

    @pytest.mark.asyncio
    async def test_new_root_follows_source_resource(self, stub_provider):
        """A root only present in the source's common.yml lands in common.yml."""
        source = make_bundle(
            "en",
            {
                "common.yml": {"greeting": "Hello", "footer": {"legal": "Legal"}},
                "pages.yml": {"home": {"title": "Home"}},
            },
        )
        target = make_bundle(
            "fr",
            {"pages.yml": {"home": {"title": "Accueil"}}},
        )

        result = await target.translate_from(source, stub_provider)

        common = result.resource_for("common.yml")
        assert common is not None
        assert common.flattened() == {
            "greeting": "fr:Hello",
            "footer.legal": "fr:Legal",
        }
        assert result.resource_for("footer.yml") is None
        assert result.resource_for("greeting.yml") is None

    @pytest.mark.asyncio
    async def test_new_root_joins_existing_resource_at_same_path(self, stub_provider):
        """A new root goes into the target resource mirroring the source file."""
        source = make_bundle(
            "en", {"common.yml": {"greeting": "Hello", "nav": {"home": "Home"}}}
        )
        target = make_bundle("fr", {"common.yml": {"greeting": "Bonjour"}})

        result = await target.translate_from(source, stub_provider)

        assert [it.relpath for it in result.resources] == ["common.yml"]
        assert result.get("nav.home") == "fr:Home"

    @pytest.mark.asyncio
    async def test_non_incremental_retranslates_target_keys(self, stub_provider):
        """With incremental=False every current target key is resent."""
        source = make_bundle("en", {"common.yml": {"greeting": "Hello", "bye": "Bye"}})
        target = make_bundle("fr", {"common.yml": {"greeting": "Bonjour", "bye": "Salut"}})

        result = await target.translate_from(source, stub_provider, incremental=False)

        assert result.get("greeting") == "fr:Hello"
        assert result.get("bye") == "fr:Bye"

    @pytest.mark.asyncio
    async def test_filter_regex_and_predicate(self):
        """A regex or predicate restricts which keys are translated."""
        source = make_bundle(
            "en", {"common.yml": {"nav": {"home": "Home"}, "greeting": "Hello"}}
        )

        provider = StubProvider()
        result = await make_bundle("fr").translate_from(
            source, provider, filter=re.compile(r"^nav\.")
        )
        assert result.flattened() == {"nav.home": "fr:Home"}

        provider = StubProvider()
        result = await make_bundle("fr").translate_from(
            source, provider, filter=lambda key: key == "greeting"
        )
        assert result.flattened() == {"greeting": "fr:Hello"}

    @pytest.mark.asyncio
    async def test_hooks_receive_clone_and_patch(self, source_bundle, stub_provider):
        """on_pre_apply/on_post_apply see the in-flight clone and the patch."""
        seen = []

        def pre(bundle, patch):
            seen.append(("pre", bundle.flattened(), len(patch)))

        def post(bundle, patch):
            assert isinstance(patch, Patch)
            seen.append(("post", bundle.flattened(), len(patch)))

        result = await make_bundle("fr").translate_from(
            source_bundle, stub_provider, on_pre_apply=pre, on_post_apply=post
        )

        assert seen[0] == ("pre", {}, 2)
        assert seen[1] == ("post", result.flattened(), 2)

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, source_bundle):
        """A provider error aborts translate_from without a result."""
        target = make_bundle("fr", {"common.yml": {"obsolete": "x"}})

        with pytest.raises(ProviderRequestError):
            await target.translate_from(source_bundle, FailingProvider())

        assert target.flattened() == {"obsolete": "x"}

    @pytest.mark.asyncio
    async def test_provider_omitting_keys(self, source_bundle):
        """Keys missing from the reply are simply not added."""
        provider = StubProvider(omit=["nav.home"])
        result = await make_bundle("fr").translate_from(source_bundle, provider)
        assert result.flattened() == {"greeting": "fr:Hello"}
