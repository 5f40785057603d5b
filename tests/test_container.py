# tests/test_container.py
"""Tests for the asset container."""

import pytest

from assetdag.asset import AssetType
from assetdag.container import Container, infer_type
from assetdag.dispatcher import Dispatcher
from assetdag.resolver import UnknownDependencyError


@pytest.fixture
def container(files, html):
    return Container("default", Dispatcher(files, html))


class TestRegistration:
    """Test the registration surface."""

    @pytest.mark.parametrize("source, expected", [
        ("css/site.css", AssetType.STYLE),
        ("css/site.CSS?v=1", AssetType.STYLE),
        ("//cdn/site.css#x", AssetType.STYLE),
        ("js/app.js", AssetType.SCRIPT),
        ("css/site.less", AssetType.SCRIPT),
        ("app", AssetType.SCRIPT),
    ])
    def test_infer_type(self, source, expected):
        """Only .css sources are styles."""
        assert infer_type(source) is expected

    def test_add_infers_type(self, container):
        container.add("site", "css/site.css").add("app", "js/app.js")

        assert container.registry.get(AssetType.STYLE, "site").attributes == {"media": "all"}
        assert container.registry.get(AssetType.SCRIPT, "app") is not None

    def test_chaining(self, container):
        """Every mutator returns the container."""
        result = (
            container.style("site", "site.css")
            .script("app", "app.js")
            .remove("script", "app")
            .prefix("/static")
            .add_versioning()
            .remove_versioning()
        )
        assert result is container

    def test_register_unknown_type(self, container):
        with pytest.raises(ValueError):
            container.register("image", "logo", "logo.png")

    def test_remove_unknown_type_is_noop(self, container, html):
        """Unknown removal types change nothing and return the container."""
        container.script("app", "app.js")
        assert container.remove("image", "app") is container
        assert container.scripts() == "[script app.js]"


class TestRender:
    """Test rendering through the container."""

    def test_end_to_end(self, container):
        """jquery renders before the app that depends on it."""
        container.script("app", "app.js", dependencies=["jquery"])
        container.script("jquery", "//cdn/jquery.js")

        assert container.scripts() == "[script //cdn/jquery.js][script app.js]"

    def test_empty_styles(self, container):
        assert container.styles() == ""

    def test_show_scripts_then_styles(self, container):
        container.style("site", "site.css").script("app", "app.js")
        assert container.show() == "[script app.js][style site.css]"

    def test_prefix(self, container):
        container.script("foo", "foo.js").prefix("//cdn.example.com")
        assert container.scripts() == "[script //cdn.example.com/foo.js]"

    def test_clear_prefix(self, container):
        container.script("foo", "foo.js").prefix("/static").prefix(None)
        assert container.scripts() == "[script foo.js]"

    def test_render_is_idempotent(self, container):
        container.script("app", "app.js", ["jquery"]).script("jquery", "jquery.js")
        assert container.scripts() == container.scripts()

    def test_versioning_shared_with_dispatcher(self, container):
        container.add_versioning()
        assert container.dispatcher.versioning is True
        container.remove_versioning()
        assert container.dispatcher.versioning is False


class TestOverridesAndRemovals:
    """Test the apply-once override and removal lifecycle."""

    def test_override_applies_once(self, container):
        """The override is used by one render, then the original returns."""
        container.script("foo", "foo.js")
        container.script("!foo", "override.js")

        assert container.scripts() == "[script override.js]"
        assert container.scripts() == "[script foo.js]"

    def test_override_per_type(self, container):
        """Rendering styles does not consume script overrides."""
        container.script("foo", "foo.js").script("!foo", "override.js")
        container.style("site", "site.css")

        container.styles()
        assert container.scripts() == "[script override.js]"

    def test_override_flag(self, container):
        """override=True is equivalent to the ! marker."""
        container.style("site", "site.css")
        container.register(AssetType.STYLE, "site", "print.css", override=True)

        assert container.styles() == "[style print.css]"
        assert container.styles() == "[style site.css]"

    def test_override_keeps_position(self, container):
        container.script("foo", "foo.js").script("bar", "bar.js").script("!foo", "other.js")
        assert container.scripts() == "[script other.js][script bar.js]"

    def test_remove(self, container):
        container.script("jquery", "jquery.js").script("app", "app.js", ["jquery"])
        container.remove("script", "jquery")

        assert container.scripts() == "[script app.js]"
        assert container.scripts() == "[script app.js]"
        assert container.registry.names(AssetType.SCRIPT) == ["app"]

    def test_remove_unknown_name(self, container):
        container.script("app", "app.js")
        container.remove("script", "missing")
        assert container.scripts() == "[script app.js]"

    def test_readd_after_removal(self, container):
        """Once a removal has been applied the name can be registered again."""
        container.script("jquery", "jquery.js").remove("script", "jquery")
        container.scripts()
        container.script("jquery", "jquery-2.js")

        assert container.scripts() == "[script jquery-2.js]"

    def test_failed_render_still_consumes(self, files, html):
        """A strict render that raises still uses up its overrides and removals."""
        container = Container("default", Dispatcher(files, html, strict=True))
        container.script("app", "app.js").script("old", "old.js")
        container.script("!app", "debug.js", dependencies=["missing"])
        container.remove("script", "old")

        with pytest.raises(UnknownDependencyError):
            container.scripts()

        assert container.registry.overrides[AssetType.SCRIPT] == {}
        assert container.registry.removals[AssetType.SCRIPT] == []
        assert container.scripts() == "[script app.js]"


class TestOrder:
    """Test order() introspection."""

    def test_order(self, container):
        container.script("app", "app.js", ["jquery"]).script("jquery", "jquery.js")
        container.script("old", "old.js").remove("script", "old")

        assert container.order("script") == ["jquery", "app"]
        # Nothing was consumed
        assert container.registry.removals[AssetType.SCRIPT] == [(AssetType.SCRIPT, "old")]

    def test_order_unknown_type(self, container):
        assert container.order("image") == []
