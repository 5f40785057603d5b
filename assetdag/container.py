# assetdag/container.py
"""
Asset container: the public surface for registering and rendering assets.
"""

from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, Optional, Union

from .asset import AssetType
from .dispatcher import Dispatcher
from .registry import Registry, split_override


Dependencies = Union[str, Iterable[str], None]
Attributes = Union[Dict[str, Any], Iterable[str], None]


def infer_type(source: str) -> AssetType:
    """Style for .css sources (query string ignored), script for anything else."""
    path = source.split("?", 1)[0].split("#", 1)[0]
    if PurePosixPath(path).suffix.lower() == ".css":
        return AssetType.STYLE
    return AssetType.SCRIPT


class Container:
    """
    A named collection of assets.

    Example:
        container = Container("default", Dispatcher())
        container.script("jquery", "//code.jquery.com/jquery.min.js")
        container.script("app", "js/app.js", dependencies=["jquery"])
        container.style("site", "css/site.css")
        html = container.show()

    A leading ``!`` on a name registers an override: it replaces the asset of
    the same name for the next render only.
    """

    def __init__(self, name: str, dispatcher: Dispatcher):
        self.name = name
        self.dispatcher = dispatcher
        self.registry = Registry()
        self.path: Optional[str] = None

    def add_versioning(self) -> "Container":
        self.dispatcher.add_versioning()
        return self

    def remove_versioning(self) -> "Container":
        self.dispatcher.remove_versioning()
        return self

    def prefix(self, path: Optional[str] = None) -> "Container":
        """Set (or with None, clear) the URL prefix for this container."""
        self.path = path
        return self

    def register(
        self,
        asset_type: Union[AssetType, str],
        name: str,
        source: str,
        dependencies: Dependencies = None,
        attributes: Attributes = None,
        override: bool = False,
    ) -> "Container":
        """Register an asset of an explicit type."""
        parsed = AssetType.parse(asset_type)
        if parsed is None:
            raise ValueError(f"Unknown asset type: {asset_type!r}")
        name, marked = split_override(name)
        self.registry.register(parsed, name, source, dependencies, attributes, override=override or marked)
        return self

    def add(self, name: str, source: str, dependencies: Dependencies = None,
            attributes: Attributes = None) -> "Container":
        """
        Register an asset, picking its type from the source extension.

        Use style() or script() for sources with non-standard extensions.
        """
        return self.register(infer_type(source), name, source, dependencies, attributes)

    def style(self, name: str, source: str, dependencies: Dependencies = None,
              attributes: Attributes = None) -> "Container":
        """Register a style sheet (media defaults to 'all')."""
        return self.register(AssetType.STYLE, name, source, dependencies, attributes)

    def script(self, name: str, source: str, dependencies: Dependencies = None,
               attributes: Attributes = None) -> "Container":
        """Register a script."""
        return self.register(AssetType.SCRIPT, name, source, dependencies, attributes)

    def remove(self, asset_type: Union[AssetType, str], name: str) -> "Container":
        """
        Leave an asset out of the next render of its type.

        Unknown types and names are ignored.
        """
        self.registry.remove(asset_type, name)
        return self

    def styles(self) -> str:
        """Links to all registered style sheets."""
        return self.group(AssetType.STYLE)

    def scripts(self) -> str:
        """Tags for all registered scripts."""
        return self.group(AssetType.SCRIPT)

    def show(self) -> str:
        """Scripts, then styles."""
        return self.scripts() + self.styles()

    def order(self, asset_type: Union[AssetType, str]) -> list:
        """Names a render of this type would emit, without consuming anything."""
        parsed = AssetType.parse(asset_type)
        if parsed is None:
            return []
        working = self.registry.working_set(parsed)
        return [
            name for name, asset in
            self.dispatcher.resolver.arrange(working, strict=self.dispatcher.strict)
            if asset is not None
        ]

    def group(self, asset_type: AssetType) -> str:
        """Render one type, then drop the overrides and removals it used."""
        registry = self.registry
        try:
            return self.dispatcher.render(
                asset_type,
                registry.assets,
                removals=registry.removals,
                prefix=self.path,
                overrides=registry.overrides,
            )
        finally:
            # Overrides and removals apply to one render, even a failed one
            registry.consume(asset_type)
