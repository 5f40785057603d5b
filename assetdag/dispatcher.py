# assetdag/dispatcher.py
"""
Asset render dispatcher.

Renders one asset type by:
1. Layering overrides onto a working copy of the registered assets
2. Filtering out scheduled removals
3. Resolving the remaining assets in dependency order
4. Rewriting each source against the prefix (remote or local)
5. Appending a modification-time query when versioning is on
6. Formatting a tag per asset and concatenating them
"""

import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .asset import Asset, AssetType
from .files import Filesystem
from .html import HtmlBuilder
from .resolver import DependencyResolver

logger = logging.getLogger(__name__)

# scheme:// or protocol-relative //
_REMOTE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.\-]*:)?//")

AssetGroups = Mapping[Union[AssetType, str], Mapping[str, Optional[Asset]]]
Removals = Union[
    Iterable[Tuple[Union[AssetType, str], str]],
    Mapping[Union[AssetType, str], Iterable[Tuple[Union[AssetType, str], str]]],
]


def is_remote(path: Optional[str]) -> bool:
    """True for absolute (scheme://) and protocol-relative (//) URLs."""
    return bool(path) and _REMOTE.match(path) is not None


def strip_scheme(source: str) -> str:
    """Drop a leading scheme:// or // from a URL."""
    return _REMOTE.sub("", source, count=1)


def _group(mapping: Optional[Mapping], asset_type: AssetType):
    """Look up a per-type entry keyed either by AssetType or by its value."""
    if not mapping:
        return None
    if asset_type in mapping:
        return mapping[asset_type]
    return mapping.get(asset_type.value)


class Dispatcher:
    """
    Turns registered assets into HTML.

    The dispatcher holds no asset state of its own; a single instance can
    serve many containers. Its only mutable state is the versioning flag.
    """

    def __init__(
        self,
        files: Filesystem = None,
        html: HtmlBuilder = None,
        resolver: DependencyResolver = None,
        path: str = "",
        versioning: bool = False,
        strict: bool = False,
    ):
        """
        Args:
            files: Modification-time lookups (for versioning)
            html: Tag formatter
            resolver: Dependency resolver
            path: Public directory. Local asset files are looked up under it,
                and it is the prefix used when a render passes none.
            versioning: Append a modification-time query to local assets
            strict: Raise on unknown dependencies and cycles
        """
        self.files = files if files is not None else Filesystem()
        self.html = html if html is not None else HtmlBuilder()
        self.resolver = resolver if resolver is not None else DependencyResolver()
        self.path = path or ""
        self.versioning = versioning
        self.strict = strict

    def add_versioning(self) -> None:
        """Enable cache busting for subsequent renders."""
        self.versioning = True

    def remove_versioning(self) -> None:
        """Disable cache busting for subsequent renders."""
        self.versioning = False

    def render(
        self,
        asset_type: Union[AssetType, str],
        assets: AssetGroups,
        removals: Removals = None,
        prefix: Optional[str] = None,
        overrides: AssetGroups = None,
    ) -> str:
        """
        Render all assets of a type.

        Args:
            asset_type: Type to render
            assets: type -> (name -> Asset). Not mutated.
            removals: (type, name) pairs, or type -> pairs, to leave out
            prefix: URL prefix for this render (falls back to the public path)
            overrides: type -> (name -> Asset) shadowing entries in assets

        Returns:
            Concatenated tags in dependency order ('' for an empty group)
        """
        parsed = AssetType.parse(asset_type)
        if parsed is None:
            logger.debug(f"Nothing to render for unknown asset type {asset_type!r}")
            return ""

        working: Dict[str, Optional[Asset]] = dict(_group(assets, parsed) or {})
        working.update(_group(overrides, parsed) or {})

        if isinstance(removals, Mapping):
            removals = _group(removals, parsed)
        for removal_type, name in removals or ():
            if AssetType.parse(removal_type) is parsed:
                working.pop(name, None)

        if not working:
            return ""

        html = ""
        for name, asset in self.resolver.arrange(working, strict=self.strict):
            if asset is None:
                logger.debug(f"Skipping empty {parsed.value} entry '{name}'")
                continue
            url = self.source_url(asset.source, prefix)
            html += self.format(parsed, url, asset.attributes)
        return html

    # Older name for render()
    run = render

    def format(self, asset_type: AssetType, url: str, attributes: Mapping[str, Any]) -> str:
        """Format a single tag with the tag formatter."""
        if asset_type is AssetType.STYLE:
            return self.html.style(url, attributes)
        return self.html.script(url, attributes)

    def source_url(self, source: str, prefix: Optional[str] = None) -> str:
        """
        Compute the URL an asset is rendered with.

        A remote base (prefix, or the public path when there is no prefix)
        wins over everything: its value is concatenated with the source,
        the source's own scheme marker stripped. Otherwise remote sources
        are kept as-is, and local sources get versioned and prefixed.
        """
        base = prefix if prefix is not None else self.path

        if is_remote(base):
            return f"{base.rstrip('/')}/{strip_scheme(source).lstrip('/')}"

        if is_remote(source):
            return source

        url = source
        if self.versioning:
            url = self._add_version(url)
        if prefix:
            url = f"{prefix.rstrip('/')}/{url.lstrip('/')}"
        return url

    def _add_version(self, source: str) -> str:
        """Add ?<mtime> to a local source; any lookup failure leaves it alone."""
        url, hash_mark, fragment = source.partition("#")
        # Query string and fragment belong to the URL, not the file
        relative = url.split("?", 1)[0]
        file = f"{self.path.rstrip('/')}/{relative.lstrip('/')}" if self.path else relative
        try:
            modified = self.files.last_modified(file)
        except OSError as e:
            logger.debug(f"No modification time for {file}: {e}")
            modified = None

        if modified is None or modified == "":
            return source

        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{modified}{hash_mark}{fragment}"
