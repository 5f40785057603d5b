# assetdag/registry/registry.py
"""
Asset registry.

Holds the named assets of one container, grouped by type, together with the
pending overrides and removals that are applied at render time:

- assets: the live set, name -> Asset, in first-registration order
- overrides: entries that shadow the live entry of the same name for exactly
  one render, then are discarded
- removals: ordered (type, name) pairs, applied (and cleared) on the next
  render of that type
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..asset import Asset, AssetType, normalize_attributes, normalize_dependencies

logger = logging.getLogger(__name__)

OVERRIDE_MARKER = "!"

# Attributes injected at registration time when the caller leaves them unset
DEFAULT_ATTRIBUTES: Dict[AssetType, Dict[str, Any]] = {
    AssetType.STYLE: {"media": "all"},
    AssetType.SCRIPT: {},
}

Removal = Tuple[AssetType, str]


class Registry:
    """
    Named assets for one container.

    Nothing here talks to the filesystem; the registry is a pure in-memory
    structure that the dispatcher reads from.
    """

    def __init__(self):
        self.assets: Dict[AssetType, Dict[str, Asset]] = {t: {} for t in AssetType}
        self.overrides: Dict[AssetType, Dict[str, Asset]] = {t: {} for t in AssetType}
        self.removals: Dict[AssetType, List[Removal]] = {t: [] for t in AssetType}

    def register(
        self,
        asset_type: AssetType,
        name: str,
        source: str,
        dependencies: Union[str, Iterable[str], None] = None,
        attributes: Union[Dict[str, Any], Iterable[str], None] = None,
        override: bool = False,
    ) -> Asset:
        """
        Register an asset.

        Args:
            asset_type: STYLE or SCRIPT
            name: Asset name (unique within the type)
            source: Local path or URL
            dependencies: Names of assets to render first
            attributes: Extra tag attributes
            override: Shadow the live entry of the same name for one render

        Returns:
            The stored Asset
        """
        attributes = normalize_attributes(attributes)
        for key, value in DEFAULT_ATTRIBUTES[asset_type].items():
            attributes.setdefault(key, value)

        asset = Asset(
            name=name,
            source=source,
            dependencies=normalize_dependencies(dependencies),
            attributes=attributes,
            asset_type=asset_type,
        )

        live = self.assets[asset_type]
        if override:
            self.overrides[asset_type][name] = asset
            # An override with nothing to shadow becomes the live entry
            live.setdefault(name, asset)
        else:
            if name in live:
                logger.warning(f"Overwriting {asset_type.value} asset '{name}'")
            live[name] = asset
        return asset

    def add(
        self,
        asset_type: AssetType,
        name: str,
        source: str,
        dependencies: Union[str, Iterable[str], None] = None,
        attributes: Union[Dict[str, Any], Iterable[str], None] = None,
    ) -> Asset:
        """Register an asset, treating a leading ``!`` in the name as an override."""
        name, override = split_override(name)
        return self.register(asset_type, name, source, dependencies, attributes, override=override)

    def remove(self, asset_type: Union[AssetType, str], name: str) -> None:
        """
        Schedule an asset for removal on the next render of its type.

        Unknown types and unknown names are ignored.
        """
        parsed = AssetType.parse(asset_type)
        if parsed is None:
            logger.debug(f"Ignoring removal of '{name}' with unknown type {asset_type!r}")
            return
        self.removals[parsed].append((parsed, name))

    def working_set(self, asset_type: AssetType) -> Dict[str, Optional[Asset]]:
        """
        Get the mapping a render of this type would resolve.

        Overrides are layered on and removals filtered out. Registry state is
        left untouched.
        """
        working = dict(self.assets[asset_type])
        working.update(self.overrides[asset_type])
        for _, name in self.removals[asset_type]:
            working.pop(name, None)
        return working

    def consume(self, asset_type: AssetType) -> None:
        """
        Finish a render pass for a type.

        Drops the overrides (they apply once), deletes removed names from the
        live set and clears the removal list.
        """
        self.overrides[asset_type].clear()
        live = self.assets[asset_type]
        for _, name in self.removals[asset_type]:
            if live.pop(name, None) is not None:
                logger.debug(f"Removed {asset_type.value} asset '{name}'")
        self.removals[asset_type].clear()

    def get(self, asset_type: AssetType, name: str) -> Optional[Asset]:
        """Get a live asset by type and name."""
        return self.assets[asset_type].get(name)

    def names(self, asset_type: AssetType) -> List[str]:
        """List live asset names of a type, in registration order."""
        return list(self.assets[asset_type])

    def __contains__(self, item: Tuple[AssetType, str]) -> bool:
        asset_type, name = item
        return name in self.assets[asset_type]

    def __len__(self) -> int:
        return sum(len(assets) for assets in self.assets.values())


def split_override(name: str) -> Tuple[str, bool]:
    """Strip the override marker from a name."""
    if name.startswith(OVERRIDE_MARKER):
        return name[len(OVERRIDE_MARKER):], True
    return name, False
