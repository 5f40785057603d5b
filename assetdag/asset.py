# assetdag/asset.py
"""
Asset data structures.

An asset is a named style sheet or script with a source location, the names
of the assets it depends on, and the HTML attributes used to render its tag.
Names are unique within an asset type, not globally.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union


class AssetType(Enum):
    """Recognized asset types."""
    STYLE = "style"
    SCRIPT = "script"

    @classmethod
    def parse(cls, value: Union["AssetType", str, None]) -> Optional["AssetType"]:
        """
        Coerce a type tag to an AssetType.

        Returns None for anything that is not a recognized type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def normalize_dependencies(dependencies: Union[str, Iterable[str], None]) -> List[str]:
    """Accept a single name, a sequence of names or None."""
    if dependencies is None:
        return []
    if isinstance(dependencies, str):
        return [dependencies]
    return list(dependencies)


def normalize_attributes(attributes: Union[Dict[str, Any], Iterable[str], None]) -> Dict[str, Any]:
    """
    Accept a mapping of attributes, or a sequence of bare attribute names.

    Bare names (e.g. ``["defer"]``) become boolean attributes.
    """
    if attributes is None:
        return {}
    if isinstance(attributes, dict):
        return dict(attributes)
    if isinstance(attributes, str):
        return {attributes: True}
    return {name: True for name in attributes}


@dataclass
class Asset:
    """
    A registered asset.

    Attributes:
        name: Name of the asset, unique within its type
        source: Local path or absolute / protocol-relative URL
        dependencies: Names of assets that must be rendered first
        attributes: Extra attributes for the rendered tag
        asset_type: STYLE or SCRIPT
    """
    name: str
    source: str
    dependencies: List[str] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    asset_type: AssetType = AssetType.SCRIPT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "source": self.source,
            "dependencies": list(self.dependencies),
            "attributes": dict(self.attributes),
            "type": self.asset_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], asset_type: AssetType = None) -> "Asset":
        if asset_type is None:
            asset_type = AssetType.parse(data.get("type", AssetType.SCRIPT.value))
            if asset_type is None:
                raise ValueError(f"Unknown asset type: {data.get('type')}")
        return cls(
            name=data["name"],
            source=data["source"],
            dependencies=normalize_dependencies(data.get("dependencies")),
            attributes=normalize_attributes(data.get("attributes")),
            asset_type=asset_type,
        )
