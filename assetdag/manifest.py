# assetdag/manifest.py
"""
Asset manifests: YAML files declaring containers and their assets.

Example:
    path: public
    versioning: true
    containers:
      default:
        prefix: /static
        styles:
          - {name: site, source: css/site.css}
        scripts:
          - {name: jquery, source: //code.jquery.com/jquery.min.js}
          - {name: app, source: js/app.js, dependencies: [jquery]}
        assets:
          - {name: print, source: css/print.css, attributes: {media: print}}
        remove:
          - {type: script, name: legacy}
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .asset import Asset, AssetType
from .container import infer_type
from .environment import Environment
from .files import Filesystem
from .html import HtmlBuilder

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised for manifests that cannot be loaded."""


def _names(value: Any) -> bool:
    """True for a single name or a list of names."""
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


@dataclass
class ManifestEntry:
    """One asset declaration."""
    name: str
    source: str
    asset_type: AssetType
    dependencies: List[str] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    override: bool = False

    @classmethod
    def from_dict(cls, data: Any, asset_type: Optional[AssetType], where: str) -> "ManifestEntry":
        if not isinstance(data, dict):
            raise ManifestError(f"{where}: asset entries must be mappings, got {data!r}")
        if not data.get("name") or not data.get("source"):
            raise ManifestError(f"{where}: asset entries need 'name' and 'source'")

        source = str(data["source"])
        if asset_type is None:
            if "type" in data:
                asset_type = AssetType.parse(data["type"])
                if asset_type is None:
                    raise ManifestError(f"{where}: unknown asset type {data['type']!r}")
            else:
                asset_type = infer_type(source)

        dependencies = data.get("dependencies")
        if dependencies is not None and not _names(dependencies):
            raise ManifestError(f"{where}: 'dependencies' must be a name or a list of names")
        attributes = data.get("attributes")
        if attributes is not None and not (isinstance(attributes, dict) or _names(attributes)):
            raise ManifestError(f"{where}: 'attributes' must be a mapping or a list of names")

        asset = Asset.from_dict({**data, "name": str(data["name"]), "source": source}, asset_type)
        # Tags only hold scalar attribute values
        for key, value in asset.attributes.items():
            if isinstance(value, (dict, list, tuple)):
                raise ManifestError(f"{where}: attribute '{key}' must be a scalar, got {value!r}")

        return cls.from_asset(asset, override=bool(data.get("override", False)))

    @classmethod
    def from_asset(cls, asset: Asset, override: bool = False) -> "ManifestEntry":
        return cls(
            name=asset.name,
            source=asset.source,
            asset_type=asset.asset_type,
            dependencies=asset.dependencies,
            attributes=asset.attributes,
            override=override,
        )

    def to_asset(self) -> Asset:
        return Asset(
            name=self.name,
            source=self.source,
            dependencies=list(self.dependencies),
            attributes=dict(self.attributes),
            asset_type=self.asset_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_asset().to_dict()
        if self.override:
            data["override"] = True
        return data


@dataclass
class ContainerSpec:
    """Declared contents of one container."""
    name: str
    prefix: Optional[str] = None
    entries: List[ManifestEntry] = field(default_factory=list)
    removals: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "ContainerSpec":
        data = data or {}
        if not isinstance(data, dict):
            raise ManifestError(f"Container '{name}' must be a mapping")

        entries = []
        for key, asset_type in (("styles", AssetType.STYLE),
                                ("scripts", AssetType.SCRIPT),
                                ("assets", None)):
            for i, entry in enumerate(data.get(key) or []):
                entries.append(ManifestEntry.from_dict(entry, asset_type, f"{name}.{key}[{i}]"))

        removals = []
        for i, removal in enumerate(data.get("remove") or []):
            if not isinstance(removal, dict) or "name" not in removal:
                raise ManifestError(f"{name}.remove[{i}]: removals need 'type' and 'name'")
            removals.append((str(removal.get("type", "")), str(removal["name"])))

        return cls(name=name, prefix=data.get("prefix"), entries=entries, removals=removals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prefix": self.prefix,
            "assets": [entry.to_dict() for entry in self.entries],
            "remove": [{"type": t, "name": n} for t, n in self.removals],
        }


@dataclass
class Manifest:
    """Parsed manifest."""
    containers: Dict[str, ContainerSpec] = field(default_factory=dict)
    path: str = ""
    versioning: bool = False
    strict: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        if not isinstance(data, dict):
            raise ManifestError("Manifest must be a mapping")

        containers = data.get("containers") or {}
        if not isinstance(containers, dict):
            raise ManifestError("'containers' must be a mapping of name to container")

        return cls(
            containers={
                str(name): ContainerSpec.from_dict(str(name), spec)
                for name, spec in containers.items()
            },
            path=str(data.get("path") or ""),
            versioning=bool(data.get("versioning", False)),
            strict=bool(data.get("strict", False)),
        )

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Manifest":
        """Parse manifest from YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ManifestError(f"Invalid YAML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "Manifest":
        """
        Load manifest from a YAML file.

        A relative public path is taken relative to the manifest's directory.
        """
        path = Path(path)
        with open(path, "r") as f:
            manifest = cls.from_yaml(f.read())
        if manifest.path and not Path(manifest.path).is_absolute():
            manifest.path = str(path.parent / manifest.path)
        logger.debug(f"Loaded manifest {path} ({len(manifest.containers)} containers)")
        return manifest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "versioning": self.versioning,
            "strict": self.strict,
            "containers": {name: spec.to_dict() for name, spec in self.containers.items()},
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def build(self, files: Filesystem = None, html: HtmlBuilder = None) -> Environment:
        """Create an Environment with every declared container populated."""
        env = Environment(
            files=files,
            html=html,
            path=self.path,
            versioning=self.versioning,
            strict=self.strict,
        )
        for name, spec in self.containers.items():
            container = env.container(name)
            container.prefix(spec.prefix)
            for entry in spec.entries:
                container.register(
                    entry.asset_type,
                    entry.name,
                    entry.source,
                    entry.dependencies,
                    entry.attributes,
                    override=entry.override,
                )
            for asset_type, asset_name in spec.removals:
                container.remove(asset_type, asset_name)
        return env
