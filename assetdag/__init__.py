# assetdag - Dependency-ordered rendering of style and script assets
#
# Assets are registered by name into containers, ordered by their declared
# dependencies and rendered as HTML tags, optionally cache-busted with the
# asset file's modification time.
#
# Core concepts:
# - Asset: A named style or script with a source and dependencies
# - Registry: Assets of one container, plus pending overrides and removals
# - DependencyResolver: Orders assets so dependencies come first
# - Dispatcher: Rewrites sources and formats tags in resolved order
# - Container: Public surface for registering and rendering
# - Environment: Named containers sharing one dispatcher

from .asset import Asset, AssetType
from .registry import Registry
from .resolver import (
    DependencyResolver,
    DependencyError,
    UnknownDependencyError,
    CyclicDependencyError,
)
from .dispatcher import Dispatcher
from .files import Filesystem
from .html import HtmlBuilder
from .container import Container
from .environment import Environment
from .manifest import Manifest, ManifestError

__all__ = [
    # Core
    "Asset",
    "AssetType",
    "Registry",
    "DependencyResolver",
    "DependencyError",
    "UnknownDependencyError",
    "CyclicDependencyError",
    "Dispatcher",
    "Container",
    "Environment",
    # Collaborators
    "Filesystem",
    "HtmlBuilder",
    # Configuration
    "Manifest",
    "ManifestError",
]

__version__ = "0.1.0"
