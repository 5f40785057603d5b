# assetdag/registry/__init__.py
"""
assetdag registry.

The registry maps asset names to their definitions, per asset type, and keeps
the overrides and removals that take effect on the next render.

Example:
    registry = Registry()
    registry.register(AssetType.SCRIPT, "jquery", "//cdn/jquery.js")
    registry.register(AssetType.SCRIPT, "app", "js/app.js", dependencies=["jquery"])
    registry.remove("script", "jquery")
"""

from .registry import Registry, OVERRIDE_MARKER, split_override

__all__ = ["Registry", "OVERRIDE_MARKER", "split_override"]
