# assetdag/environment.py
"""
Named asset containers sharing one dispatcher.

Each module of an application can keep its own container ("default",
"admin", ...) while tag formatting, file lookups and the versioning switch
stay shared.
"""

import logging
from typing import Dict, List, Optional, Union

from .asset import AssetType
from .container import Attributes, Container, Dependencies
from .dispatcher import Dispatcher
from .files import Filesystem
from .html import HtmlBuilder
from .resolver import DependencyResolver

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = "default"


class Environment:
    """
    Factory of named containers.

    The registration methods (``add``, ``style``, ``script``, ``register``,
    ``remove``, ``prefix``) and the versioning switches act on the default
    container and return the Environment, so a chain never changes
    receiver. Any other attribute falls through to the default container:
    ``env.show()`` is ``env.container().show()``.
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
        self.dispatcher = Dispatcher(
            files=files,
            html=html,
            resolver=resolver,
            path=path,
            versioning=versioning,
            strict=strict,
        )
        self._containers: Dict[str, Container] = {}

    def container(self, name: str = DEFAULT_CONTAINER) -> Container:
        """Get the container with this name, creating it on first use."""
        if name not in self._containers:
            logger.debug(f"Creating asset container '{name}'")
            self._containers[name] = Container(name, self.dispatcher)
        return self._containers[name]

    def containers(self) -> List[str]:
        """Names of the containers created so far."""
        return list(self._containers)

    def add_versioning(self) -> "Environment":
        self.dispatcher.add_versioning()
        return self

    def remove_versioning(self) -> "Environment":
        self.dispatcher.remove_versioning()
        return self

    # Mutators on the default container; each returns the Environment so
    # chains stay on it.

    def prefix(self, path: Optional[str] = None) -> "Environment":
        self.container().prefix(path)
        return self

    def register(self, asset_type: Union[AssetType, str], name: str, source: str,
                 dependencies: Dependencies = None, attributes: Attributes = None,
                 override: bool = False) -> "Environment":
        self.container().register(asset_type, name, source, dependencies, attributes, override=override)
        return self

    def add(self, name: str, source: str, dependencies: Dependencies = None,
            attributes: Attributes = None) -> "Environment":
        self.container().add(name, source, dependencies, attributes)
        return self

    def style(self, name: str, source: str, dependencies: Dependencies = None,
              attributes: Attributes = None) -> "Environment":
        self.container().style(name, source, dependencies, attributes)
        return self

    def script(self, name: str, source: str, dependencies: Dependencies = None,
               attributes: Attributes = None) -> "Environment":
        self.container().script(name, source, dependencies, attributes)
        return self

    def remove(self, asset_type: Union[AssetType, str], name: str) -> "Environment":
        self.container().remove(asset_type, name)
        return self

    def __contains__(self, name: str) -> bool:
        return name in self._containers

    def __getattr__(self, attr: str):
        # Only reached for names not found on the Environment itself
        if attr.startswith("_"):
            raise AttributeError(attr)
        return getattr(self.container(), attr)
