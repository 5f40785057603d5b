# assetdag/resolver.py
"""
Dependency resolution.

Orders the assets of one type so that every asset comes after the assets it
depends on. The walk is depth-first over the input mapping's iteration order:
an asset's dependencies are placed first, in declared order, then the asset
itself.

Unknown dependency names contribute nothing. A node that is already being
visited is never re-entered, so a cycle drops its back edge instead of looping.
That is last-resort safety only: no particular order is promised for cyclic
input. Pass strict=True to raise on either condition instead.
"""

import logging
from enum import Enum, auto
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .asset import Asset

logger = logging.getLogger(__name__)


class DependencyError(ValueError):
    """Base class for strict-mode resolution errors."""


class UnknownDependencyError(DependencyError):
    def __init__(self, name: str, dependency: str):
        self.name = name
        self.dependency = dependency
        super().__init__(f"Asset '{name}' depends on unknown asset '{dependency}'")


class CyclicDependencyError(DependencyError):
    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Dependency cycle: {' -> '.join(cycle)}")


class VisitState(Enum):
    UNVISITED = auto()
    IN_PROGRESS = auto()
    DONE = auto()


def _dependencies(asset: Optional[Asset]) -> List[str]:
    return list(asset.dependencies) if asset is not None else []


class DependencyResolver:
    """
    Stateless resolver; one instance can be shared by any number of
    dispatchers.
    """

    def arrange(
        self,
        assets: Mapping[str, Optional[Asset]],
        strict: bool = False,
    ) -> List[Tuple[str, Optional[Asset]]]:
        """
        Return (name, asset) pairs in dependency order.

        Args:
            assets: name -> Asset for a single type. None values are kept in
                place as nodes without dependencies.
            strict: Raise on unknown dependencies and cycles

        Returns:
            Every input entry exactly once, dependencies first
        """
        state: Dict[str, VisitState] = {name: VisitState.UNVISITED for name in assets}
        order: List[Tuple[str, Optional[Asset]]] = []

        for root in assets:
            if state[root] is not VisitState.UNVISITED:
                continue

            state[root] = VisitState.IN_PROGRESS
            stack: List[Tuple[str, Iterator[str]]] = [(root, iter(_dependencies(assets[root])))]

            while stack:
                name, pending = stack[-1]
                for dependency in pending:
                    if dependency not in state:
                        if strict:
                            raise UnknownDependencyError(name, dependency)
                        logger.debug(f"Skipping unknown dependency '{dependency}' of '{name}'")
                        continue

                    dependency_state = state[dependency]
                    if dependency_state is VisitState.UNVISITED:
                        state[dependency] = VisitState.IN_PROGRESS
                        stack.append((dependency, iter(_dependencies(assets[dependency]))))
                        break
                    if dependency_state is VisitState.IN_PROGRESS:
                        path = [n for n, _ in stack]
                        cycle = path[path.index(dependency):] + [dependency]
                        if strict:
                            raise CyclicDependencyError(cycle)
                        logger.debug(f"Dropping back edge in dependency cycle: {' -> '.join(cycle)}")
                else:
                    stack.pop()
                    state[name] = VisitState.DONE
                    order.append((name, assets[name]))

        return order

    def order(self, assets: Mapping[str, Optional[Asset]], strict: bool = False) -> List[str]:
        """Return just the names, in dependency order."""
        return [name for name, _ in self.arrange(assets, strict=strict)]
