"""Dependency resolution: emission order of entities with cycle detection."""

from typing import List, NamedTuple, Sequence, Set
from zodgen.config.logging import get_logger
from .entities import Entity, complex_dependencies

logger = get_logger(__name__)


class Resolution(NamedTuple):
    """Emission order produced by :func:`resolve`."""

    ordered: List[Entity]  # every entity follows the entities it references
    circular: List[Entity]  # entities that could not be ordered, sorted by Name

    @property
    def circular_names(self) -> Set[str]:
        return {e.name for e in self.circular}


def resolve(entities: Sequence[Entity]) -> Resolution:
    """
    Order entities so that each one is emitted after its dependencies.

    Works in passes. In each pass every pending entity whose complex
    dependencies have all been placed becomes ready; ready entities are
    appended sorted by Name and their Names marked as placed. A pass that
    places nothing means the remaining entities sit on, or depend on, a
    reference cycle: they are returned as ``circular`` instead.

    Args:
        entities: Worklist from the entity collector

    Returns:
        Resolution(ordered, circular)
    """
    resolved_names: Set[str] = set()
    ordered: List[Entity] = []
    pending: List[Entity] = list(entities)
    deps = {id(e): complex_dependencies(e) for e in pending}

    passes = 0
    while pending:
        passes += 1
        ready = [e for e in pending if deps[id(e)] <= resolved_names]
        if not ready:
            break

        ready.sort(key=lambda e: e.name)
        ordered.extend(ready)
        resolved_names.update(e.name for e in ready)
        ready_ids = {id(e) for e in ready}
        pending = [e for e in pending if id(e) not in ready_ids]
        logger.debug(f"Pass {passes}: placed {', '.join(e.name for e in ready)}")

    circular = sorted(pending, key=lambda e: e.name)
    if circular:
        logger.warning(
            f"Possible circular dependency detected: {', '.join(e.name for e in circular)}"
        )
    return Resolution(ordered=ordered, circular=circular)
