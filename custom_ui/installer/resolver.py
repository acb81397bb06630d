"""Component dependency resolution."""

import logging
from typing import Mapping, Sequence

from custom_ui.errors import CircularDependencyError
from custom_ui.registry.models import ComponentRecord

_logging = logging.getLogger(__name__)


def dependency_lookup(
    components: Mapping[str, ComponentRecord],
) -> dict[str, list[str]]:
    return {name: list(c.dependencies) for name, c in components.items()}


def resolve_dependencies(
    requested: Sequence[str],
    lookup: Mapping[str, Sequence[str]],
) -> list[str]:
    """Expand requested components into an install-ordered closure.

    Depth-first in the given order; each component is appended after all of
    its dependencies, so the result is topologically valid and free of
    duplicates. Names missing from ``lookup`` are left out of the result.

    Args:
        requested: Component names in caller order
        lookup: Component name -> declared dependency names

    Returns:
        Names in safe install order

    Raises:
        CircularDependencyError: If a cycle is reachable from ``requested``
    """
    resolved: dict[str, None] = {}
    visiting: list[str] = []

    def visit(name: str) -> None:
        if name in resolved:
            return
        if name in visiting:
            cycle = visiting[visiting.index(name):] + [name]
            raise CircularDependencyError(name, cycle)

        deps = lookup.get(name)
        if deps is None:
            _logging.debug(f"Skipping unknown component '{name}'")
            return

        visiting.append(name)
        for dep in deps:
            visit(dep)
        visiting.pop()
        resolved[name] = None

    for name in requested:
        visit(name)

    order = list(resolved)
    _logging.debug(f"Resolved install order: {', '.join(order)}")
    return order


__all__ = [
    "dependency_lookup",
    "resolve_dependencies",
]
