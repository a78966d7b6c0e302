"""Select candidate coordinates from a module graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from bombuilder.core.coordinates import Coordinate
from bombuilder.core.errors import ConfigurationError
from bombuilder.core.module_graph import Module, ModuleGraph

EXCLUDED_TRANSITIVE_SCOPES = frozenset({"test"})
_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


def parse_bool(value: object, key: str) -> bool:
    """Read a YAML flag, accepting real booleans and the usual spellings of them."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


class Breadth(str, Enum):
    """How much of the module graph a selection walks."""

    NONE = "none"
    CURRENT = "current"
    REACTOR = "reactor"

    @classmethod
    def parse(cls, value: object) -> "Breadth":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        aliases = {"current_project": "current", "project": "current", "all": "reactor"}
        normalized = aliases.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"Unknown scope '{value}'; expected one of {choices}") from None


@dataclass(frozen=True)
class ScopePolicy:
    """Which coordinates to gather: module selves, direct and transitive dependencies."""

    project: Breadth = Breadth.REACTOR
    direct: Breadth = Breadth.NONE
    transitive: Breadth = Breadth.NONE
    include_poms: bool = False

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ScopePolicy":
        defaults = cls()
        return cls(
            project=Breadth.parse(raw.get("project", defaults.project)),
            direct=Breadth.parse(raw.get("direct", defaults.direct)),
            transitive=Breadth.parse(raw.get("transitive", defaults.transitive)),
            include_poms=parse_bool(raw.get("include_poms", defaults.include_poms), "scope.include_poms"),
        )


def collect(graph: ModuleGraph, policy: ScopePolicy) -> List[Coordinate]:
    """Return the de-duplicated union of every enabled selection.

    When a coordinate shows up more than once the first occurrence is kept.
    """

    collected: Dict[Coordinate, Coordinate] = {}

    def add(coordinates: Iterable[Coordinate]) -> None:
        for coordinate in coordinates:
            collected.setdefault(coordinate, coordinate)

    current = graph.current

    if policy.project is Breadth.REACTOR:
        add(module.coordinate for module in _reactor(graph, policy))
    elif policy.project is Breadth.CURRENT and current is not None:
        if policy.include_poms or not current.is_pom:
            add([current.coordinate])

    if policy.direct is Breadth.REACTOR:
        for module in _reactor(graph, policy):
            add(module.dependencies)
    elif policy.direct is Breadth.CURRENT and current is not None:
        add(current.dependencies)

    if policy.transitive is Breadth.REACTOR:
        for module in _reactor(graph, policy):
            add(runtime_artifacts(module))
    elif policy.transitive is Breadth.CURRENT and current is not None:
        add(runtime_artifacts(current))

    return list(collected)


def runtime_artifacts(module: Module) -> Tuple[Coordinate, ...]:
    """Resolved artifacts of *module* without the test-scoped ones."""

    return tuple(
        artifact for artifact in module.artifacts if artifact.scope not in EXCLUDED_TRANSITIVE_SCOPES
    )


def _reactor(graph: ModuleGraph, policy: ScopePolicy) -> List[Module]:
    return [module for module in graph.modules if policy.include_poms or not module.is_pom]
