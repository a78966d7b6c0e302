"""Immutable snapshot of the host build's modules."""

from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from bombuilder.core.coordinates import DEFAULT_TYPE, Coordinate, ParentCoordinate
from bombuilder.core.errors import ConfigurationError


@dataclass(frozen=True)
class ProjectMetadata:
    """Descriptive elements a published POM is expected to carry."""

    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    licenses: Tuple[Dict[str, str], ...] = ()
    developers: Tuple[Dict[str, str], ...] = ()
    scm: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class Module:
    group_id: str
    artifact_id: str
    version: str
    packaging: str = DEFAULT_TYPE
    parent: Optional[ParentCoordinate] = None
    modules: Tuple[str, ...] = ()
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    dependencies: Tuple[Coordinate, ...] = ()
    artifacts: Tuple[Coordinate, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            artifact_type=self.packaging,
        )

    @property
    def is_pom(self) -> bool:
        return self.packaging == "pom"


class ModuleGraph:
    """Modules of one build together with the module currently being processed."""

    def __init__(self, modules: Iterable[Module], current: Optional[str] = None) -> None:
        self._modules: List[Module] = list(modules)
        self._current: Optional[Module] = None
        if current is None:
            self._current = self._modules[0] if self._modules else None
            return
        for module in self._modules:
            if module.key == current:
                self._current = module
                break
        else:
            raise ConfigurationError(f"Current module '{current}' not found in module graph")

    @property
    def modules(self) -> Tuple[Module, ...]:
        return tuple(self._modules)

    @property
    def current(self) -> Optional[Module]:
        return self._current


def load_graph(path: pathlib.Path) -> ModuleGraph:
    """Load a module graph snapshot from a YAML or JSON document."""

    if not path.is_file():
        raise ConfigurationError(f"Module graph file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to parse module graph {path}: {exc}") from exc
    return graph_from_dict(data or {})


def graph_from_dict(data: Any) -> ModuleGraph:
    if not isinstance(data, dict):
        raise ConfigurationError("Module graph document must be a mapping")
    raw_modules = data.get("modules") or []
    if not isinstance(raw_modules, list):
        raise ConfigurationError("Module graph 'modules' must be a list")
    modules = [module_from_dict(raw) for raw in raw_modules]
    current = data.get("current")
    return ModuleGraph(modules, current=str(current) if current else None)


def module_from_dict(raw: Any) -> Module:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Module entry must be a mapping: {raw!r}")
    coordinate = Coordinate.from_dict(raw)
    parent_raw = raw.get("parent")
    return Module(
        group_id=coordinate.group_id,
        artifact_id=coordinate.artifact_id,
        version=coordinate.version,
        packaging=str(raw.get("packaging") or DEFAULT_TYPE),
        parent=ParentCoordinate.from_dict(parent_raw) if isinstance(parent_raw, dict) else None,
        modules=tuple(str(name) for name in raw.get("modules") or []),
        metadata=_metadata_from_dict(raw),
        dependencies=_coordinates(raw.get("dependencies")),
        artifacts=_coordinates(raw.get("artifacts")),
    )


def _coordinates(entries: object) -> Tuple[Coordinate, ...]:
    if not entries:
        return ()
    if not isinstance(entries, list):
        raise ConfigurationError(f"Expected a list of dependencies, got {entries!r}")
    coordinates: List[Coordinate] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Dependency entry must be a mapping: {entry!r}")
        coordinates.append(Coordinate.from_dict(entry))
    return tuple(coordinates)


def _metadata_from_dict(raw: Mapping[str, Any]) -> ProjectMetadata:
    scm = raw.get("scm")
    return ProjectMetadata(
        name=_optional_str(raw.get("name")),
        description=_optional_str(raw.get("description")),
        url=_optional_str(raw.get("url")),
        licenses=_string_maps(raw.get("licenses")),
        developers=_string_maps(raw.get("developers")),
        scm=_string_map(scm) if isinstance(scm, dict) else None,
    )


def _optional_str(value: object) -> Optional[str]:
    return str(value) if value is not None else None


def _string_map(entry: Mapping[str, Any]) -> Dict[str, str]:
    return {str(key): str(value) for key, value in entry.items() if value is not None}


def _string_maps(entries: object) -> Tuple[Dict[str, str], ...]:
    if not isinstance(entries, list):
        return ()
    return tuple(_string_map(entry) for entry in entries if isinstance(entry, dict))
