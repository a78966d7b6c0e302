"""Assemble the dependency-management BOM model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bombuilder.core import matchers, scope
from bombuilder.core.config import BomConfig
from bombuilder.core.coordinates import Coordinate, ExclusionMapping, ParentCoordinate, parse_parent_spec
from bombuilder.core.errors import ConfigurationError
from bombuilder.core.module_graph import ModuleGraph, ProjectMetadata
from bombuilder.core.version_properties import assign_property_name, property_reference

_LOG = logging.getLogger(__name__)

MODEL_VERSION = "4.0.0"


@dataclass(frozen=True)
class Exclusion:
    group_id: str
    artifact_id: str


@dataclass(frozen=True)
class ManifestEntry:
    """One ``<dependency>`` of the ``<dependencyManagement>`` section."""

    group_id: str
    artifact_id: str
    version: str
    classifier: Optional[str] = None
    artifact_type: Optional[str] = None
    exclusions: Tuple[Exclusion, ...] = ()


@dataclass(frozen=True)
class BomManifest:
    group_id: str
    artifact_id: str
    version: str
    parent: Optional[ParentCoordinate] = None
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    properties: Dict[str, str] = field(default_factory=dict)
    dependencies: Tuple[ManifestEntry, ...] = ()
    packaging: str = "pom"
    model_version: str = MODEL_VERSION


def build(
    coordinates: Iterable[Coordinate],
    exclusion_mappings: Sequence[ExclusionMapping],
    parent_spec: Optional[str],
    self_coordinate: Coordinate,
    add_version_properties: bool = False,
    use_properties_for_version: bool = False,
    project_parent: Optional[ParentCoordinate] = None,
    metadata: Optional[ProjectMetadata] = None,
) -> BomManifest:
    """Build the BOM for already filtered *coordinates*.

    Entries are sorted by ``(groupId, artifactId, version, classifier, type)``
    and version properties are assigned in that order, so the result only
    depends on the set of coordinates given. An explicit *parent_spec* takes
    precedence over *project_parent*, whose relative path is dropped.
    """

    parent = parse_parent_spec(parent_spec) if parent_spec is not None else None
    if parent is None and project_parent is not None:
        parent = replace(project_parent, relative_path=None)

    track_properties = add_version_properties or use_properties_for_version
    properties: Dict[str, str] = {}
    entries: List[ManifestEntry] = []
    for coordinate in sorted(set(coordinates), key=Coordinate.key):
        version = coordinate.version
        if track_properties:
            property_name = assign_property_name(
                coordinate.group_id, coordinate.artifact_id, coordinate.version, properties
            )
            if use_properties_for_version:
                version = property_reference(property_name)
        entries.append(
            ManifestEntry(
                group_id=coordinate.group_id,
                artifact_id=coordinate.artifact_id,
                version=version,
                classifier=coordinate.classifier or None,
                artifact_type=coordinate.artifact_type or None,
                exclusions=_exclusions_for(coordinate, exclusion_mappings),
            )
        )
    _LOG.debug("Added %d dependencies.", len(entries))

    return BomManifest(
        group_id=self_coordinate.group_id,
        artifact_id=self_coordinate.artifact_id,
        version=self_coordinate.version,
        parent=parent,
        metadata=metadata or ProjectMetadata(),
        properties=properties if track_properties else {},
        dependencies=tuple(entries),
    )


def generate(graph: ModuleGraph, config: BomConfig) -> BomManifest:
    """Collect, filter and assemble the BOM described by *config*."""

    _LOG.debug("Generating BOM")
    current = graph.current
    self_coordinate = _self_coordinate(graph, config)

    collected = scope.collect(graph, config.scope)
    surviving = matchers.filter_coordinates(collected, config.inclusions, config.exclusions)
    _LOG.debug("Collected %d coordinates, %d left after filtering", len(collected), len(surviving))

    project_parent = current.parent if config.use_project_parent and current is not None else None
    return build(
        surviving,
        config.dependency_exclusions,
        config.parent,
        self_coordinate,
        add_version_properties=config.add_version_properties,
        use_properties_for_version=config.use_properties_for_version,
        project_parent=project_parent,
        metadata=_metadata(graph, config),
    )


def _self_coordinate(graph: ModuleGraph, config: BomConfig) -> Coordinate:
    current = graph.current
    group_id = config.group_id or (current.group_id if current else None)
    artifact_id = config.artifact_id or (current.artifact_id if current else None)
    version = config.version or (current.version if current else None)
    if not (group_id and artifact_id and version):
        raise ConfigurationError("BOM groupId, artifactId and version are required when no current module is known")
    return Coordinate(group_id=group_id, artifact_id=artifact_id, version=version, artifact_type="pom")


def _metadata(graph: ModuleGraph, config: BomConfig) -> ProjectMetadata:
    """Explicit name/description, plus the current module's metadata for a stand-alone BOM."""

    current = graph.current
    standalone = config.attach and not config.has_classifier
    if not standalone or current is None:
        return ProjectMetadata(name=config.name, description=config.description)
    inherited = current.metadata
    return replace(
        inherited,
        name=config.name if config.name is not None else inherited.name,
        description=config.description if config.description is not None else inherited.description,
    )


def _exclusions_for(coordinate: Coordinate, mappings: Sequence[ExclusionMapping]) -> Tuple[Exclusion, ...]:
    return tuple(
        Exclusion(group_id=mapping.exclusion_group_id, artifact_id=mapping.exclusion_artifact_id)
        for mapping in mappings
        if mapping.applies_to(coordinate)
    )
