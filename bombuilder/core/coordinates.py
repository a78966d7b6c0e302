"""Dependency coordinates, group/artifact patterns and parent specs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from bombuilder.core.errors import ConfigurationError

WILDCARD = "*"
DEFAULT_TYPE = "jar"


@dataclass(frozen=True)
class Coordinate:
    """Identity of a single artifact.

    ``scope`` is carried along for information only and takes no part in
    equality or hashing, so two coordinates that differ only in scope collapse
    to whichever one was seen first.
    """

    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    artifact_type: str = ""
    scope: str = field(default="", compare=False)

    def key(self) -> Tuple[str, str, str, str, str]:
        return (self.group_id, self.artifact_id, self.version, self.classifier, self.artifact_type)

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.artifact_type or "jar"]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Coordinate":
        group_id = _field(raw, "group_id", "groupId")
        artifact_id = _field(raw, "artifact_id", "artifactId")
        if not group_id or not artifact_id:
            raise ConfigurationError(f"Dependency requires group_id and artifact_id: {dict(raw)!r}")
        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=_field(raw, "version"),
            classifier=_field(raw, "classifier"),
            artifact_type=_field(raw, "type", "artifact_type") or DEFAULT_TYPE,
            scope=_field(raw, "scope"),
        )


@dataclass(frozen=True)
class GroupArtifactPattern:
    """A ``groupId:artifactId`` pair where either side may be ``*``."""

    group_id: Optional[str]
    artifact_id: Optional[str]

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GroupArtifactPattern":
        return cls(
            group_id=_field(raw, "group_id", "groupId") or None,
            artifact_id=_field(raw, "artifact_id", "artifactId") or None,
        )


@dataclass(frozen=True)
class ExclusionMapping:
    """Transitive exclusion to copy onto the managed entry of one dependency."""

    dependency_group_id: str
    dependency_artifact_id: str
    exclusion_group_id: str
    exclusion_artifact_id: str

    def applies_to(self, coordinate: Coordinate) -> bool:
        return (
            self.dependency_group_id == coordinate.group_id
            and self.dependency_artifact_id == coordinate.artifact_id
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ExclusionMapping":
        values = {
            "dependency_group_id": _field(raw, "dependency_group_id", "dependencyGroupId"),
            "dependency_artifact_id": _field(raw, "dependency_artifact_id", "dependencyArtifactId"),
            "exclusion_group_id": _field(raw, "exclusion_group_id", "exclusionGroupId"),
            "exclusion_artifact_id": _field(raw, "exclusion_artifact_id", "exclusionArtifactId"),
        }
        missing = sorted(name for name, value in values.items() if not value)
        if missing:
            raise ConfigurationError(f"Dependency exclusion is missing {', '.join(missing)}: {dict(raw)!r}")
        return cls(**values)


@dataclass(frozen=True)
class ParentCoordinate:
    group_id: str
    artifact_id: str
    version: str
    relative_path: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ParentCoordinate":
        group_id = _field(raw, "group_id", "groupId")
        artifact_id = _field(raw, "artifact_id", "artifactId")
        version = _field(raw, "version")
        if not (group_id and artifact_id and version):
            raise ConfigurationError(f"Parent requires group_id, artifact_id and version: {dict(raw)!r}")
        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            relative_path=_field(raw, "relative_path", "relativePath") or None,
        )


def parse_parent_spec(spec: str) -> ParentCoordinate:
    """Parse a ``groupId:artifactId:version`` string."""

    segments = [segment.strip() for segment in spec.split(":")]
    if len(segments) != 3 or not all(segments):
        raise ConfigurationError(
            f"BOM parent should be specified as [groupId]:[artifactId]:[version] but is '{spec}'"
        )
    group_id, artifact_id, version = segments
    return ParentCoordinate(group_id=group_id, artifact_id=artifact_id, version=version)


def _field(raw: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = raw.get(name)
        if value is not None:
            return str(value).strip()
    return ""

