"""Inclusion and exclusion matching over ``groupId:artifactId`` patterns."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from bombuilder.core.coordinates import WILDCARD, Coordinate, GroupArtifactPattern
from bombuilder.core.errors import ConfigurationError

_LOG = logging.getLogger(__name__)


def matches(coordinate: Coordinate, pattern: GroupArtifactPattern) -> bool:
    group_id = _default_and_trim(coordinate.group_id)
    artifact_id = _default_and_trim(coordinate.artifact_id)
    pattern_group_id = _default_and_trim(pattern.group_id)
    pattern_artifact_id = _default_and_trim(pattern.artifact_id)
    group_matched = pattern_group_id == WILDCARD or group_id == pattern_group_id
    artifact_matched = pattern_artifact_id == WILDCARD or artifact_id == pattern_artifact_id
    return group_matched and artifact_matched


def is_included(coordinate: Coordinate, rules: Sequence[GroupArtifactPattern]) -> bool:
    if not rules:
        return True
    for rule in rules:
        if matches(coordinate, rule):
            _LOG.debug("Artifact %s matches included dependency %s", coordinate, rule)
            return True
    return False


def is_excluded(coordinate: Coordinate, rules: Sequence[GroupArtifactPattern]) -> bool:
    if not rules:
        return False
    for rule in rules:
        if matches(coordinate, rule):
            _LOG.debug("Artifact %s matches excluded dependency %s", coordinate, rule)
            return True
    return False


def filter_coordinates(
    coordinates: Iterable[Coordinate],
    inclusions: Sequence[GroupArtifactPattern] = (),
    exclusions: Sequence[GroupArtifactPattern] = (),
) -> List[Coordinate]:
    """Keep coordinates that pass the inclusions and match none of the exclusions."""

    return [
        coordinate
        for coordinate in coordinates
        if is_included(coordinate, inclusions) and not is_excluded(coordinate, exclusions)
    ]


def parse_patterns(entries: Any) -> List[GroupArtifactPattern]:
    if not entries:
        return []
    if not isinstance(entries, list):
        raise ConfigurationError(f"Expected a list of group/artifact patterns, got {entries!r}")
    patterns: List[GroupArtifactPattern] = []
    for entry in entries:
        if isinstance(entry, str):
            patterns.append(_pattern_from_string(entry))
        elif isinstance(entry, dict):
            patterns.append(GroupArtifactPattern.from_dict(entry))
        else:
            raise ConfigurationError(f"Unsupported pattern entry: {entry!r}")
    return patterns


def _pattern_from_string(value: str) -> GroupArtifactPattern:
    group_id, _, artifact_id = value.partition(":")
    return GroupArtifactPattern(group_id=group_id.strip() or None, artifact_id=artifact_id.strip() or None)


def _default_and_trim(value: Optional[str]) -> str:
    return (value or "").strip()
