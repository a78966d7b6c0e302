import pytest

from bombuilder.core import matchers
from bombuilder.core.coordinates import Coordinate, GroupArtifactPattern


def _coordinate(group_id: str = "groupId", artifact_id: str = "artifactId", **kwargs) -> Coordinate:
    defaults = {"version": "version", "classifier": "classifier", "artifact_type": "type", "scope": "scope"}
    defaults.update(kwargs)
    return Coordinate(group_id=group_id, artifact_id=artifact_id, **defaults)


@pytest.mark.parametrize(
    "expected, group_id, artifact_id, pattern_group, pattern_artifact",
    [
        (True, "groupId", "artifactId", "groupId", "artifactId"),
        (True, "groupId", "artifactId", "*", "artifactId"),
        (True, "groupId", "artifactId", "groupId", "*"),
        (True, "groupId", "artifactId", "*", "*"),
        (True, "groupId", "artifactId", " * ", " * "),
        (False, "groupId", "otherArtifactId", "groupId", None),
        (False, "groupId", "otherArtifactId", None, "artifactId"),
        (False, "groupId", "otherArtifactId", "groupId", "artifactId"),
        (False, "otherGroupId", "artifactId", "groupId", "artifactId"),
        (False, "otherGroupId", "otherArtifactId", "groupId", "artifactId"),
    ],
)
def test_matches(expected, group_id, artifact_id, pattern_group, pattern_artifact):
    coordinate = _coordinate(group_id, artifact_id)
    pattern = GroupArtifactPattern(group_id=pattern_group, artifact_id=pattern_artifact)
    assert matchers.matches(coordinate, pattern) is expected


def test_missing_pattern_field_only_matches_empty_value():
    pattern = GroupArtifactPattern(group_id="g", artifact_id=None)
    assert matchers.matches(_coordinate("g", ""), pattern)
    assert not matchers.matches(_coordinate("g", "a"), pattern)


def test_wildcard_rule_excludes_everything():
    rules = [GroupArtifactPattern("*", "*")]
    coordinates = [
        _coordinate("org.example", "core"),
        _coordinate("com.acme", "api", version="2.0", classifier="", artifact_type="pom"),
        _coordinate("", ""),
    ]
    assert all(matchers.is_excluded(coordinate, rules) for coordinate in coordinates)


def test_exact_pattern_ignores_other_fields():
    coordinate = _coordinate("org.example", "core", version="9.9", classifier="tests", artifact_type="test-jar")
    pattern = GroupArtifactPattern(coordinate.group_id, coordinate.artifact_id)
    assert matchers.matches(coordinate, pattern)


def test_inclusion_is_opt_in():
    coordinates = [_coordinate("org.example", "core"), _coordinate("com.acme", "api")]
    assert matchers.filter_coordinates(coordinates) == coordinates
    nothing = [GroupArtifactPattern("does.not", "exist")]
    assert matchers.filter_coordinates(coordinates, inclusions=nothing) == []


def test_empty_exclusions_exclude_nothing():
    assert matchers.is_excluded(_coordinate(), []) is False
    assert matchers.is_included(_coordinate(), []) is True


def test_inclusion_runs_before_exclusion():
    coordinates = [
        _coordinate("org.example", "core"),
        _coordinate("org.example", "internal"),
        _coordinate("com.acme", "api"),
    ]
    survivors = matchers.filter_coordinates(
        coordinates,
        inclusions=[GroupArtifactPattern("org.example", "*")],
        exclusions=[GroupArtifactPattern("*", "internal")],
    )
    assert [c.artifact_id for c in survivors] == ["core"]


def test_parse_patterns_accepts_strings_and_mappings():
    patterns = matchers.parse_patterns(["org.example:*", {"group_id": "*", "artifact_id": "api"}])
    assert patterns == [
        GroupArtifactPattern("org.example", "*"),
        GroupArtifactPattern("*", "api"),
    ]
