"""YAML configuration for a BOM build."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional

import yaml

from bombuilder.core import matchers
from bombuilder.core.coordinates import ExclusionMapping, GroupArtifactPattern
from bombuilder.core.errors import ConfigurationError
from bombuilder.core.scope import ScopePolicy, parse_bool

DEFAULT_OUTPUT = "bom-pom.xml"


@dataclass(frozen=True)
class BomConfig:
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    classifier: Optional[str] = None
    parent: Optional[str] = None
    use_project_parent: bool = False
    attach: bool = False
    add_version_properties: bool = False
    use_properties_for_version: bool = False
    output: str = DEFAULT_OUTPUT
    scope: ScopePolicy = field(default_factory=ScopePolicy)
    inclusions: List[GroupArtifactPattern] = field(default_factory=list)
    exclusions: List[GroupArtifactPattern] = field(default_factory=list)
    dependency_exclusions: List[ExclusionMapping] = field(default_factory=list)

    @property
    def has_classifier(self) -> bool:
        return bool(self.classifier and self.classifier.strip())

    def with_overrides(self, **overrides: Any) -> "BomConfig":
        """Copy of this config with every non-``None`` override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_config(path: Optional[pathlib.Path]) -> BomConfig:
    if path is None or not path.exists():
        return BomConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Unable to parse configuration {path}: {exc}") from exc
    return config_from_dict(data)


def config_from_dict(data: Any) -> BomConfig:
    if not isinstance(data, dict):
        raise ConfigurationError("BOM configuration must be a mapping")
    scope_raw = data.get("scope") or {}
    if not isinstance(scope_raw, dict):
        raise ConfigurationError(f"'scope' must be a mapping, got {scope_raw!r}")
    return BomConfig(
        group_id=_optional_str(data, "group_id"),
        artifact_id=_optional_str(data, "artifact_id"),
        version=_optional_str(data, "version"),
        name=_optional_str(data, "name"),
        description=_optional_str(data, "description"),
        classifier=_optional_str(data, "classifier"),
        parent=_optional_str(data, "parent"),
        use_project_parent=parse_bool(data.get("use_project_parent", False), "use_project_parent"),
        attach=parse_bool(data.get("attach", False), "attach"),
        add_version_properties=parse_bool(data.get("add_version_properties", False), "add_version_properties"),
        use_properties_for_version=parse_bool(data.get("use_properties_for_version", False), "use_properties_for_version"),
        output=_optional_str(data, "output") or DEFAULT_OUTPUT,
        scope=ScopePolicy.from_dict(scope_raw),
        inclusions=matchers.parse_patterns(data.get("inclusions")),
        exclusions=matchers.parse_patterns(data.get("exclusions")),
        dependency_exclusions=_exclusion_mappings(data.get("dependency_exclusions")),
    )


def _exclusion_mappings(entries: Any) -> List[ExclusionMapping]:
    if not entries:
        return []
    if not isinstance(entries, list):
        raise ConfigurationError(f"'dependency_exclusions' must be a list, got {entries!r}")
    mappings: List[ExclusionMapping] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Dependency exclusion must be a mapping: {entry!r}")
        mappings.append(ExclusionMapping.from_dict(entry))
    return mappings


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)
