import json
from pathlib import Path

import pytest

from bombuilder.core import module_graph
from bombuilder.core.coordinates import Coordinate, ParentCoordinate
from bombuilder.core.errors import ConfigurationError


def test_load_yaml_graph(tmp_path: Path):
    graph_path = tmp_path / "graph.yml"
    graph_path.write_text(
        """
current: com.example:app
modules:
  - group_id: com.example
    artifact_id: parent
    version: "1.0"
    packaging: pom
    modules: [app]
  - groupId: com.example
    artifactId: app
    version: "1.0"
    parent:
      group_id: com.example
      artifact_id: parent
      version: "1.0"
      relative_path: ..
    name: App
    licenses:
      - name: Apache-2.0
    scm:
      url: https://example.com/scm
    dependencies:
      - group_id: org.slf4j
        artifact_id: slf4j-api
        version: 2.0.9
    artifacts:
      - group_id: org.junit.jupiter
        artifact_id: junit-jupiter
        version: 5.10.0
        scope: test
""".strip()
    )
    graph = module_graph.load_graph(graph_path)
    assert [m.key for m in graph.modules] == ["com.example:parent", "com.example:app"]
    current = graph.current
    assert current is not None
    assert current.key == "com.example:app"
    assert current.packaging == "jar"
    assert current.parent == ParentCoordinate("com.example", "parent", "1.0", relative_path="..")
    assert current.metadata.name == "App"
    assert current.metadata.licenses == ({"name": "Apache-2.0"},)
    assert current.dependencies == (Coordinate("org.slf4j", "slf4j-api", "2.0.9", artifact_type="jar"),)
    assert current.artifacts[0].scope == "test"
    assert graph.modules[0].is_pom
    assert graph.modules[0].modules == ("app",)


def test_load_json_graph_defaults_current_to_first_module(tmp_path: Path):
    graph_path = tmp_path / "graph.json"
    graph_path.write_text(json.dumps({"modules": [{"group_id": "g", "artifact_id": "a", "version": "1"}]}))
    graph = module_graph.load_graph(graph_path)
    assert graph.current is not None
    assert graph.current.coordinate == Coordinate("g", "a", "1", artifact_type="jar")


def test_unknown_current_module_is_rejected():
    with pytest.raises(ConfigurationError):
        module_graph.graph_from_dict({"current": "g:missing", "modules": [{"group_id": "g", "artifact_id": "a"}]})


def test_dependency_without_artifact_id_is_rejected():
    with pytest.raises(ConfigurationError):
        module_graph.module_from_dict(
            {"group_id": "g", "artifact_id": "a", "dependencies": [{"group_id": "org.slf4j"}]}
        )


def test_missing_graph_file_is_rejected(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        module_graph.load_graph(tmp_path / "nope.yml")
