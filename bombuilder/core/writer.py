"""Serialise a BOM manifest to a Maven ``pom.xml`` document."""

from __future__ import annotations

import logging
import os
import pathlib
import tempfile
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, Optional

from bombuilder.core.bom_model import BomManifest, ManifestEntry
from bombuilder.core.errors import ManifestWriteError
from bombuilder.core.module_graph import ProjectMetadata

_LOG = logging.getLogger(__name__)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
POM_SCHEMA_LOCATION = f"{POM_NAMESPACE} https://maven.apache.org/xsd/maven-4.0.0.xsd"

SCM_FIELDS = ("connection", "developerConnection", "tag", "url")


def render_pom(manifest: BomManifest) -> bytes:
    """Render *manifest* with a fixed element order.

    parent, coordinates, packaging, metadata, properties, dependencyManagement.
    """

    project = ET.Element(
        "project",
        {
            "xmlns": POM_NAMESPACE,
            "xmlns:xsi": XSI_NAMESPACE,
            "xsi:schemaLocation": POM_SCHEMA_LOCATION,
        },
    )
    _text(project, "modelVersion", manifest.model_version)

    if manifest.parent is not None:
        parent = ET.SubElement(project, "parent")
        _text(parent, "groupId", manifest.parent.group_id)
        _text(parent, "artifactId", manifest.parent.artifact_id)
        _text(parent, "version", manifest.parent.version)
        if manifest.parent.relative_path is not None:
            _text(parent, "relativePath", manifest.parent.relative_path)

    _text(project, "groupId", manifest.group_id)
    _text(project, "artifactId", manifest.artifact_id)
    _text(project, "version", manifest.version)
    _text(project, "packaging", manifest.packaging)

    _append_metadata(project, manifest.metadata)

    if manifest.properties:
        properties = ET.SubElement(project, "properties")
        for name, value in manifest.properties.items():
            _text(properties, name, value)

    management = ET.SubElement(project, "dependencyManagement")
    dependencies = ET.SubElement(management, "dependencies")
    for entry in manifest.dependencies:
        _append_dependency(dependencies, entry)

    ET.indent(project, space="  ")
    return ET.tostring(project, encoding="UTF-8", xml_declaration=True) + b"\n"


def write_model(manifest: BomManifest, output_file: pathlib.Path) -> pathlib.Path:
    """Write *manifest* to *output_file*, creating parent directories as needed.

    The document goes to a temporary file next to the destination first and is
    moved into place once complete.
    """

    content = render_pom(manifest)
    tmp_name: Optional[str] = None
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output_file.name}.", dir=output_file.parent)
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output_file)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ManifestWriteError(f"Unable to write pom file {output_file}: {exc}") from exc
    _LOG.info("Wrote BOM %s:%s:%s to %s", manifest.group_id, manifest.artifact_id, manifest.version, output_file)
    return output_file


def _append_metadata(project: ET.Element, metadata: ProjectMetadata) -> None:
    if metadata.name is not None:
        _text(project, "name", metadata.name)
    if metadata.description is not None:
        _text(project, "description", metadata.description)
    if metadata.url is not None:
        _text(project, "url", metadata.url)
    _append_list(project, "licenses", "license", metadata.licenses)
    _append_list(project, "developers", "developer", metadata.developers)
    if metadata.scm:
        fields = {_pom_tag(key): value for key, value in metadata.scm.items()}
        scm = ET.SubElement(project, "scm")
        for key in SCM_FIELDS:
            if key in fields:
                _text(scm, key, fields[key])


def _append_list(parent: ET.Element, container: str, tag: str, entries: Iterable[Dict[str, str]]) -> None:
    entries = list(entries)
    if not entries:
        return
    wrapper = ET.SubElement(parent, container)
    for entry in entries:
        item = ET.SubElement(wrapper, tag)
        for key, value in entry.items():
            _text(item, _pom_tag(key), value)


def _pom_tag(key: str) -> str:
    """Map a snake_case snapshot key such as ``developer_connection`` to its POM element name."""

    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _append_dependency(parent: ET.Element, entry: ManifestEntry) -> None:
    dependency = ET.SubElement(parent, "dependency")
    _text(dependency, "groupId", entry.group_id)
    _text(dependency, "artifactId", entry.artifact_id)
    _text(dependency, "version", entry.version)
    if entry.artifact_type:
        _text(dependency, "type", entry.artifact_type)
    if entry.classifier:
        _text(dependency, "classifier", entry.classifier)
    if entry.exclusions:
        exclusions = ET.SubElement(dependency, "exclusions")
        for exclusion in entry.exclusions:
            item = ET.SubElement(exclusions, "exclusion")
            _text(item, "groupId", exclusion.group_id)
            _text(item, "artifactId", exclusion.artifact_id)


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = value
    return element
