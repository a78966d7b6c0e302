"""Version property naming for managed dependencies."""

from __future__ import annotations

import logging
from typing import Dict

_LOG = logging.getLogger(__name__)

VERSION_PROPERTY_PREFIX = "version."


def assign_property_name(group_id: str, artifact_id: str, version: str, properties: Dict[str, str]) -> str:
    """Return the property holding *version*, recording it in *properties*.

    Artifacts of one group share ``version.<groupId>`` while they agree on the
    version. The first artifact of a group that disagrees gets
    ``version.<groupId>.<artifactId>`` instead. Dict insertion order is the
    order properties end up in the document.
    """

    name = VERSION_PROPERTY_PREFIX + group_id
    existing = properties.get(name)
    if existing is None:
        properties[name] = version
        return name
    if existing == version:
        return name

    name = f"{VERSION_PROPERTY_PREFIX}{group_id}.{artifact_id}"
    previous = properties.get(name)
    if previous is not None and previous != version:
        _LOG.warning(
            "Property %s already holds version %s; overwriting with %s",
            name,
            previous,
            version,
        )
    properties[name] = version
    return name


def property_reference(name: str) -> str:
    return "${" + name + "}"
