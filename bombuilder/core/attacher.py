"""Register a generated BOM as a build output."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from bombuilder.core.bom_model import BomManifest
from bombuilder.core.errors import ConfigurationError
from bombuilder.core.module_graph import Module

_LOG = logging.getLogger(__name__)


class AttachMode(str, Enum):
    CLASSIFIED = "classified"
    REPLACE = "replace"


@dataclass(frozen=True)
class AttachPlan:
    mode: AttachMode
    module: Module
    classifier: Optional[str] = None


@dataclass(frozen=True)
class Attachment:
    """A file registered against a module, either alongside or instead of its POM."""

    module_key: str
    group_id: str
    artifact_id: str
    version: str
    file: pathlib.Path
    mode: AttachMode
    classifier: Optional[str] = None
    extension: str = "pom"

    @property
    def replaces_document(self) -> bool:
        return self.mode is AttachMode.REPLACE


def plan_attachment(attach: bool, classifier: Optional[str], module: Optional[Module]) -> Optional[AttachPlan]:
    """Decide how the BOM will be attached before anything is written.

    A classifier attaches the BOM next to the module's own POM. Without one the
    BOM replaces the module POM, which is only allowed for a ``pom`` module
    that has no sub-modules.
    """

    if not attach:
        return None
    if module is None:
        raise ConfigurationError("Cannot attach BOM: no current module in the module graph")
    if classifier and classifier.strip():
        return AttachPlan(mode=AttachMode.CLASSIFIED, module=module, classifier=classifier.strip())
    if module.is_pom and not module.modules:
        return AttachPlan(mode=AttachMode.REPLACE, module=module)
    raise ConfigurationError(
        f"Cannot replace project POM of {module.key}: "
        f"only a module with packaging=pom and no sub-modules may be replaced "
        f"(packaging={module.packaging}, modules={len(module.modules)})"
    )


class Attacher:
    """Collects the attachments made during one run."""

    def __init__(self) -> None:
        self._attachments: List[Attachment] = []

    @property
    def attachments(self) -> List[Attachment]:
        return list(self._attachments)

    def attach(self, plan: AttachPlan, manifest: BomManifest, output_file: pathlib.Path) -> Attachment:
        if plan.mode is AttachMode.CLASSIFIED:
            _LOG.debug("Attaching BOM w/ classifier: %s", plan.classifier)
        else:
            _LOG.debug("Replacing module POM w/ generated BOM")
        attachment = Attachment(
            module_key=plan.module.key,
            group_id=manifest.group_id,
            artifact_id=manifest.artifact_id,
            version=manifest.version,
            file=output_file,
            mode=plan.mode,
            classifier=plan.classifier,
        )
        self._attachments.append(attachment)
        _LOG.info("Attached %s to %s (%s)", output_file, plan.module.key, plan.mode.value)
        return attachment
