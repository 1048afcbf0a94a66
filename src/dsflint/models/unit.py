"""Plugin unit model."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dsflint.constants import ApiVersion
from dsflint.models.process import ProcessFile
from dsflint.models.resource import ResourceDocument
from dsflint.utils.paths import is_bpmn_reference, normalize_reference

if TYPE_CHECKING:
    from dsflint.resources.dependencies import DependencyArtifactIndex


@dataclass
class Unit:
    """A discovered plugin with its declared references.

    ``declared_references`` is the only record of what the plugin declares;
    the process model and FHIR resource views are derived from it by file
    extension. References are normalized on construction.
    """
    id: str
    api_version: ApiVersion = ApiVersion.V2
    declared_references: set[str] = field(default_factory=set)
    process_files: list[ProcessFile] = field(default_factory=list)
    resource_documents: list[ResourceDocument] = field(default_factory=list)
    dependency_index: "DependencyArtifactIndex | None" = None

    def __post_init__(self):
        self.declared_references = {normalize_reference(r) for r in self.declared_references}

    @property
    def process_references(self) -> list[str]:
        return sorted(r for r in self.declared_references if is_bpmn_reference(r))

    @property
    def resource_references(self) -> list[str]:
        return sorted(r for r in self.declared_references if not is_bpmn_reference(r))
