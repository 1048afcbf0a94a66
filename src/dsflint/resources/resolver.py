"""Reference resolution against the resource catalog.

A reference is a relative path, a bare file name or a canonical url. The
lookup order is fixed: path in root, path outside root, canonical url,
dependency artifact. The first hit wins; nothing found is ``MISSING``.
A partial path matching several files in the root resolves to the one whose
path contains the unit id; if that does not single one out the reference is
``AMBIGUOUS``. Resolution never raises and has no side effects.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dsflint.models.resource import ResourceDocument
from dsflint.resources.catalog import ResourceCatalog
from dsflint.resources.dependencies import DependencyArtifactIndex
from dsflint.utils.paths import is_canonical_url, normalize_path

if TYPE_CHECKING:
    from dsflint.models.unit import Unit

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    IN_ROOT = "in_root"
    OUTSIDE_ROOT = "outside_root"
    FROM_DEPENDENCY = "from_dependency"
    AMBIGUOUS = "ambiguous"
    MISSING = "missing"


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one reference."""
    reference: str
    status: ResolutionStatus
    path: str | None = None
    document: ResourceDocument | None = None
    dependency: str | None = None
    candidates: tuple[str, ...] = ()

    @classmethod
    def in_root(cls, reference: str, document: ResourceDocument) -> "ResolutionResult":
        return cls(reference, ResolutionStatus.IN_ROOT, document.path, document)

    @classmethod
    def outside_root(cls, reference: str, path: str) -> "ResolutionResult":
        return cls(reference, ResolutionStatus.OUTSIDE_ROOT, path)

    @classmethod
    def from_dependency(cls, reference: str, path: str, dependency: str | None) -> "ResolutionResult":
        return cls(reference, ResolutionStatus.FROM_DEPENDENCY, path, dependency=dependency)

    @classmethod
    def ambiguous(cls, reference: str, candidates: list[str]) -> "ResolutionResult":
        return cls(reference, ResolutionStatus.AMBIGUOUS, candidates=tuple(candidates))

    @classmethod
    def missing(cls, reference: str) -> "ResolutionResult":
        return cls(reference, ResolutionStatus.MISSING)

    @property
    def found(self) -> bool:
        return self.status not in (ResolutionStatus.MISSING, ResolutionStatus.AMBIGUOUS)


class ReferenceResolver:
    """Resolves references of one unit against the shared catalog."""

    def __init__(self, catalog: ResourceCatalog, dependency_index: DependencyArtifactIndex | None = None,
                 unit_id: str | None = None):
        self.catalog = catalog
        self.dependency_index = dependency_index
        self.unit_id = unit_id

    def resolve(self, reference: str) -> ResolutionResult:
        if not reference or not reference.strip():
            return ResolutionResult.missing(reference or "")
        reference = reference.strip()

        if not is_canonical_url(reference):
            candidates = self.catalog.find_by_path(reference)
            if len(candidates) == 1:
                return ResolutionResult.in_root(reference, candidates[0])
            if candidates:
                return self._disambiguate(reference, candidates)

            outside = self.catalog.find_outside_root(reference)
            if outside is not None:
                return ResolutionResult.outside_root(reference, outside)
        else:
            document = self.catalog.find_by_url(reference)
            if document is not None:
                return ResolutionResult.in_root(reference, document)

        dependency_path = self._find_in_dependencies(reference)
        if dependency_path is not None:
            return ResolutionResult.from_dependency(
                reference, dependency_path, self.dependency_index.artifact_of(dependency_path)
            )

        logger.debug(f"Reference not found: {reference}")
        return ResolutionResult.missing(reference)

    def _disambiguate(self, reference: str, candidates: list[ResourceDocument]) -> ResolutionResult:
        owned = [doc for doc in candidates if self.unit_id and self.unit_id.lower() in doc.path.lower()]
        if len(owned) == 1:
            return ResolutionResult.in_root(reference, owned[0])
        logger.debug(f"Reference {reference} of unit {self.unit_id} matches {len(candidates)} files")
        return ResolutionResult.ambiguous(reference, [doc.path for doc in candidates])

    def _find_in_dependencies(self, reference: str) -> str | None:
        if self.dependency_index is None or is_canonical_url(reference):
            return None
        try:
            return self.dependency_index.find(normalize_path(reference))
        except OSError as e:
            logger.warning(f"Dependency lookup failed for {reference}: {e}")
            return None


def resolve(reference: str, unit: "Unit", catalog: ResourceCatalog) -> ResolutionResult:
    """Resolve ``reference`` for ``unit``, using the unit's dependency index."""
    return ReferenceResolver(catalog, unit.dependency_index, unit.id).resolve(reference)
