"""Resource catalog, reference resolution and dependency artifact indexes."""

from dsflint.resources.catalog import ResourceCatalog, build_catalog
from dsflint.resources.dependencies import (
    ArchiveDependencyIndex,
    DependencyArtifactIndex,
    DirectoryDependencyIndex,
)
from dsflint.resources.resolver import ReferenceResolver, ResolutionResult, ResolutionStatus, resolve

__all__ = [
    "ArchiveDependencyIndex",
    "DependencyArtifactIndex",
    "DirectoryDependencyIndex",
    "ReferenceResolver",
    "ResolutionResult",
    "ResolutionStatus",
    "ResourceCatalog",
    "build_catalog",
    "resolve",
]
