"""Authorization code cache.

Maps code system URLs to the codes known for them. The cache is seeded once
per run, from the built-in DSF table, CodeSystem documents below the
resource root and CodeSystem resources embedded in dependency artifacts, and
is only read afterwards.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from dsflint.constants import BUILT_IN_CODES, FHIR_DIRECTORY
from dsflint.errors import CodeCacheSeedError, DocumentParseError
from dsflint.models.resource import ResourceDocument, ResourceKind, children, first

if TYPE_CHECKING:
    from dsflint.parser.fhir import FhirParser
    from dsflint.resources.dependencies import DependencyArtifactIndex

logger = logging.getLogger(__name__)

CODE_SYSTEM_DIRECTORIES = (f"{FHIR_DIRECTORY}/CodeSystem", "CodeSystem")
RESOURCE_SUFFIXES = (".xml", ".json")


class AuthorizationCodeCache:
    """Code system URL to known codes, with additive-only registration."""

    def __init__(self):
        self._codes: dict[str, set[str]] = {}
        self._lock = threading.Lock()
        self._sealed = False

    # Registration

    def register(self, system: str, codes: Iterable[str]) -> None:
        """Union ``codes`` into the set known for ``system``."""
        if self._sealed:
            raise RuntimeError("Authorization code cache is sealed; register codes before validation starts")
        cleaned = {code.strip() for code in codes if code and code.strip()}
        with self._lock:
            self._codes.setdefault(system.strip(), set()).update(cleaned)

    def register_built_ins(self, extra: dict[str, list[str]] | None = None) -> None:
        for system, codes in BUILT_IN_CODES.items():
            self.register(system, codes)
        for system, codes in (extra or {}).items():
            self.register(system, codes)

    def register_code_system(self, document: ResourceDocument) -> int:
        """Register the concepts of a CodeSystem document; returns the number of codes."""
        if document.resource_kind != ResourceKind.CODE_SYSTEM:
            return 0
        system = document.logical_url
        if not system:
            logger.debug(f"CodeSystem {document.path} has no url, skipping")
            return 0
        codes = _concept_codes(document.fields)
        self.register(system, codes)
        logger.debug(f"Registered {len(codes)} codes for {system} from {document.path}")
        return len(codes)

    def seed(
        self,
        resource_root: Path,
        dependency_index: "DependencyArtifactIndex | None" = None,
        parser: "FhirParser | None" = None,
        extra_codes: dict[str, list[str]] | None = None,
    ) -> None:
        """Seed from the built-in table, on-disk CodeSystems and dependency artifacts.

        Raises:
            CodeCacheSeedError: If the resource root or the dependency index cannot be read
        """
        if parser is None:
            from dsflint.parser.fhir import FhirParser
            parser = FhirParser()

        resource_root = Path(resource_root)
        if not resource_root.is_dir():
            raise CodeCacheSeedError(f"Cannot seed code cache, resource root missing: {resource_root}")

        self.register_built_ins(extra_codes)

        registered_files = 0
        for path in _code_system_files(resource_root):
            try:
                document = parser.parse_resource_document(path, resource_root)
            except DocumentParseError as e:
                logger.warning(f"Skipping unreadable CodeSystem {path}: {e.reason}")
                continue
            if self.register_code_system(document):
                registered_files += 1

        if dependency_index is not None:
            registered_files += self.register_dependency_code_systems(dependency_index, parser)

        logger.info(
            f"Seeded code cache with {len(self._codes)} code systems "
            f"({registered_files} CodeSystem documents)"
        )

    def register_dependency_code_systems(self, dependency_index: "DependencyArtifactIndex",
                                         parser: "FhirParser") -> int:
        """Register CodeSystems embedded in dependency artifacts; returns the number registered."""
        try:
            entries = dependency_index.list_embedded_resources()
        except OSError as e:
            raise CodeCacheSeedError(f"Cannot list dependency resources: {e}") from e

        registered = 0
        for entry in entries:
            if "CodeSystem/" not in entry or not entry.lower().endswith(RESOURCE_SUFFIXES):
                continue
            try:
                content = dependency_index.read_resource(entry)
                document = parser.parse_content(content, entry, f"dependency:{entry}")
            except OSError as e:
                raise CodeCacheSeedError(f"Cannot read dependency resource {entry}: {e}") from e
            except DocumentParseError as e:
                logger.warning(f"Skipping unreadable dependency CodeSystem {entry}: {e.reason}")
                continue
            if self.register_code_system(document):
                registered += 1
        return registered

    def seal(self) -> None:
        """End the seeding phase; further registration raises."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    # Queries

    def contains_system(self, system: str | None) -> bool:
        return system is not None and system in self._codes

    def is_known(self, system: str | None, code: str | None) -> bool:
        if system is None or code is None:
            return False
        return code in self._codes.get(system, ())

    def is_unknown(self, system: str | None, code: str | None) -> bool:
        """True unless the code is registered; unregistered systems count as unknown."""
        return not self.is_known(system, code)

    def find_systems_containing_code(self, code: str) -> list[str]:
        return sorted(system for system, codes in self._codes.items() if code in codes)

    def codes_for(self, system: str) -> frozenset[str]:
        return frozenset(self._codes.get(system, ()))

    def snapshot(self) -> dict[str, list[str]]:
        return {system: sorted(codes) for system, codes in sorted(self._codes.items())}


def _concept_codes(fields: dict) -> set[str]:
    codes = set()
    pending = list(children(fields, "concept"))
    while pending:
        concept = pending.pop()
        code = first(concept, "code")
        if code:
            codes.add(code)
        pending.extend(children(concept, "concept"))
    return codes


def _code_system_files(resource_root: Path) -> list[Path]:
    files = []
    for directory in CODE_SYSTEM_DIRECTORIES:
        base = resource_root / directory
        if not base.is_dir():
            continue
        files.extend(
            path for path in base.rglob("*")
            if path.is_file() and path.suffix.lower() in RESOURCE_SUFFIXES
        )
    return sorted(set(files))
