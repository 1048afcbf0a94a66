"""Project-wide resource catalog.

The catalog is built once per run by walking the project tree. Files below
the resource root are parsed and indexed by normalized relative path and by
canonical url; BPMN/FHIR-like files elsewhere in the project are only
remembered by path so the resolver can tell "outside root" from "missing".
"""

import fnmatch
import logging
import os
from pathlib import Path

from dsflint.constants import TASK_MESSAGE_NAME_ELEMENT
from dsflint.errors import DocumentParseError, ResourceRootNotFoundError
from dsflint.models.process import ProcessFile
from dsflint.models.resource import ResourceDocument, ResourceKind, children, first, walk
from dsflint.parser.documents import DocumentParser, DocumentType
from dsflint.utils.paths import normalize_path, relative_posix, strip_version_suffix

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = [".git/**", "target/**", "build/**", ".idea/**", "node_modules/**"]


class ResourceCatalog:
    """Index of the documents below one resource root."""

    def __init__(self, resource_root: Path, project_root: Path | None = None):
        self.resource_root = Path(resource_root)
        self.project_root = Path(project_root) if project_root else self.resource_root
        self._documents: dict[str, ResourceDocument] = {}
        self._process_files: dict[str, ProcessFile] = {}
        self._outside_root: dict[str, Path] = {}
        self._by_url: dict[str, list[ResourceDocument]] = {}

    # Building

    def add(self, document: ResourceDocument, process_file: ProcessFile | None = None) -> None:
        path = normalize_path(document.path)
        self._documents[path] = document
        if process_file is not None:
            self._process_files[path] = process_file
        url = document.logical_url
        if url:
            self._by_url.setdefault(strip_version_suffix(url), []).append(document)

    def add_outside_root(self, path: str, file_path: Path) -> None:
        self._outside_root[normalize_path(path)] = file_path

    # Path lookups

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, path: str) -> bool:
        return normalize_path(path) in self._documents

    def __iter__(self):
        return iter(self.documents())

    def get(self, path: str) -> ResourceDocument | None:
        return self._documents.get(normalize_path(path))

    def process_file(self, path: str) -> ProcessFile | None:
        return self._process_files.get(normalize_path(path))

    def paths(self) -> list[str]:
        return sorted(self._documents)

    def documents(self) -> list[ResourceDocument]:
        return [self._documents[path] for path in self.paths()]

    def outside_root_paths(self) -> list[str]:
        return sorted(self._outside_root)

    def find_by_path(self, reference: str) -> list[ResourceDocument]:
        """The exact path match, else every document (sorted) whose path ends with the reference."""
        reference = normalize_path(reference)
        if not reference:
            return []
        if reference in self._documents:
            return [self._documents[reference]]
        suffix = "/" + reference
        return [self._documents[path] for path in self.paths() if path.endswith(suffix)]

    def find_outside_root(self, reference: str) -> str | None:
        reference = normalize_path(reference)
        if not reference:
            return None
        suffix = "/" + reference
        for path in self.outside_root_paths():
            if path == reference or path.endswith(suffix):
                return path
        return None

    def paths_under(self, directory: str) -> set[str]:
        prefix = normalize_path(directory).rstrip("/") + "/"
        return {path for path in self._documents if path.startswith(prefix)}

    # Kind and url lookups

    def documents_of_kind(self, kind: ResourceKind) -> list[ResourceDocument]:
        return [doc for doc in self.documents() if doc.resource_kind == kind]

    def parse_failures(self) -> list[ResourceDocument]:
        return [doc for doc in self.documents() if not doc.parsed]

    def find_by_url(self, url: str | None, kind: ResourceKind | None = None) -> ResourceDocument | None:
        """First document (by path) whose canonical url matches ``url`` without version."""
        if not url:
            return None
        candidates = self._by_url.get(strip_version_suffix(url), [])
        candidates = sorted(
            (doc for doc in candidates if kind is None or doc.resource_kind == kind),
            key=lambda doc: doc.path,
        )
        return candidates[0] if candidates else None

    def activity_definitions_for_message(self, message_name: str) -> list[ResourceDocument]:
        """ActivityDefinitions declaring ``message_name`` in a ``message-name`` extension."""
        return [
            doc for doc in self.documents_of_kind(ResourceKind.ACTIVITY_DEFINITION)
            if declares_message_name(doc, message_name)
        ]

    def structure_definitions_for_message(self, message_name: str) -> list[ResourceDocument]:
        """StructureDefinitions fixing ``Task.input:message-name.value[x]`` to ``message_name``."""
        return [
            doc for doc in self.documents_of_kind(ResourceKind.STRUCTURE_DEFINITION)
            if fixed_value(doc, TASK_MESSAGE_NAME_ELEMENT, "fixedString") == message_name
        ]

    def structure_definition_for_profile(self, profile: str | None) -> ResourceDocument | None:
        return self.find_by_url(profile, ResourceKind.STRUCTURE_DEFINITION)

    def questionnaire_for_form_key(self, form_key: str | None) -> ResourceDocument | None:
        if not form_key:
            return None
        url = form_key[len("external:"):] if form_key.startswith("external:") else form_key
        return self.find_by_url(url, ResourceKind.QUESTIONNAIRE)


def declares_message_name(document: ResourceDocument, message_name: str) -> bool:
    for node in walk(document.fields):
        if node.get("url") == "message-name" and first(node, "valueString") == message_name:
            return True
    return False


def fixed_value(document: ResourceDocument, element_id: str, value_field: str) -> str | None:
    """Value of ``value_field`` on the differential (else snapshot) element ``element_id``."""
    for section in ("differential", "snapshot"):
        for element in children(document.fields, section, "element"):
            if isinstance(element, dict) and element.get("id") == element_id:
                value = first(element, value_field)
                if value is not None:
                    return value
    return None


def _is_excluded(relative: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in patterns)


def build_catalog(
    resource_root: Path,
    parser: DocumentParser | None = None,
    project_root: Path | None = None,
    exclude_patterns: list[str] | None = None,
) -> ResourceCatalog:
    """Walk the project once and index every BPMN and FHIR document.

    Raises:
        ResourceRootNotFoundError: If ``resource_root`` is not a directory
    """
    resource_root = Path(resource_root).resolve()
    if not resource_root.is_dir():
        raise ResourceRootNotFoundError(resource_root)

    project_root = Path(project_root).resolve() if project_root else resource_root
    if not project_root.is_dir():
        raise ResourceRootNotFoundError(project_root)
    parser = parser or DocumentParser()
    patterns = DEFAULT_EXCLUDE_PATTERNS + list(exclude_patterns or [])

    catalog = ResourceCatalog(resource_root, project_root)
    failures = 0
    for current, dirs, files in os.walk(project_root):
        current_path = Path(current)
        dirs[:] = sorted(
            d for d in dirs
            if not _is_excluded(relative_posix(current_path / d, project_root) + "/**", patterns)
        )
        for name in sorted(files):
            file_path = current_path / name
            relative = relative_posix(file_path, project_root)
            if _is_excluded(relative, patterns):
                continue

            document_type = parser.sniff(file_path)
            if document_type is None:
                continue

            if not file_path.is_relative_to(resource_root):
                catalog.add_outside_root(relative, file_path)
                continue

            if not _index_document(catalog, parser, document_type, file_path, resource_root):
                failures += 1

    logger.info(
        f"Catalog built: {len(catalog)} documents below {resource_root}, "
        f"{len(catalog.outside_root_paths())} outside, {failures} unparsable"
    )
    return catalog


def _index_document(catalog: ResourceCatalog, parser: DocumentParser, document_type: DocumentType,
                    file_path: Path, resource_root: Path) -> bool:
    path = relative_posix(file_path, resource_root)
    try:
        if document_type == DocumentType.BPMN:
            process_file = parser.parse_process_graph(file_path, resource_root)
            catalog.add(
                ResourceDocument(path=path, file=str(file_path), resource_kind=ResourceKind.PROCESS_MODEL,
                                 resource_type="bpmn"),
                process_file,
            )
        else:
            catalog.add(parser.parse_resource_document(file_path, resource_root))
        return True
    except DocumentParseError as e:
        logger.warning(f"Keeping unparsable document {path}: {e.reason}")
        kind = ResourceKind.PROCESS_MODEL if document_type == DocumentType.BPMN else ResourceKind.OTHER
        catalog.add(ResourceDocument(path=path, file=str(file_path), resource_kind=kind, parse_error=e.reason))
        return False
