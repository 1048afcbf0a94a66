"""Document parser facade with content sniffing."""

import logging
from enum import Enum
from pathlib import Path

from dsflint.constants import FHIR_NAMESPACE
from dsflint.models.process import ProcessFile
from dsflint.models.resource import ResourceDocument
from dsflint.parser.bpmn import BPMN_NAMESPACE, BpmnParser
from dsflint.parser.fhir import FhirParser

logger = logging.getLogger(__name__)

SNIFF_BYTES = 4096


class DocumentType(str, Enum):
    BPMN = "bpmn"
    FHIR = "fhir"


class DocumentParser:
    """Classifies files by extension and content, and dispatches to the matching parser."""

    def __init__(self, bpmn_parser: BpmnParser | None = None, fhir_parser: FhirParser | None = None):
        self.bpmn_parser = bpmn_parser or BpmnParser()
        self.fhir_parser = fhir_parser or FhirParser()

    def sniff(self, file_path: Path) -> DocumentType | None:
        """Document type of ``file_path``, or ``None`` for files that are neither."""
        suffix = file_path.suffix.lower()
        if suffix == ".bpmn":
            return DocumentType.BPMN
        if suffix not in (".xml", ".json"):
            return None

        try:
            with open(file_path, "rb") as f:
                head = f.read(SNIFF_BYTES).decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Cannot read {file_path} for classification: {e}")
            return None

        if suffix == ".json":
            return DocumentType.FHIR if '"resourceType"' in head else None
        if BPMN_NAMESPACE in head:
            return DocumentType.BPMN
        if FHIR_NAMESPACE in head:
            return DocumentType.FHIR
        return None

    def parse_process_graph(self, file_path: Path, root: Path | None = None) -> ProcessFile:
        return self.bpmn_parser.parse_process_graph(file_path, root)

    def parse_resource_document(self, file_path: Path, root: Path | None = None) -> ResourceDocument:
        return self.fhir_parser.parse_resource_document(file_path, root)
