"""CodeSystem rules."""

from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.resource import ResourceDocument, ResourceKind, first
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import (
    check_placeholder,
    check_required,
    check_status_unknown,
    read_access_codes,
    subject_of,
)
from dsflint.validation.framework import ResourceRule, RuleContext

REQUIRED_ELEMENTS = ("url", "name", "title", "publisher", "content", "caseSensitive")


class CodeSystemRule(ResourceRule):
    kind = ResourceKind.CODE_SYSTEM

    @property
    def name(self) -> str:
        return "code_system"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)

        if "ALL" in read_access_codes(document):
            sink.success(subject, "Read-access tag ALL is present")
        else:
            sink.error(DiagnosticCode.FHIR_CODE_SYSTEM_MISSING_READ_ACCESS_TAG, subject, "Read-access tag ALL is missing")

        for element in REQUIRED_ELEMENTS:
            check_required(document, sink, element, DiagnosticCode.FHIR_CODE_SYSTEM_MISSING_ELEMENT)

        check_status_unknown(document, sink, DiagnosticCode.FHIR_CODE_SYSTEM_INVALID_STATUS)
        check_placeholder(document, sink, "version", DiagnosticCode.FHIR_CODE_SYSTEM_VERSION_NO_PLACEHOLDER,
                          optional=True)
        check_placeholder(document, sink, "date", DiagnosticCode.FHIR_CODE_SYSTEM_DATE_NO_PLACEHOLDER,
                          severity=Severity.WARN, optional=True)
        self._check_concepts(document, subject, sink)

    def _check_concepts(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        concepts = [concept for concept in document.elements("concept") if isinstance(concept, dict)]
        if not concepts:
            sink.error(DiagnosticCode.FHIR_CODE_SYSTEM_MISSING_CONCEPT, subject, "CodeSystem declares no concept")
            return

        seen: set[str] = set()
        duplicates = 0
        for index, concept in enumerate(concepts, start=1):
            code = first(concept, "code")
            if is_blank(code):
                sink.error(DiagnosticCode.FHIR_CODE_SYSTEM_CONCEPT_MISSING_CODE, subject, f"Concept #{index} has no code")
                continue
            if is_blank(first(concept, "display")):
                sink.error(DiagnosticCode.FHIR_CODE_SYSTEM_CONCEPT_MISSING_DISPLAY, subject,
                           f"Concept '{code}' has no display")
            if code in seen:
                sink.error(DiagnosticCode.FHIR_CODE_SYSTEM_DUPLICATE_CODE, subject, f"Concept code '{code}' is duplicated")
                duplicates += 1
            seen.add(code)

        if not duplicates:
            sink.success(subject, f"All {len(seen)} concept codes are unique")
