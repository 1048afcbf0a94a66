"""StructureDefinition rules, including slice cardinality."""

from dsflint.constants import CS_READ_ACCESS_TAG
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import (
    check_placeholder,
    check_required,
    check_status_unknown,
    differential_elements,
    read_access_codes,
    slice_cardinalities,
    subject_of,
)
from dsflint.validation.framework import ResourceRule, RuleContext


class StructureDefinitionRule(ResourceRule):
    kind = ResourceKind.STRUCTURE_DEFINITION

    @property
    def name(self) -> str:
        return "structure_definition"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)
        self._check_read_access(document, subject, context, sink)
        check_required(document, sink, "url", DiagnosticCode.FHIR_STRUCTURE_DEFINITION_URL_MISSING)
        check_status_unknown(document, sink, DiagnosticCode.FHIR_STRUCTURE_DEFINITION_INVALID_STATUS)
        check_placeholder(document, sink, "version", DiagnosticCode.FHIR_STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER)
        check_placeholder(document, sink, "date", DiagnosticCode.FHIR_STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER)

        if "snapshot" in document.fields:
            sink.warn(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_SNAPSHOT_PRESENT, subject,
                      "Snapshot should not be shipped; it is generated by the server")
        else:
            sink.success(subject, "No snapshot present")

        if "differential" not in document.fields:
            sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING, subject,
                       "Differential is missing")
            return
        sink.success(subject, "Differential is present")

        self._check_element_ids(document, subject, sink)
        self._check_slices(document, subject, sink)

    def _check_read_access(self, document: ResourceDocument, subject: str, context: RuleContext,
                           sink: DiagnosticSink) -> None:
        codes = read_access_codes(document)
        if not codes:
            sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_MISSING_READ_ACCESS_TAG, subject,
                       "No read-access meta.tag declared")
            return
        unknown = [code for code in codes if context.codes.is_unknown(CS_READ_ACCESS_TAG, code)]
        if unknown:
            sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_MISSING_READ_ACCESS_TAG, subject,
                       f"Unknown read-access tag code(s): {', '.join(unknown)}")
        else:
            sink.success(subject, f"Read-access tag {', '.join(codes)} is valid")

    def _check_element_ids(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        seen: set[str] = set()
        problems = 0
        for index, element in enumerate(differential_elements(document)):
            element_id = element.get("id")
            if is_blank(element_id):
                sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_MISSING, subject,
                           f"Differential element #{index + 1} has no id")
                problems += 1
            elif element_id in seen:
                sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE, subject,
                           f"Differential element id '{element_id}' is declared more than once")
                problems += 1
            else:
                seen.add(element_id)
        if not problems:
            sink.success(subject, f"All {len(seen)} differential element ids are present and unique")

    def _check_slices(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        for base_id, (base, slices) in sorted(slice_cardinalities(document).items()):
            slice_min_sum = sum(cardinality.min for cardinality in slices.values())
            problems = 0

            if base is not None and base.max is not None:
                for slice_name, cardinality in sorted(slices.items()):
                    if cardinality.max is None or cardinality.max > base.max:
                        sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH, subject,
                                   f"Slice {base_id}:{slice_name} max exceeds the base max {base.max}")
                        problems += 1
                if slice_min_sum > base.max:
                    sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX, subject,
                               f"Sum of slice minimums of {base_id} ({slice_min_sum}) exceeds its max {base.max}")
                    problems += 1

            if base is not None:
                if slice_min_sum < base.min:
                    sink.error(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_BELOW_BASE_MIN, subject,
                               f"Sum of slice minimums of {base_id} ({slice_min_sum}) is below its min {base.min}")
                    problems += 1
                elif slice_min_sum > base.min:
                    sink.info(DiagnosticCode.FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN, subject,
                              f"Sum of slice minimums of {base_id} ({slice_min_sum}) is above its min {base.min}")
                    problems += 1

            if not problems:
                sink.success(subject, f"Slice cardinalities of {base_id} are consistent")
