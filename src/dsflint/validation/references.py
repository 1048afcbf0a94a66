"""Plugin definition checks: declared references and their resolution."""

import logging

from dsflint.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, SubjectKind
from dsflint.models.unit import Unit
from dsflint.resources.resolver import ReferenceResolver, ResolutionResult, ResolutionStatus
from dsflint.utils.paths import is_bpmn_reference

logger = logging.getLogger(__name__)

_CODES = {
    # (is_bpmn, status) -> code
    (True, ResolutionStatus.MISSING): DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_NOT_FOUND,
    (False, ResolutionStatus.MISSING): DiagnosticCode.PLUGIN_DEFINITION_FHIR_RESOURCE_NOT_FOUND,
    (True, ResolutionStatus.OUTSIDE_ROOT): DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_OUTSIDE_ROOT,
    (False, ResolutionStatus.OUTSIDE_ROOT): DiagnosticCode.PLUGIN_DEFINITION_FHIR_FILE_OUTSIDE_ROOT,
    (True, ResolutionStatus.FROM_DEPENDENCY): DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_FROM_DEPENDENCY,
    (False, ResolutionStatus.FROM_DEPENDENCY): DiagnosticCode.PLUGIN_DEFINITION_FHIR_FILE_FROM_DEPENDENCY,
    (True, ResolutionStatus.AMBIGUOUS): DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_AMBIGUOUS,
    (False, ResolutionStatus.AMBIGUOUS): DiagnosticCode.PLUGIN_DEFINITION_FHIR_RESOURCE_AMBIGUOUS,
}


def check_unit_references(unit: Unit, resolver: ReferenceResolver) -> tuple[list[Diagnostic], list[ResolutionResult]]:
    """Resolve every declared reference of ``unit``.

    Returns the diagnostics and the resolution results, process models first,
    each group in sorted order.
    """
    sink = DiagnosticSink(SubjectKind.PLUGIN, file=None, unit_id=unit.id)

    if unit.process_references:
        sink.success(unit.id, f"{len(unit.process_references)} process models declared")
    else:
        sink.error(DiagnosticCode.PLUGIN_DEFINITION_NO_PROCESS_MODEL_DEFINED, unit.id,
                   "Plugin declares no process model")
    if unit.resource_references:
        sink.success(unit.id, f"{len(unit.resource_references)} FHIR resources declared")
    else:
        sink.warn(DiagnosticCode.PLUGIN_DEFINITION_NO_FHIR_RESOURCES_DEFINED, unit.id,
                  "Plugin declares no FHIR resource")

    results = []
    for reference in [*unit.process_references, *unit.resource_references]:
        result = resolver.resolve(reference)
        results.append(result)
        _report(result, sink)

    logger.debug(f"Resolved {len(results)} references of unit {unit.id}")
    return sink.diagnostics, results


def _report(result: ResolutionResult, sink: DiagnosticSink) -> None:
    reference = result.reference
    bpmn = is_bpmn_reference(reference) or (
        result.document is not None and result.document.resource_type == "bpmn"
    )
    label = "BPMN file" if bpmn else "FHIR resource"

    if result.status == ResolutionStatus.IN_ROOT:
        if result.document is not None and not result.document.parsed:
            code = (DiagnosticCode.PLUGIN_DEFINITION_UNPARSABLE_BPMN_RESOURCE if bpmn
                    else DiagnosticCode.PLUGIN_DEFINITION_UNPARSABLE_FHIR_RESOURCE)
            sink.error(code, reference, f"{label} {result.path} cannot be parsed: {result.document.parse_error}")
        else:
            sink.success(reference, f"{label} found at {result.path}")
    elif result.status == ResolutionStatus.FROM_DEPENDENCY:
        sink.info(_CODES[(bpmn, result.status)], reference,
                  f"{label} is provided by dependency {result.dependency or 'artifact'} ({result.path})")
    elif result.status == ResolutionStatus.OUTSIDE_ROOT:
        sink.error(_CODES[(bpmn, result.status)], reference,
                   f"{label} exists at {result.path} but outside the resource root")
    elif result.status == ResolutionStatus.AMBIGUOUS:
        sink.error(_CODES[(bpmn, result.status)], reference,
                   f"{label} matches several files: {', '.join(result.candidates)}")
    else:
        sink.error(_CODES[(bpmn, result.status)], reference, f"{label} not found")
