"""Unit tests for the plugin definition reference checks."""

from conftest import bpmn_document
from dsflint.diagnostics import DiagnosticCode, Severity, SubjectKind
from dsflint.models.unit import Unit
from dsflint.resources.catalog import build_catalog
from dsflint.resources.resolver import ReferenceResolver, ResolutionStatus
from dsflint.validation.references import check_unit_references, is_bpmn_reference


def problems(diagnostics) -> list[tuple[Severity, DiagnosticCode]]:
    return [(d.severity, d.code) for d in diagnostics if d.severity != Severity.SUCCESS]


class TestUnitReferences:
    """Test declared reference resolution per unit."""

    def test_ping_unit_resolves_everything(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources", project_root=ping_project)
        unit = Unit(
            id="dsf-plugin-ping",
            declared_references={
                "bpe/ping.bpmn",
                "fhir/ActivityDefinition/ping.xml",
                "fhir/StructureDefinition/task-start-ping.xml",
            },
        )
        diagnostics, results = check_unit_references(unit, ReferenceResolver(catalog))

        assert problems(diagnostics) == []
        assert [r.status for r in results] == [ResolutionStatus.IN_ROOT] * 3
        assert {d.kind for d in diagnostics} == {SubjectKind.PLUGIN}

    def test_empty_declarations(self, tmp_path):
        diagnostics, results = check_unit_references(Unit(id="empty"), ReferenceResolver(build_catalog(tmp_path)))

        assert problems(diagnostics) == [
            (Severity.ERROR, DiagnosticCode.PLUGIN_DEFINITION_NO_PROCESS_MODEL_DEFINED),
            (Severity.WARN, DiagnosticCode.PLUGIN_DEFINITION_NO_FHIR_RESOURCES_DEFINED),
        ]
        assert results == []

    def test_missing_outside_and_unparsable(self, ping_project, write_file):
        write_file(ping_project, "legacy/bpe/pong.bpmn", "<x/>")
        write_file(ping_project / "src" / "main" / "resources", "fhir/Task/broken.xml", "<Task")
        catalog = build_catalog(ping_project / "src" / "main" / "resources", project_root=ping_project)
        unit = Unit(
            id="dsf-plugin-ping",
            declared_references={"bpe/pong.bpmn", "./bpe/missing.bpmn", "fhir/Task/broken.xml",
                                 "fhir/ValueSet/missing.xml", "fhir\\Task\\broken.xml"},
        )
        diagnostics, results = check_unit_references(unit, ReferenceResolver(catalog))

        assert problems(diagnostics) == [
            (Severity.ERROR, DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_NOT_FOUND),
            (Severity.ERROR, DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_OUTSIDE_ROOT),
            (Severity.ERROR, DiagnosticCode.PLUGIN_DEFINITION_UNPARSABLE_FHIR_RESOURCE),
            (Severity.ERROR, DiagnosticCode.PLUGIN_DEFINITION_FHIR_RESOURCE_NOT_FOUND),
        ]
        # references are normalized, so the two spellings of broken.xml resolve once
        assert len(results) == 4

    def test_bpmn_reference_detection(self):
        assert is_bpmn_reference("bpe/ping.bpmn")
        assert is_bpmn_reference(" BPE/PING.BPMN ")
        assert not is_bpmn_reference("fhir/Task/ping.xml")

    def test_ambiguous_process_model(self, tmp_path, write_file):
        for unit_id in ("ping", "pong"):
            write_file(tmp_path, f"bpe/{unit_id}/process.bpmn", bpmn_document("", process_id=f"dsfdev_{unit_id}"))
        catalog = build_catalog(tmp_path)
        unit = Unit(id="shared", declared_references={"process.bpmn"})

        diagnostics, results = check_unit_references(unit, ReferenceResolver(catalog, unit_id=unit.id))

        errors = [d for d in diagnostics if d.severity == Severity.ERROR]
        assert [d.code for d in errors] == [DiagnosticCode.PLUGIN_DEFINITION_BPMN_FILE_AMBIGUOUS]
        assert "bpe/ping/process.bpmn, bpe/pong/process.bpmn" in errors[0].message
        assert results[0].status == ResolutionStatus.AMBIGUOUS
