"""End-to-end tests: discovery, engine and reporting over a plugin project."""

import json

import pytest
from typer.testing import CliRunner

from conftest import PING_PROCESS_BODY, bpmn_document
from dsflint.cli import app
from dsflint.config import LinterConfig
from dsflint.diagnostics import DiagnosticCode, Severity, SubjectKind, ValidationStatus
from dsflint.discovery import UnitDiscovery
from dsflint.engine import validate_units
from dsflint.errors import NoUnitsDiscoveredError, ResourceRootNotFoundError
from dsflint.introspection import ClassEntry, ClassIndexIntrospector
from dsflint.models.unit import Unit

CLASS_INDEX = {
    "classes": {
        "dev.example.SendPing": {"implements": ["dev.dsf.bpe.v2.activity.MessageSendTask"]},
    }
}


@pytest.fixture
def introspector():
    return ClassIndexIntrospector({
        name: ClassEntry(**relations) for name, relations in CLASS_INDEX["classes"].items()
    })


def run(project, **kwargs):
    units = UnitDiscovery(project).discover()
    return validate_units(units, project / "src" / "main" / "resources", project_root=project, **kwargs)


class TestValidateUnits:
    """Test whole runs of the validation engine."""

    @pytest.mark.integration
    def test_ping_project_is_clean(self, ping_project, introspector):
        report = run(ping_project, introspector=introspector)

        assert report.status == ValidationStatus.PASS
        assert report.count(Severity.ERROR) == 0
        assert report.count(Severity.WARN) == 0
        assert DiagnosticCode.CLASS_CHECK_SKIPPED not in {d.code for d in report.diagnostics()}
        assert report.exit_code() == 0

    @pytest.mark.integration
    def test_without_class_index_checks_are_skipped(self, ping_project):
        report = run(ping_project)

        skipped = [d for d in report.diagnostics() if d.code == DiagnosticCode.CLASS_CHECK_SKIPPED]
        assert skipped
        assert all(d.severity == Severity.INFO for d in skipped)
        assert report.status == ValidationStatus.PASS

    def test_no_units(self, tmp_path):
        with pytest.raises(NoUnitsDiscoveredError):
            validate_units([], tmp_path)

    def test_missing_resource_root(self, ping_project):
        units = UnitDiscovery(ping_project).discover()
        with pytest.raises(ResourceRootNotFoundError):
            validate_units(units, ping_project / "does-not-exist")

    def test_stats_cover_every_kind(self, ping_project):
        report = run(ping_project)

        assert set(report.stats) == {"bpmn", "fhir", "plugin"}
        assert report.stats["plugin"]["success"] >= 1
        assert sum(sum(counts.values()) for counts in report.stats.values()) == len(report.diagnostics())

    def test_api_version_override(self, ping_project, introspector):
        """Test that a configured API version overrides the manifest."""
        config = LinterConfig(validation={"apiVersion": "v1"})

        report = run(ping_project, introspector=introspector, config=config)

        found = {d.code: d.severity for d in report.diagnostics()}
        assert found[DiagnosticCode.BPMN_MESSAGE_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE] == Severity.ERROR
        assert (found[DiagnosticCode.BPMN_MESSAGE_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND]
                == Severity.WARN)
        assert report.status == ValidationStatus.FAIL

    def test_report_shape(self, ping_project):
        data = run(ping_project).to_dict(include_success=False)

        assert data["status"] == "pass"
        assert list(data["units"]) == ["dsf-plugin-ping"]
        assert all(d["severity"] != "success" for d in data["units"]["dsf-plugin-ping"]["diagnostics"])
        assert data["collaboratorErrors"] == []
        assert "countsByKindAndSeverity" in data["stats"]

    def test_unparsable_resource_is_collected(self, ping_project, write_file):
        resources = ping_project / "src" / "main" / "resources"
        write_file(resources, "fhir/ActivityDefinition/broken.xml", "<ActivityDefinition")

        report = run(ping_project)

        assert report.collaborator_errors.has_errors()
        assert report.leftovers.all_leftovers == ["fhir/ActivityDefinition/broken.xml"]


class TestCommandLineRun:
    """Test the CLI wiring of class indexes declared in the manifest."""

    @pytest.mark.integration
    def test_manifest_class_index(self, ping_project):
        manifest_file = ping_project / "dsf-plugin.json"
        manifest = json.loads(manifest_file.read_text(encoding="utf-8"))
        manifest["classIndex"] = "target/class-index.json"
        manifest_file.write_text(json.dumps(manifest), encoding="utf-8")
        (ping_project / "target").mkdir()
        (ping_project / "target" / "class-index.json").write_text(json.dumps(CLASS_INDEX), encoding="utf-8")

        result = CliRunner().invoke(app, ["validate", str(ping_project), "--format", "json"])

        assert result.exit_code == 0
        assert "CLASS_CHECK_SKIPPED" not in result.stdout

    @pytest.mark.integration
    def test_missing_process_class_fails(self, ping_project, write_file):
        body = PING_PROCESS_BODY.replace("dev.example.SendPing", "dev.example.Missing")
        write_file(ping_project / "src" / "main" / "resources", "bpe/ping.bpmn", bpmn_document(body))
        (ping_project / "classes.json").write_text(json.dumps(CLASS_INDEX), encoding="utf-8")
        (ping_project / ".dsflint.json").write_text(
            json.dumps({"introspection": {"classIndex": "classes.json"}}), encoding="utf-8")

        result = CliRunner().invoke(app, ["validate", str(ping_project), "--format", "json"])

        assert result.exit_code == 1
        assert "BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND" in result.stdout


class TestHandBuiltUnits:
    """Test units constructed directly rather than discovered from a manifest."""

    def test_declared_references_drive_validation(self, ping_project, introspector):
        unit = Unit(
            id="dsf-plugin-ping",
            declared_references={"./bpe\\ping.bpmn", "fhir/ActivityDefinition/ping.xml",
                                 "fhir/StructureDefinition/task-start-ping.xml"},
        )
        assert unit.process_references == ["bpe/ping.bpmn"]
        assert unit.resource_references == ["fhir/ActivityDefinition/ping.xml",
                                            "fhir/StructureDefinition/task-start-ping.xml"]

        report = validate_units([unit], ping_project / "src" / "main" / "resources",
                                project_root=ping_project, introspector=introspector)

        diagnostics = report.diagnostics()
        assert DiagnosticCode.PLUGIN_DEFINITION_NO_PROCESS_MODEL_DEFINED not in {d.code for d in diagnostics}
        assert any(d.kind == SubjectKind.BPMN for d in diagnostics)
        assert any(d.kind == SubjectKind.FHIR for d in diagnostics)
        assert report.status == ValidationStatus.PASS
