"""Unit tests for the resource catalog."""

import pytest

from conftest import PING_PROCESS_URL, PING_PROFILE, fhir_document
from dsflint.errors import ResourceRootNotFoundError
from dsflint.models.resource import ResourceKind
from dsflint.resources.catalog import build_catalog, declares_message_name, fixed_value


class TestBuildCatalog:
    """Test the single walk over the project tree."""

    def test_indexes_documents_below_root(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources", project_root=ping_project)

        assert catalog.paths() == [
            "bpe/ping.bpmn",
            "fhir/ActivityDefinition/ping.xml",
            "fhir/StructureDefinition/task-start-ping.xml",
        ]
        assert catalog.get("bpe/ping.bpmn").resource_kind == ResourceKind.PROCESS_MODEL
        assert catalog.process_file("bpe/ping.bpmn").processes[0].process_id == "dsfdev_ping"
        assert "fhir\\ActivityDefinition\\ping.xml" in catalog

    def test_files_outside_root_are_remembered(self, ping_project, write_file):
        write_file(ping_project, "docs/old/legacy.bpmn", "<bpmn:definitions/>")
        catalog = build_catalog(ping_project / "src" / "main" / "resources", project_root=ping_project)

        assert catalog.outside_root_paths() == ["docs/old/legacy.bpmn"]
        assert "docs/old/legacy.bpmn" not in catalog

    def test_unparsable_documents_are_kept(self, tmp_path, write_file):
        write_file(tmp_path, "bpe/broken.bpmn", "<bpmn:definitions")
        write_file(tmp_path, "fhir/Task/broken.xml", '<Task xmlns="http://hl7.org/fhir">')
        catalog = build_catalog(tmp_path)

        failures = catalog.parse_failures()
        assert [doc.path for doc in failures] == ["bpe/broken.bpmn", "fhir/Task/broken.xml"]
        assert catalog.process_file("bpe/broken.bpmn") is None

    def test_non_resource_files_are_ignored(self, tmp_path, write_file):
        write_file(tmp_path, "config/app.json", '{"name": "x"}')
        write_file(tmp_path, "pom.xml", "<project/>")
        write_file(tmp_path, "README.md", "# readme")
        assert len(build_catalog(tmp_path)) == 0

    def test_excluded_directories_are_pruned(self, tmp_path, write_file):
        write_file(tmp_path, "target/classes/bpe/ping.bpmn", "<x/>")
        write_file(tmp_path, "generated/fhir/Task/t.xml", fhir_document("Task", ""))
        catalog = build_catalog(tmp_path, exclude_patterns=["generated/**"])
        assert len(catalog) == 0

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ResourceRootNotFoundError):
            build_catalog(tmp_path / "missing")


class TestLookups:
    """Test path, url and message lookups."""

    def test_find_by_path_suffix(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources")
        assert [d.path for d in catalog.find_by_path("ping.bpmn")] == ["bpe/ping.bpmn"]
        assert [d.path for d in catalog.find_by_path("ActivityDefinition/ping.xml")] == [
            "fhir/ActivityDefinition/ping.xml"
        ]
        assert catalog.find_by_path("other.bpmn") == []

    def test_find_by_path_returns_every_suffix_match(self, tmp_path, write_file):
        write_file(tmp_path, "bpe/ping/process.bpmn", "<x/>")
        write_file(tmp_path, "bpe/pong/process.bpmn", "<x/>")
        catalog = build_catalog(tmp_path)

        assert [d.path for d in catalog.find_by_path("process.bpmn")] == [
            "bpe/ping/process.bpmn",
            "bpe/pong/process.bpmn",
        ]
        assert [d.path for d in catalog.find_by_path("bpe/pong/process.bpmn")] == ["bpe/pong/process.bpmn"]

    def test_find_by_url_ignores_version(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources")
        document = catalog.find_by_url(f"{PING_PROFILE}|#{{version}}")
        assert document.resource_kind == ResourceKind.STRUCTURE_DEFINITION
        assert catalog.find_by_url(PING_PROCESS_URL, ResourceKind.STRUCTURE_DEFINITION) is None

    def test_message_lookups(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources")

        [activity_definition] = catalog.activity_definitions_for_message("startPing")
        [structure_definition] = catalog.structure_definitions_for_message("startPing")

        assert declares_message_name(activity_definition, "startPing")
        assert not declares_message_name(activity_definition, "startPong")
        assert fixed_value(structure_definition, "Task.input:message-name.value[x]", "fixedString") == "startPing"
        assert catalog.activity_definitions_for_message("pong") == []

    def test_paths_under(self, ping_project):
        catalog = build_catalog(ping_project / "src" / "main" / "resources")
        assert catalog.paths_under("bpe") == {"bpe/ping.bpmn"}
        assert len(catalog.paths_under("fhir/")) == 2
