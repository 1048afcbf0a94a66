"""Unit tests for the FHIR XML / JSON resource parser."""

import json

import pytest

from conftest import fhir_document
from dsflint.errors import DocumentParseError
from dsflint.models.resource import ResourceKind
from dsflint.parser.fhir import FhirParser


class TestXmlResources:
    """Test normalization of FHIR XML."""

    def test_primitives_attributes_and_repeats(self, tmp_path, write_file):
        path = write_file(tmp_path, "fhir/Questionnaire/form.xml", fhir_document("Questionnaire", """
  <url value="http://dsf.dev/fhir/Questionnaire/form"/>
  <status value="unknown"/>
  <item><linkId value="user-task-id"/><type value="string"/></item>
  <item><linkId value="business-key"/><type value="string"/></item>
  <extension url="http://x/ext"><valueString value="y"/></extension>
"""))
        document = FhirParser().parse_resource_document(path, tmp_path)

        assert document.path == "fhir/Questionnaire/form.xml"
        assert document.resource_kind == ResourceKind.QUESTIONNAIRE
        assert document.logical_url == "http://dsf.dev/fhir/Questionnaire/form"
        assert document.value("status") == "unknown"
        assert document.values("item", "linkId") == ["user-task-id", "business-key"]
        assert document.fields["extension"] == {"url": "http://x/ext", "valueString": "y"}

    def test_narrative_is_dropped(self):
        content = fhir_document("CodeSystem", """
  <text><div xmlns="http://www.w3.org/1999/xhtml"><p>hi</p></div></text>
  <url value="http://x/CodeSystem/a"/>
""")
        document = FhirParser().parse_content(content, "fhir/CodeSystem/a.xml")
        assert "div" not in str(document.fields.get("text", ""))
        assert document.logical_url == "http://x/CodeSystem/a"

    def test_unknown_resource_type_is_other(self):
        document = FhirParser().parse_content(fhir_document("Library", '<url value="http://x/Library/a"/>'), "a.xml")
        assert document.resource_kind == ResourceKind.OTHER
        assert document.resource_type == "Library"

    def test_invalid_xml_raises(self):
        with pytest.raises(DocumentParseError):
            FhirParser().parse_content("<ActivityDefinition xmlns='http://hl7.org/fhir'>", "broken.xml")

    def test_non_fhir_root_raises(self):
        with pytest.raises(DocumentParseError):
            FhirParser().parse_content("<project><name>x</name></project>", "pom.xml")


class TestJsonResources:
    """Test that FHIR JSON normalizes to the same shape as XML."""

    def test_json_matches_xml_shape(self):
        parser = FhirParser()
        from_json = parser.parse_content(json.dumps({
            "resourceType": "Task",
            "status": "draft",
            "_status": {"extension": []},
            "input": [{"type": {"coding": [{"system": "s", "code": "c"}]}, "valueBoolean": True}],
        }), "fhir/Task/task.json")
        from_xml = parser.parse_content(fhir_document("Task", """
  <status value="draft"/>
  <input>
    <type><coding><system value="s"/><code value="c"/></coding></type>
    <valueBoolean value="true"/>
  </input>
"""), "fhir/Task/task.xml")

        assert from_json.resource_kind == ResourceKind.TASK
        assert from_json.value("status") == from_xml.value("status") == "draft"
        assert from_json.value("input", "valueBoolean") == from_xml.value("input", "valueBoolean") == "true"
        assert from_json.value("input", "type", "coding", "code") == "c"
        assert "_status" not in from_json.fields

    def test_json_without_resource_type_raises(self):
        with pytest.raises(DocumentParseError):
            FhirParser().parse_content('{"status": "draft"}', "x.json")

    def test_empty_document_raises(self):
        with pytest.raises(DocumentParseError):
            FhirParser().parse_content(b"   ", "empty.json")
