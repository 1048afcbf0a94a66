"""Unit tests for field injection checks on message sending elements."""

import pytest

from conftest import PING_PROCESS_URL, PING_PROFILE
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity, SubjectKind
from dsflint.models.process import FieldInjection, NodeKind, ProcessNode
from dsflint.validation.bpmn.field_injection import (
    check_field_injections,
    message_name_in_profile,
    message_name_parts,
)


def send_task(*fields: FieldInjection) -> ProcessNode:
    return ProcessNode(id="sendTask1", kind=NodeKind.SEND_TASK, name="send", field_injections=fields)


def run(node: ProcessNode, context) -> list:
    sink = DiagnosticSink(SubjectKind.BPMN, file="bpe/ping.bpmn", unit_id=context.unit_id)
    check_field_injections(node, context, sink)
    return sink.diagnostics


def problems(diagnostics, severity: Severity) -> list[DiagnosticCode]:
    return [d.code for d in diagnostics if d.severity == severity]


@pytest.fixture
def ping_context(ping_project, make_context):
    return make_context(ping_project / "src" / "main" / "resources")


class TestMessageNameHeuristic:
    """Test the camel case message name to profile matching."""

    def test_parts(self):
        assert message_name_parts("startPingPong") == ["start", "ping", "pong"]
        assert message_name_parts("ping") == ["ping"]

    def test_parts_must_appear_in_order(self):
        assert message_name_in_profile("startPing", PING_PROFILE)
        assert not message_name_in_profile("pingStart", PING_PROFILE)
        assert not message_name_in_profile("startPong", PING_PROFILE)


class TestFieldInjection:
    """Test field injections against the ping profile and ActivityDefinition."""

    def test_matching_message_name(self, ping_context):
        node = send_task(
            FieldInjection("profile", f"{PING_PROFILE}|#{{version}}"),
            FieldInjection("messageName", "startPing"),
        )
        diagnostics = run(node, ping_context)

        assert problems(diagnostics, Severity.ERROR) == []
        assert problems(diagnostics, Severity.WARN) == []

    def test_message_name_not_in_profile(self, ping_context):
        node = send_task(
            FieldInjection("profile", f"{PING_PROFILE}|#{{version}}"),
            FieldInjection("messageName", "startPong"),
        )
        diagnostics = run(node, ping_context)
        assert problems(diagnostics, Severity.ERROR) == [DiagnosticCode.BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_PROFILE]

    def test_full_injection_cross_checks_activity_definition(self, ping_context):
        node = send_task(
            FieldInjection("profile", f"{PING_PROFILE}|#{{version}}"),
            FieldInjection("messageName", "startPing"),
            FieldInjection("instantiatesCanonical", f"{PING_PROCESS_URL}|#{{version}}"),
        )
        diagnostics = run(node, ping_context)

        assert problems(diagnostics, Severity.ERROR) == []
        assert any("ActivityDefinition declares message 'startPing'" in d.message for d in diagnostics)

    def test_unknown_profile_warns(self, tmp_path, make_context):
        node = send_task(FieldInjection("profile", "http://example.org/fhir/StructureDefinition/other|#{version}"))
        diagnostics = run(node, make_context(tmp_path))
        assert problems(diagnostics, Severity.WARN) == [DiagnosticCode.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE]

    def test_literal_problems(self, tmp_path, make_context):
        node = send_task(
            FieldInjection("profile", "http://example.org/fhir/StructureDefinition/x"),
            FieldInjection("messageName", "${message}", is_expression=True),
            FieldInjection("instantiatesCanonical", ""),
            FieldInjection("businessKey", "abc"),
        )
        diagnostics = run(node, make_context(tmp_path))

        assert problems(diagnostics, Severity.ERROR) == [
            DiagnosticCode.BPMN_FIELD_INJECTION_NOT_STRING_LITERAL,
            DiagnosticCode.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY,
        ]
        assert problems(diagnostics, Severity.WARN) == [
            DiagnosticCode.BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER,
            DiagnosticCode.BPMN_UNKNOWN_FIELD_INJECTION,
            DiagnosticCode.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE,
        ]
