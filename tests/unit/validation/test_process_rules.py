"""Unit tests for the BPMN process graph rules."""

import pytest

from conftest import PING_PROCESS_BODY, bpmn_document
from dsflint.constants import ApiVersion
from dsflint.diagnostics import DiagnosticCode, ErrorCollector, Severity
from dsflint.introspection import ClassEntry, ClassIndexIntrospector, TypeIntrospector
from dsflint.models.process import NodeKind, ProcessFile, ProcessGraph, ProcessNode
from dsflint.parser.bpmn import BpmnParser
from dsflint.validation.bpmn import ProcessGraphRuleEngine


def parse(body: str, declarations: str = "", **kwargs) -> ProcessGraph:
    content = bpmn_document(body, declarations, **kwargs)
    return BpmnParser().parse_content(content, "bpe/test.bpmn").processes[0]


def codes(diagnostics, severity: Severity | None = None) -> list[DiagnosticCode]:
    return [d.code for d in diagnostics if severity is None or d.severity == severity]


CLASS_INDEX = ClassIndexIntrospector({
    "dev.example.SendPing": ClassEntry(implements=["dev.dsf.bpe.v2.activity.MessageSendTask"]),
    "dev.example.Service": ClassEntry(implements=["dev.dsf.bpe.v2.activity.ServiceTask"]),
    "dev.example.LegacyService": ClassEntry(extends=["dev.dsf.bpe.v1.activity.AbstractServiceDelegate"]),
    "dev.example.PlainDelegate": ClassEntry(implements=["org.camunda.bpm.engine.delegate.JavaDelegate"]),
    "dev.example.NotADelegate": ClassEntry(),
    "dev.example.Listener": ClassEntry(extends=["dev.dsf.bpe.v2.activity.DefaultUserTaskListener"]),
})


class FailingIntrospector(TypeIntrospector):
    def class_exists(self, name: str) -> bool:
        raise OSError("class index unavailable")

    def implements(self, name: str, interface_name: str) -> bool:
        return False

    def is_subclass_of(self, name: str, super_name: str) -> bool:
        return False


class TestProcessLevel:
    """Test file and process level checks."""

    def test_process_attributes(self, tmp_path, make_context):
        graph = parse("", process_id="ping", executable="false", history_time_to_live=None)
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))

        assert DiagnosticCode.BPMN_PROCESS_ID_PATTERN_MISMATCH in codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_PROCESS_NOT_EXECUTABLE in codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_PROCESS_HISTORY_TIME_TO_LIVE_MISSING in codes(diagnostics, Severity.WARN)

    def test_file_without_process(self, tmp_path, make_context):
        diagnostics = ProcessGraphRuleEngine().evaluate_file(ProcessFile("bpe/empty.bpmn"), make_context(tmp_path))
        assert codes(diagnostics) == [DiagnosticCode.BPMN_FILE_NO_PROCESS]

    def test_diagnostics_carry_process_and_file(self, tmp_path, make_context):
        graph = parse(PING_PROCESS_BODY)
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        assert {d.process_id for d in diagnostics} == {"dsfdev_ping"}
        assert {d.file for d in diagnostics} == {"bpe/test.bpmn"}


class TestNameRules:
    """A blank name yields the documented severity; a set name never does."""

    @pytest.mark.parametrize("name", ['', ' name="  "'])
    def test_blank_service_task_name_is_error(self, tmp_path, make_context, name):
        graph = parse(f'<bpmn:serviceTask id="task"{name} camunda:class="dev.example.Service"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))
        assert DiagnosticCode.BPMN_SERVICE_TASK_NAME_EMPTY in codes(diagnostics, Severity.ERROR)

    def test_named_service_task(self, tmp_path, make_context):
        graph = parse('<bpmn:serviceTask id="task" name="work" camunda:class="dev.example.Service"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))
        assert DiagnosticCode.BPMN_SERVICE_TASK_NAME_EMPTY not in codes(diagnostics)

    def test_blank_send_task_name_is_warning(self, tmp_path, make_context):
        graph = parse('<bpmn:sendTask id="send" camunda:class="dev.example.SendPing"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))
        assert DiagnosticCode.BPMN_SEND_TASK_NAME_EMPTY in codes(diagnostics, Severity.WARN)

    def test_end_event_name_depends_on_nesting(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:endEvent id="topEnd"/>
    <bpmn:subProcess id="sub" name="sub">
      <bpmn:endEvent id="subEnd"/>
    </bpmn:subProcess>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))

        by_subject = {(d.subject, d.code): d.severity for d in diagnostics}
        assert by_subject[("topEnd", DiagnosticCode.BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS)] == Severity.WARN
        assert by_subject[("subEnd", DiagnosticCode.BPMN_EVENT_NAME_EMPTY)] == Severity.INFO
        assert by_subject[("subEnd", DiagnosticCode.BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE)] \
            == Severity.WARN


class TestImplementationClasses:
    """Test class checks against a class index."""

    def test_v2_service_task(self, tmp_path, make_context):
        graph = parse('<bpmn:serviceTask id="task" name="work" camunda:class="dev.example.NotADelegate"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))
        assert DiagnosticCode.BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING in codes(diagnostics, Severity.ERROR)

    def test_v1_service_task_extending_abstract_delegate(self, tmp_path, make_context):
        graph = parse('<bpmn:serviceTask id="task" name="work" camunda:class="dev.example.LegacyService"/>')
        context = make_context(tmp_path, CLASS_INDEX, api_version=ApiVersion.V1)
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, context)

        # JavaDelegate is implemented through AbstractServiceDelegate
        assert codes(diagnostics, Severity.ERROR) == []

    def test_v1_plain_delegate_warns(self, tmp_path, make_context):
        graph = parse('<bpmn:serviceTask id="task" name="work" camunda:class="dev.example.PlainDelegate"/>')
        context = make_context(tmp_path, CLASS_INDEX, api_version=ApiVersion.V1)
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, context)
        assert DiagnosticCode.BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE in codes(diagnostics,
                                                                                                Severity.WARN)

    def test_execution_listeners(self, tmp_path, make_context):
        """Test that listeners without a class are reported, not silently skipped."""
        graph = parse("""
    <bpmn:startEvent id="start" name="start">
      <bpmn:extensionElements>
        <camunda:executionListener event="start" expression="${logger.log(execution)}"/>
        <camunda:executionListener event="end" class="dev.example.MissingListener"/>
      </bpmn:extensionElements>
    </bpmn:startEvent>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))

        without_class = [d for d in diagnostics if d.code == DiagnosticCode.BPMN_EXECUTION_LISTENER_WITHOUT_CLASS]
        assert [(d.severity, d.subject) for d in without_class] == [(Severity.INFO, "start")]
        assert DiagnosticCode.BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND in codes(diagnostics, Severity.ERROR)

    def test_missing_and_unknown_class(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:serviceTask id="noClass" name="a"/>
    <bpmn:serviceTask id="unknown" name="b" camunda:class="dev.example.Unknown"/>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))
        errors = codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST in errors
        assert DiagnosticCode.BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND in errors

    def test_without_introspector_checks_are_skipped(self, tmp_path, make_context):
        graph = parse('<bpmn:serviceTask id="task" name="work" camunda:class="dev.example.Service"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        assert DiagnosticCode.CLASS_CHECK_SKIPPED in codes(diagnostics, Severity.INFO)

    def test_introspector_failure_becomes_diagnostic(self, tmp_path, make_context):
        errors = ErrorCollector()
        graph = parse("""
    <bpmn:serviceTask id="first" name="a" camunda:class="dev.example.Service"/>
    <bpmn:serviceTask id="second" name="b" camunda:class="dev.example.Service"/>""")
        context = make_context(tmp_path, FailingIntrospector(), errors=errors)
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, context)

        failed = [d for d in diagnostics if d.code == DiagnosticCode.CLASS_LOOKUP_FAILED]
        assert [d.subject for d in failed] == ["first", "second"]
        assert len(errors.errors) == 2

    def test_user_task_listener(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:userTask id="review" name="review" camunda:formKey="external:http://x/Questionnaire/review|1.0">
      <bpmn:extensionElements>
        <camunda:taskListener class="dev.example.Listener" event="create">
          <camunda:inputOutput><camunda:inputParameter name="practitionerRole"/></camunda:inputOutput>
        </camunda:taskListener>
        <camunda:taskListener event="create"/>
      </bpmn:extensionElements>
    </bpmn:userTask>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path, CLASS_INDEX))

        assert DiagnosticCode.BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE in codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE_OR_NULL in codes(diagnostics, Severity.WARN)
        assert DiagnosticCode.BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND in codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS \
            not in codes(diagnostics)

    def test_user_task_form_key_must_be_external(self, tmp_path, make_context):
        graph = parse('<bpmn:userTask id="review" name="review" camunda:formKey="embedded:app:forms/a.html"/>')
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        assert DiagnosticCode.BPMN_USER_TASK_FORM_KEY_IS_NOT_AN_EXTERNAL_FORM in codes(diagnostics, Severity.ERROR)


class TestEvents:
    """Test timer, conditional, message and error event rules."""

    def test_timer_values(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:intermediateCatchEvent id="fixed" name="a">
      <bpmn:timerEventDefinition><bpmn:timeDate>2030-01-01T00:00:00</bpmn:timeDate></bpmn:timerEventDefinition>
    </bpmn:intermediateCatchEvent>
    <bpmn:intermediateCatchEvent id="literal" name="b">
      <bpmn:timerEventDefinition><bpmn:timeDuration>PT5M</bpmn:timeDuration></bpmn:timerEventDefinition>
    </bpmn:intermediateCatchEvent>
    <bpmn:intermediateCatchEvent id="placeholder" name="c">
      <bpmn:timerEventDefinition><bpmn:timeCycle>#{cycle}</bpmn:timeCycle></bpmn:timerEventDefinition>
    </bpmn:intermediateCatchEvent>
    <bpmn:intermediateCatchEvent id="empty" name="d"><bpmn:timerEventDefinition/></bpmn:intermediateCatchEvent>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        problems = {(d.subject, d.code) for d in diagnostics if d.severity != Severity.SUCCESS
                    and d.code != DiagnosticCode.BPMN_FLOATING_ELEMENT}

        assert problems == {
            ("fixed", DiagnosticCode.BPMN_TIMER_FIXED_DATE),
            ("literal", DiagnosticCode.BPMN_TIMER_NO_PLACEHOLDER),
            ("empty", DiagnosticCode.BPMN_TIMER_DEFINITION_EMPTY),
        }

    def test_message_start_event_needs_resources(self, tmp_path, make_context):
        graph = parse(
            '<bpmn:startEvent id="start" name="start">'
            '<bpmn:messageEventDefinition messageRef="Message_1"/></bpmn:startEvent>',
            '<bpmn:message id="Message_1" name="startPing"/>',
        )
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        errors = codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE in errors
        assert DiagnosticCode.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE in errors

    def test_message_start_event_with_resources(self, ping_project, make_context):
        graph = parse(
            '<bpmn:startEvent id="start" name="start">'
            '<bpmn:messageEventDefinition messageRef="Message_1"/></bpmn:startEvent>',
            '<bpmn:message id="Message_1" name="startPing"/>',
        )
        context = make_context(ping_project / "src" / "main" / "resources")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, context)
        assert codes(diagnostics, Severity.ERROR) == []

    def test_error_boundary_event(self, tmp_path, make_context):
        graph = parse(
            '<bpmn:boundaryEvent id="boundary" name="failed" attachedToRef="task">'
            '<bpmn:errorEventDefinition errorRef="Error_1"/></bpmn:boundaryEvent>',
            '<bpmn:error id="Error_1" name="failed"/>',
        )
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        assert DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY in codes(diagnostics, Severity.ERROR)
        assert DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY in codes(diagnostics, Severity.WARN)


class TestFlows:
    """Test gateway, sequence flow and connectivity rules."""

    GATEWAY = """
    <bpmn:startEvent id="start" name="start"/>
    <bpmn:exclusiveGateway id="gateway" default="toB"/>
    <bpmn:endEvent id="a" name="a"/>
    <bpmn:endEvent id="b" name="b"/>
    <bpmn:sequenceFlow id="in" sourceRef="start" targetRef="gateway"/>
    <bpmn:sequenceFlow id="toA" name="a" sourceRef="gateway" targetRef="a"/>
    <bpmn:sequenceFlow id="toB" sourceRef="gateway" targetRef="b">
      <bpmn:conditionExpression>${b}</bpmn:conditionExpression>
    </bpmn:sequenceFlow>
    <bpmn:sequenceFlow id="dangling" sourceRef="nowhere" targetRef="a"/>"""

    def test_gateway_and_flows(self, tmp_path, make_context):
        diagnostics = ProcessGraphRuleEngine().evaluate(parse(self.GATEWAY), make_context(tmp_path))
        problems = {(d.subject, d.code, d.severity) for d in diagnostics if d.severity != Severity.SUCCESS}

        assert ("gateway", DiagnosticCode.BPMN_EXCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY,
                Severity.WARN) in problems
        assert ("toA", DiagnosticCode.BPMN_SEQUENCE_FLOW_MISSING_CONDITION, Severity.ERROR) in problems
        assert ("toB", DiagnosticCode.BPMN_SEQUENCE_FLOW_DEFAULT_HAS_CONDITION, Severity.WARN) in problems
        assert ("toB", DiagnosticCode.BPMN_SEQUENCE_FLOW_AMBIGUOUS_NAME_IS_EMPTY, Severity.WARN) in problems
        assert ("dangling", DiagnosticCode.BPMN_SEQUENCE_FLOW_SOURCE_MISSING, Severity.ERROR) in problems

    def test_floating_element(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:serviceTask id="alone" name="alone" camunda:class="x"/>
    <bpmn:subProcess id="handler" triggeredByEvent="true"/>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        floating = [d.subject for d in diagnostics if d.code == DiagnosticCode.BPMN_FLOATING_ELEMENT]
        assert floating == ["alone"]

    def test_multi_instance_sub_process(self, tmp_path, make_context):
        graph = parse("""
    <bpmn:subProcess id="sub" name="sub">
      <bpmn:multiInstanceLoopCharacteristics/>
    </bpmn:subProcess>""")
        diagnostics = ProcessGraphRuleEngine().evaluate(graph, make_context(tmp_path))
        assert DiagnosticCode.BPMN_SUB_PROCESS_HAS_MULTI_INSTANCE_BUT_IS_NOT_ASYNC_BEFORE_TRUE in codes(
            diagnostics, Severity.WARN)


class TestRuleIsolation:
    """A failing rule must not stop sibling rules or nodes."""

    def test_rule_exception_becomes_diagnostic(self, tmp_path, make_context):
        from dsflint.validation.framework import NodeRule

        class ExplodingRule(NodeRule):
            kinds = (NodeKind.SERVICE_TASK,)

            @property
            def name(self) -> str:
                return "exploding"

            def check(self, node, graph, context, sink):
                raise KeyError("boom")

        class CountingRule(NodeRule):
            kinds = (NodeKind.SERVICE_TASK,)

            @property
            def name(self) -> str:
                return "counting"

            def check(self, node, graph, context, sink):
                sink.success(node.id, "reached")

        graph = ProcessGraph("dsfdev_ping", "bpe/x.bpmn", nodes=(
            ProcessNode("one", NodeKind.SERVICE_TASK), ProcessNode("two", NodeKind.SERVICE_TASK),
        ))
        engine = ProcessGraphRuleEngine([ExplodingRule(), CountingRule()])
        diagnostics = engine.evaluate(graph, make_context(tmp_path))

        failures = [d.subject for d in diagnostics if d.code == DiagnosticCode.RULE_EXECUTION_FAILED]
        reached = [d.subject for d in diagnostics if d.message == "reached"]
        assert failures == ["one", "two"]
        assert reached == ["one", "two"]
