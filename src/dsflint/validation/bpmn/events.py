"""Rules for start, end, intermediate and boundary events."""

from dsflint.constants import V1_JAVA_DELEGATE, V2_MESSAGE_END_EVENT, V2_MESSAGE_INTERMEDIATE_THROW_EVENT, ApiVersion
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.process import (
    ConditionalDefinition,
    ErrorDefinition,
    MessageDefinition,
    NodeKind,
    ProcessGraph,
    ProcessNode,
    SignalDefinition,
    TimerDefinition,
)
from dsflint.utils.paths import has_placeholder, is_blank
from dsflint.validation.bpmn.classes import ClassRequirement, check_implementation_class
from dsflint.validation.bpmn.common import check_message_catch, check_name
from dsflint.validation.bpmn.field_injection import check_field_injections
from dsflint.validation.framework import NodeRule, RuleContext


def check_nested_name(node: ProcessNode, graph: ProcessGraph, sink: DiagnosticSink,
                      top_level_code: DiagnosticCode, label: str) -> None:
    """Blank names warn outside a sub process and are only noted inside one."""
    if graph.is_in_sub_process(node):
        check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.INFO, f"{label} in sub process")
    else:
        check_name(node, sink, top_level_code, Severity.WARN, label)


def check_timer(node: ProcessNode, definition: TimerDefinition, sink: DiagnosticSink) -> None:
    if is_blank(definition.time_date) and is_blank(definition.time_cycle) and is_blank(definition.time_duration):
        sink.error(DiagnosticCode.BPMN_TIMER_DEFINITION_EMPTY, node.id, "Timer has no date, cycle or duration")
        return
    if not is_blank(definition.time_date):
        sink.info(DiagnosticCode.BPMN_TIMER_FIXED_DATE, node.id, f"Timer uses a fixed date: {definition.time_date}")
        return

    value = definition.time_cycle if not is_blank(definition.time_cycle) else definition.time_duration
    if has_placeholder(value):
        sink.success(node.id, "Timer value uses a placeholder")
    else:
        sink.warn(DiagnosticCode.BPMN_TIMER_NO_PLACEHOLDER, node.id, f"Timer value has no placeholder: {value}")


def check_signal(node: ProcessNode, definition: SignalDefinition, sink: DiagnosticSink,
                 name_code: DiagnosticCode, signal_code: DiagnosticCode, label: str) -> None:
    check_name(node, sink, name_code, Severity.WARN, label)
    if is_blank(definition.signal_name):
        sink.error(signal_code, node.id, f"{label} references no signal")
    else:
        sink.success(node.id, f"{label} signal '{definition.signal_name}' is set")


def check_conditional(node: ProcessNode, definition: ConditionalDefinition, sink: DiagnosticSink) -> None:
    check_name(node, sink, DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY, Severity.WARN,
               "Conditional event")

    if is_blank(definition.variable_name):
        sink.error(DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_NAME_EMPTY, node.id,
                   "Conditional event has no variable name")
    else:
        sink.success(node.id, f"Conditional event variable '{definition.variable_name}' is set")

    if is_blank(definition.variable_events):
        sink.warn(DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_EVENTS_EMPTY, node.id,
                  "Conditional event has no variable events")
    else:
        sink.success(node.id, f"Conditional event variable events '{definition.variable_events}' are set")

    if is_blank(definition.condition_type):
        sink.error(DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_EMPTY, node.id,
                   "Conditional event has no condition")
        return
    if definition.condition_type != "expression":
        sink.warn(DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_NOT_EXPRESSION, node.id,
                  f"Condition type is '{definition.condition_type}', expected 'expression'")
    else:
        sink.success(node.id, "Condition type is 'expression'")

    if is_blank(definition.expression):
        sink.error(DiagnosticCode.BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_EXPRESSION_EMPTY, node.id,
                   "Conditional event has an empty expression")
    else:
        sink.success(node.id, "Conditional event expression is set")


def check_message_send(node: ProcessNode, context: RuleContext, sink: DiagnosticSink, v2_interface: str) -> None:
    """Implementation class and field injections of a message throw or end event."""
    if context.api_version == ApiVersion.V2:
        requirements = [
            ClassRequirement(v2_interface, DiagnosticCode.BPMN_END_OR_INTERMEDIATE_THROW_EVENT_MISSING_INTERFACE),
        ]
    else:
        requirements = [
            ClassRequirement(V1_JAVA_DELEGATE,
                             DiagnosticCode.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_IMPLEMENTING_JAVA_DELEGATE),
        ]
    check_implementation_class(
        node, context, sink,
        empty_code=DiagnosticCode.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY,
        not_found_code=DiagnosticCode.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_FOUND,
        requirements=requirements,
        missing_code=DiagnosticCode.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY,
    )
    check_field_injections(node, context, sink)


class StartEventRule(NodeRule):
    kinds = (NodeKind.START_EVENT,)

    @property
    def name(self) -> str:
        return "start_event"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        definition = node.event_definition
        if isinstance(definition, MessageDefinition):
            check_message_catch(
                node, context, sink,
                name_code=DiagnosticCode.BPMN_EVENT_NAME_EMPTY,
                message_code=DiagnosticCode.BPMN_MESSAGE_START_EVENT_MESSAGE_NAME_EMPTY,
                label="Message start event",
            )
            return

        check_nested_name(node, graph, sink, DiagnosticCode.BPMN_START_EVENT_NOT_PART_OF_SUB_PROCESS, "Start event")
        if isinstance(definition, TimerDefinition):
            check_timer(node, definition, sink)


class EndEventRule(NodeRule):
    kinds = (NodeKind.END_EVENT,)

    @property
    def name(self) -> str:
        return "end_event"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        definition = node.event_definition
        if isinstance(definition, MessageDefinition):
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Message end event")
            check_message_send(node, context, sink, V2_MESSAGE_END_EVENT)
        elif isinstance(definition, SignalDefinition):
            check_signal(node, definition, sink,
                         DiagnosticCode.BPMN_SIGNAL_END_EVENT_NAME_EMPTY,
                         DiagnosticCode.BPMN_SIGNAL_END_EVENT_SIGNAL_EMPTY,
                         "Signal end event")
        else:
            check_nested_name(node, graph, sink, DiagnosticCode.BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS, "End event")

        if graph.is_in_sub_process(node):
            if node.async_after:
                sink.success(node.id, "End event in sub process is asyncAfter")
            else:
                sink.warn(DiagnosticCode.BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE, node.id,
                          "End event inside a sub process should have asyncAfter=true")


class IntermediateThrowEventRule(NodeRule):
    kinds = (NodeKind.INTERMEDIATE_THROW_EVENT,)

    @property
    def name(self) -> str:
        return "intermediate_throw_event"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        definition = node.event_definition
        if isinstance(definition, MessageDefinition):
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Message throw event")
            check_message_send(node, context, sink, V2_MESSAGE_INTERMEDIATE_THROW_EVENT)
            if definition.message_ref:
                sink.warn(DiagnosticCode.BPMN_MESSAGE_INTERMEDIATE_THROW_EVENT_HAS_MESSAGE, node.id,
                          f"Message throw event references message '{definition.message_ref}'; "
                          "the message name is set through field injection")
            else:
                sink.success(node.id, "Message throw event references no message")
        elif isinstance(definition, SignalDefinition):
            check_signal(node, definition, sink,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_NAME_EMPTY,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_SIGNAL_EMPTY,
                         "Signal throw event")
        else:
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Intermediate throw event")


class IntermediateCatchEventRule(NodeRule):
    kinds = (NodeKind.INTERMEDIATE_CATCH_EVENT,)

    @property
    def name(self) -> str:
        return "intermediate_catch_event"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        definition = node.event_definition
        if isinstance(definition, MessageDefinition):
            check_message_catch(
                node, context, sink,
                name_code=DiagnosticCode.BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
                message_code=DiagnosticCode.BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY,
                label="Message catch event",
            )
        elif isinstance(definition, TimerDefinition):
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Timer catch event")
            check_timer(node, definition, sink)
        elif isinstance(definition, SignalDefinition):
            check_signal(node, definition, sink,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY,
                         "Signal catch event")
        elif isinstance(definition, ConditionalDefinition):
            check_conditional(node, definition, sink)
        else:
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Intermediate catch event")


class BoundaryEventRule(NodeRule):
    kinds = (NodeKind.BOUNDARY_EVENT,)

    @property
    def name(self) -> str:
        return "boundary_event"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        definition = node.event_definition
        if isinstance(definition, MessageDefinition):
            check_message_catch(
                node, context, sink,
                name_code=DiagnosticCode.BPMN_MESSAGE_BOUNDARY_EVENT_NAME_EMPTY,
                message_code=DiagnosticCode.BPMN_MESSAGE_BOUNDARY_EVENT_MESSAGE_NAME_EMPTY,
                label="Message boundary event",
            )
        elif isinstance(definition, ErrorDefinition):
            self._check_error(node, definition, sink)
        elif isinstance(definition, TimerDefinition):
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Timer boundary event")
            check_timer(node, definition, sink)
        elif isinstance(definition, SignalDefinition):
            check_signal(node, definition, sink,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
                         DiagnosticCode.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY,
                         "Signal boundary event")
        elif isinstance(definition, ConditionalDefinition):
            check_conditional(node, definition, sink)
        else:
            check_name(node, sink, DiagnosticCode.BPMN_EVENT_NAME_EMPTY, Severity.WARN, "Boundary event")

    def _check_error(self, node: ProcessNode, definition: ErrorDefinition, sink: DiagnosticSink) -> None:
        check_name(node, sink, DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_NAME_EMPTY, Severity.WARN,
                   "Error boundary event")

        # catch-all boundary events reference no error
        if definition.error_ref:
            if is_blank(definition.error_name):
                sink.error(DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_ERROR_NAME_EMPTY, node.id,
                           f"Error '{definition.error_ref}' has no name")
            else:
                sink.success(node.id, f"Error name '{definition.error_name}' is set")
            if is_blank(definition.error_code):
                sink.error(DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY, node.id,
                           f"Error '{definition.error_ref}' has no error code")
            else:
                sink.success(node.id, f"Error code '{definition.error_code}' is set")

        if is_blank(definition.error_code_variable):
            sink.warn(DiagnosticCode.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY, node.id,
                      "Error boundary event has no error code variable")
        else:
            sink.success(node.id, f"Error code variable '{definition.error_code_variable}' is set")
