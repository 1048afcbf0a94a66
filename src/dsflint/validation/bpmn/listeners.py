"""Execution and task listener checks."""

from dsflint.constants import (
    V1_DEFAULT_USER_TASK_LISTENER,
    V1_EXECUTION_LISTENER,
    V1_TASK_LISTENER,
    V2_DEFAULT_USER_TASK_LISTENER,
    V2_EXECUTION_LISTENER,
    V2_USER_TASK_LISTENER,
    ApiVersion,
)
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.process import NodeKind, ProcessGraph, ProcessNode
from dsflint.utils.paths import is_blank
from dsflint.validation.bpmn.classes import ClassRequirement, check_class, class_lookup_failed
from dsflint.validation.framework import ClassLookupError, NodeRule, RuleContext

PRACTITIONER_ROLE_PARAMETER = "practitionerRole"
PRACTITIONERS_PARAMETER = "practitioners"


def _execution_listener_interface(api_version: ApiVersion) -> str:
    return V2_EXECUTION_LISTENER if api_version == ApiVersion.V2 else V1_EXECUTION_LISTENER


class ExecutionListenerRule(NodeRule):
    """Every execution listener class must exist and implement the listener interface."""

    kinds = tuple(kind for kind in NodeKind)

    @property
    def name(self) -> str:
        return "execution_listeners"

    def applies_to(self, node: ProcessNode, graph: ProcessGraph) -> bool:
        return bool(node.execution_listeners)

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        interface = _execution_listener_interface(context.api_version)
        for listener in node.execution_listeners:
            if is_blank(listener.class_name):
                sink.info(DiagnosticCode.BPMN_EXECUTION_LISTENER_WITHOUT_CLASS, node.id,
                          f"Execution listener on {listener.event or 'any'} event has no class; "
                          "expression and delegateExpression listeners are not class-checked")
                continue
            check_class(
                listener.class_name.strip(),
                node.id,
                context,
                sink,
                DiagnosticCode.BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND,
                [ClassRequirement(interface, DiagnosticCode.BPMN_EXECUTION_LISTENER_NOT_IMPLEMENTING_REQUIRED_INTERFACE)],
            )


def check_task_listeners(node: ProcessNode, context: RuleContext, sink: DiagnosticSink) -> None:
    """User task listeners: class present, existing, and a user task listener type."""
    if context.api_version == ApiVersion.V2:
        default_listener, interface = V2_DEFAULT_USER_TASK_LISTENER, V2_USER_TASK_LISTENER
    else:
        default_listener, interface = V1_DEFAULT_USER_TASK_LISTENER, V1_TASK_LISTENER

    for listener in node.task_listeners:
        if is_blank(listener.class_name):
            sink.error(DiagnosticCode.BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE, node.id,
                       "Task listener has no class attribute")
        else:
            _check_listener_type(listener.class_name.strip(), default_listener, interface, node, context, sink)

        _check_listener_parameters(listener, node, sink)


def _check_listener_type(class_name: str, default_listener: str, interface: str, node: ProcessNode,
                         context: RuleContext, sink: DiagnosticSink) -> None:
    found = check_class(
        class_name, node.id, context, sink,
        DiagnosticCode.BPMN_USER_TASK_LISTENER_JAVA_CLASS_NOT_FOUND, [],
    )
    if not found:
        return
    try:
        if context.is_subclass_of(class_name, default_listener) or context.implements(class_name, interface):
            sink.success(node.id, f"Task listener {class_name} is a user task listener")
        else:
            sink.error(
                DiagnosticCode.BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS,
                node.id,
                f"Task listener {class_name} neither extends {default_listener.rsplit('.', 1)[-1]} "
                f"nor implements {interface.rsplit('.', 1)[-1]}",
            )
    except ClassLookupError as e:
        class_lookup_failed(context, sink, node.id, e)


def _check_listener_parameters(listener, node: ProcessNode, sink: DiagnosticSink) -> None:
    checks = (
        (PRACTITIONER_ROLE_PARAMETER, DiagnosticCode.BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE_OR_NULL),
        (PRACTITIONERS_PARAMETER, DiagnosticCode.BPMN_PRACTITIONERS_HAS_NO_VALUE_OR_NULL),
    )
    for parameter, code in checks:
        if not listener.has_parameter(parameter):
            continue
        if is_blank(listener.parameter(parameter)):
            sink.warn(code, node.id, f"Task listener input parameter '{parameter}' has no value")
        else:
            sink.success(node.id, f"Task listener input parameter '{parameter}' has a value")
