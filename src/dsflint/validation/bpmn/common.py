"""Checks shared by several BPMN element rules."""

from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.process import MessageDefinition, ProcessNode
from dsflint.utils.paths import is_blank
from dsflint.validation.framework import RuleContext


def check_name(node: ProcessNode, sink: DiagnosticSink, code: DiagnosticCode, severity: Severity,
               label: str) -> None:
    if is_blank(node.name):
        sink.add(severity, code, node.id, f"{label} has no name")
    else:
        sink.success(node.id, f"{label} name '{node.name}' is set")


def message_name_of(node: ProcessNode) -> str | None:
    definition = node.event_definition
    if isinstance(definition, MessageDefinition) and definition.message_name:
        return definition.message_name.strip() or None
    return None


def check_message_catch(
    node: ProcessNode,
    context: RuleContext,
    sink: DiagnosticSink,
    name_code: DiagnosticCode,
    message_code: DiagnosticCode,
    label: str,
) -> None:
    """Name, message name and the ActivityDefinition / StructureDefinition behind the message."""
    check_name(node, sink, name_code, Severity.WARN, label)

    message_name = message_name_of(node)
    if message_name is None:
        sink.error(message_code, node.id, f"{label} has no message name")
        return
    sink.success(node.id, f"{label} message name '{message_name}' is set")

    if context.catalog.activity_definitions_for_message(message_name):
        sink.success(node.id, f"ActivityDefinition found for message '{message_name}'")
    else:
        sink.error(DiagnosticCode.BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE, node.id,
                   f"No ActivityDefinition declares message '{message_name}'")

    if context.catalog.structure_definitions_for_message(message_name):
        sink.success(node.id, f"StructureDefinition found for message '{message_name}'")
    else:
        sink.error(DiagnosticCode.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE, node.id,
                   f"No StructureDefinition fixes message name '{message_name}'")
