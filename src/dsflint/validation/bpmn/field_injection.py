"""Field injection checks for message sending elements.

The ``profile``, ``messageName`` and ``instantiatesCanonical`` fields are
checked one by one and then against each other and against the
StructureDefinition and ActivityDefinition they point to.
"""

import re
from dataclasses import dataclass

from dsflint.constants import TASK_INSTANTIATES_CANONICAL_ELEMENT, TASK_MESSAGE_NAME_ELEMENT
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.process import ProcessNode
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.resources.catalog import declares_message_name, fixed_value
from dsflint.utils.paths import has_placeholder, is_blank
from dsflint.validation.framework import RuleContext

PROFILE_FIELD = "profile"
MESSAGE_NAME_FIELD = "messageName"
INSTANTIATES_CANONICAL_FIELD = "instantiatesCanonical"

_WORD_BOUNDARY = re.compile(r"(?=[A-Z])")


@dataclass
class _InjectedValues:
    profile: str | None = None
    message_name: str | None = None
    instantiates_canonical: str | None = None


def message_name_parts(message_name: str) -> list[str]:
    """Lower-cased word parts of a camel case message name.

    >>> message_name_parts("startPingPong")
    ['start', 'ping', 'pong']
    """
    return [part.lower() for part in _WORD_BOUNDARY.split(message_name) if part]


def message_name_in_profile(message_name: str, profile: str) -> bool:
    """True if every word part of ``message_name`` occurs in ``profile``, in order."""
    haystack = profile.lower()
    position = 0
    for part in message_name_parts(message_name):
        found = haystack.find(part, position)
        if found < 0:
            return False
        position = found + len(part)
    return True


def check_field_injections(node: ProcessNode, context: RuleContext, sink: DiagnosticSink) -> None:
    values = _check_individual_fields(node, sink)

    structure_definition = None
    if values.profile:
        structure_definition = context.catalog.structure_definition_for_profile(values.profile)
        if structure_definition is None:
            sink.warn(DiagnosticCode.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE, node.id,
                      f"No StructureDefinition found for profile {values.profile}")
        else:
            sink.success(node.id, f"StructureDefinition {structure_definition.path} found for profile")

    if values.profile and values.message_name:
        if message_name_in_profile(values.message_name, values.profile):
            sink.success(node.id, f"Message name '{values.message_name}' matches profile {values.profile}")
        else:
            sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_PROFILE, node.id,
                       f"Message name '{values.message_name}' does not appear in profile {values.profile}")

    if structure_definition is not None:
        _cross_check_profile(node, values, structure_definition, context, sink)


def _check_individual_fields(node: ProcessNode, sink: DiagnosticSink) -> _InjectedValues:
    values = _InjectedValues()
    for field in node.field_injections:
        if field.is_expression:
            sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_NOT_STRING_LITERAL, node.id,
                       f"Field '{field.name}' must be a string literal, not an expression")
            continue
        sink.success(node.id, f"Field '{field.name}' is a string literal")
        value = (field.value or "").strip()

        if field.name == PROFILE_FIELD:
            if not value:
                sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_PROFILE_EMPTY, node.id, "Field 'profile' is empty")
                continue
            sink.success(node.id, "Field 'profile' is set")
            if has_placeholder(value):
                sink.success(node.id, "Field 'profile' contains a version placeholder")
            else:
                sink.warn(DiagnosticCode.BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER, node.id,
                          f"Field 'profile' has no version placeholder: {value}")
            values.profile = value

        elif field.name == MESSAGE_NAME_FIELD:
            if not value:
                sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_MESSAGE_VALUE_EMPTY, node.id,
                           "Field 'messageName' is empty")
                continue
            sink.success(node.id, "Field 'messageName' is set")
            values.message_name = value

        elif field.name == INSTANTIATES_CANONICAL_FIELD:
            if not value:
                sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY, node.id,
                           "Field 'instantiatesCanonical' is empty")
                continue
            if has_placeholder(value):
                sink.success(node.id, "Field 'instantiatesCanonical' contains a version placeholder")
            else:
                sink.warn(DiagnosticCode.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NO_VERSION_PLACEHOLDER,
                          node.id, f"Field 'instantiatesCanonical' has no version placeholder: {value}")
            values.instantiates_canonical = value

        else:
            sink.warn(DiagnosticCode.BPMN_UNKNOWN_FIELD_INJECTION, node.id, f"Unknown field injection '{field.name}'")
    return values


def _cross_check_profile(node: ProcessNode, values: _InjectedValues, structure_definition: ResourceDocument,
                         context: RuleContext, sink: DiagnosticSink) -> None:
    if values.instantiates_canonical:
        fixed_canonical = fixed_value(structure_definition, TASK_INSTANTIATES_CANONICAL_ELEMENT, "fixedCanonical")
        if is_blank(fixed_canonical):
            sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NOT_FIXED_IN_PROFILE, node.id,
                       f"Profile {structure_definition.reference()} does not fix {TASK_INSTANTIATES_CANONICAL_ELEMENT}")
        else:
            sink.success(node.id, f"Profile fixes {TASK_INSTANTIATES_CANONICAL_ELEMENT}")

    if fixed_value(structure_definition, TASK_MESSAGE_NAME_ELEMENT, "fixedString") is None:
        sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_FIXED_IN_PROFILE, node.id,
                   f"Profile {structure_definition.reference()} does not fix {TASK_MESSAGE_NAME_ELEMENT}")
    else:
        sink.success(node.id, f"Profile fixes {TASK_MESSAGE_NAME_ELEMENT}")

    if not values.instantiates_canonical:
        return

    activity_definition = context.catalog.find_by_url(values.instantiates_canonical, ResourceKind.ACTIVITY_DEFINITION)
    if activity_definition is None:
        sink.warn(DiagnosticCode.BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE, node.id,
                  f"No ActivityDefinition found for {values.instantiates_canonical}")
        return
    sink.success(node.id, f"ActivityDefinition {activity_definition.path} found for instantiatesCanonical")

    if values.message_name:
        if declares_message_name(activity_definition, values.message_name):
            sink.success(node.id, f"ActivityDefinition declares message '{values.message_name}'")
        else:
            sink.error(DiagnosticCode.BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_ACTIVITY_DEFINITION, node.id,
                       f"ActivityDefinition {activity_definition.reference()} does not declare "
                       f"message '{values.message_name}'")
