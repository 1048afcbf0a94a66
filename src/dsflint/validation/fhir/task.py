"""Task rules.

Example Task resources are checked against the DSF conventions for draft
tasks and against the input slices declared by their profile.
"""

from collections import Counter

from dsflint.constants import (
    CS_BPMN_MESSAGE,
    CS_TASK_STATUS,
    DATE_PLACEHOLDER,
    ORGANIZATION_PLACEHOLDER,
    SID_ORGANIZATION_IDENTIFIER,
    VERSION_PLACEHOLDER,
)
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.resource import ResourceDocument, ResourceKind, children, first
from dsflint.resources.catalog import fixed_value
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import Cardinality, slice_cardinalities, subject_of
from dsflint.validation.framework import ResourceRule, RuleContext

MESSAGE_NAME = "message-name"
BUSINESS_KEY = "business-key"
CORRELATION_KEY = "correlation-key"

TASK_INPUT_ELEMENT = "Task.input"
BUSINESS_KEY_REQUIRED_STATUSES = frozenset({"in-progress", "completed", "failed"})


def _input_coding(task_input: dict) -> tuple[str | None, str | None]:
    coding = next((c for c in children(task_input, "type", "coding") if isinstance(c, dict)), None)
    if coding is None:
        return None, None
    return first(coding, "system"), first(coding, "code")


def _has_value(task_input: dict) -> bool:
    return any(key.startswith("value") for key in task_input)


class TaskRule(ResourceRule):
    kind = ResourceKind.TASK

    @property
    def name(self) -> str:
        return "task"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)

        profile = document.value("meta", "profile")
        if is_blank(profile):
            sink.error(DiagnosticCode.FHIR_TASK_MISSING_PROFILE, subject, "meta.profile is missing")
        else:
            sink.success(subject, f"meta.profile is {profile}")

        self._check_instantiates_canonical(document, subject, context, sink)
        status = self._check_status(document, subject, context, sink)

        if document.value("intent") == "order":
            sink.success(subject, "Intent is 'order'")
        else:
            sink.error(DiagnosticCode.FHIR_TASK_INTENT_NOT_ORDER, subject,
                       f"Intent must be 'order', found '{document.value('intent') or ''}'")

        self._check_organization(document.elements("requester"), "requester", subject, sink,
                                 DiagnosticCode.FHIR_TASK_MISSING_REQUESTER,
                                 DiagnosticCode.FHIR_TASK_INVALID_REQUESTER,
                                 DiagnosticCode.FHIR_TASK_REQUESTER_ORGANIZATION_NO_PLACEHOLDER)
        self._check_organization(document.elements("restriction", "recipient"), "recipient", subject, sink,
                                 DiagnosticCode.FHIR_TASK_MISSING_RECIPIENT,
                                 DiagnosticCode.FHIR_TASK_INVALID_RECIPIENT,
                                 DiagnosticCode.FHIR_TASK_RECIPIENT_ORGANIZATION_NO_PLACEHOLDER)

        authored_on = document.value("authoredOn") or ""
        if DATE_PLACEHOLDER in authored_on:
            sink.success(subject, f"authoredOn uses {DATE_PLACEHOLDER}")
        else:
            sink.error(DiagnosticCode.FHIR_TASK_DATE_NO_PLACEHOLDER, subject,
                       f"authoredOn must use {DATE_PLACEHOLDER}, found '{authored_on}'")

        codes = self._check_inputs(document, subject, context, sink)
        self._check_business_key(status, codes, subject, sink)
        self._check_profile_cardinality(document, profile, codes, subject, context, sink)

    def _check_instantiates_canonical(self, document: ResourceDocument, subject: str, context: RuleContext,
                                      sink: DiagnosticSink) -> None:
        canonical = document.value("instantiatesCanonical")
        if is_blank(canonical):
            sink.error(DiagnosticCode.FHIR_TASK_MISSING_INSTANTIATES_CANONICAL, subject,
                       "instantiatesCanonical is missing")
            return
        if not canonical.endswith("|" + VERSION_PLACEHOLDER):
            sink.error(DiagnosticCode.FHIR_TASK_INSTANTIATES_CANONICAL_NO_PLACEHOLDER, subject,
                       f"instantiatesCanonical must end with |{VERSION_PLACEHOLDER}, found '{canonical}'")
        else:
            sink.success(subject, f"instantiatesCanonical ends with |{VERSION_PLACEHOLDER}")

        if context.catalog.find_by_url(canonical, ResourceKind.ACTIVITY_DEFINITION) is None:
            sink.error(DiagnosticCode.FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL, subject,
                       f"No ActivityDefinition found for {canonical}")
        else:
            sink.success(subject, f"ActivityDefinition found for {canonical}")

    def _check_status(self, document: ResourceDocument, subject: str, context: RuleContext,
                      sink: DiagnosticSink) -> str | None:
        status = document.value("status")
        if is_blank(status):
            sink.error(DiagnosticCode.FHIR_TASK_MISSING_STATUS, subject, "Status is missing")
            return None
        if context.codes.is_unknown(CS_TASK_STATUS, status):
            sink.error(DiagnosticCode.FHIR_TASK_UNKNOWN_STATUS, subject, f"Status '{status}' is not a task status")
        elif status != "draft":
            sink.error(DiagnosticCode.FHIR_TASK_STATUS_NOT_DRAFT, subject, f"Status must be 'draft', found '{status}'")
        else:
            sink.success(subject, "Status is 'draft'")
        return status

    def _check_organization(self, references: list, role: str, subject: str, sink: DiagnosticSink,
                            missing_code: DiagnosticCode, invalid_code: DiagnosticCode,
                            placeholder_code: DiagnosticCode) -> None:
        reference = next((r for r in references if isinstance(r, dict)), None)
        if reference is None:
            sink.error(missing_code, subject, f"{role} is missing")
            return
        system = first(reference, "identifier", "system")
        value = first(reference, "identifier", "value")
        if system != SID_ORGANIZATION_IDENTIFIER:
            sink.error(invalid_code, subject,
                       f"{role} identifier system must be {SID_ORGANIZATION_IDENTIFIER}, found '{system or ''}'")
            return
        if value != ORGANIZATION_PLACEHOLDER:
            sink.error(placeholder_code, subject,
                       f"{role} identifier value must be {ORGANIZATION_PLACEHOLDER}, found '{value or ''}'")
            return
        sink.success(subject, f"{role} identifies {ORGANIZATION_PLACEHOLDER}")

    def _check_inputs(self, document: ResourceDocument, subject: str, context: RuleContext,
                      sink: DiagnosticSink) -> Counter:
        """Checks every input; returns the number of inputs per coding code."""
        inputs = [task_input for task_input in document.elements("input") if isinstance(task_input, dict)]
        counts: Counter = Counter()
        if not inputs:
            sink.error(DiagnosticCode.FHIR_TASK_MISSING_INPUT, subject, "Task has no input")

        seen: set[str] = set()
        message_name_present = False
        for index, task_input in enumerate(inputs, start=1):
            system, code = _input_coding(task_input)
            if is_blank(system) or is_blank(code):
                sink.error(DiagnosticCode.FHIR_TASK_INPUT_MISSING_CODING, subject,
                           f"Input #{index} has no type coding with system and code")
                continue
            counts[code] += 1

            if not _has_value(task_input):
                sink.error(DiagnosticCode.FHIR_TASK_INPUT_MISSING_VALUE, subject, f"Input '{code}' has no value[x]")

            key = f"{system}#{code}"
            if key in seen:
                sink.error(DiagnosticCode.FHIR_TASK_INPUT_DUPLICATE_SLICE, subject, f"Input {key} appears more than once")
            seen.add(key)

            if system == CS_BPMN_MESSAGE and code == MESSAGE_NAME:
                message_name_present = True

            if context.codes.contains_system(system):
                if context.codes.is_known(system, code):
                    sink.success(subject, f"Input coding {system}|{code} is known")
                else:
                    sink.error(DiagnosticCode.FHIR_TASK_UNKNOWN_CODE, subject,
                               f"Input coding '{code}' is not a known code of {system}")

        if message_name_present:
            sink.success(subject, f"Input '{MESSAGE_NAME}' is present")
        else:
            sink.error(DiagnosticCode.FHIR_TASK_MISSING_MESSAGE_NAME_INPUT, subject,
                       f"Input {CS_BPMN_MESSAGE}#{MESSAGE_NAME} is missing")
        return counts

    def _check_business_key(self, status: str | None, counts: Counter, subject: str, sink: DiagnosticSink) -> None:
        has_business_key = counts[BUSINESS_KEY] > 0
        if status in BUSINESS_KEY_REQUIRED_STATUSES:
            if has_business_key:
                sink.success(subject, f"Input '{BUSINESS_KEY}' is present for status '{status}'")
            else:
                sink.error(DiagnosticCode.FHIR_TASK_BUSINESS_KEY_REQUIRED, subject,
                           f"Status '{status}' requires a '{BUSINESS_KEY}' input")
        elif status == "draft":
            if has_business_key:
                sink.error(DiagnosticCode.FHIR_TASK_BUSINESS_KEY_EXISTS, subject,
                           f"Draft task must not carry a '{BUSINESS_KEY}' input")
            else:
                sink.success(subject, f"Draft task carries no '{BUSINESS_KEY}' input")
        else:
            sink.info(DiagnosticCode.FHIR_TASK_BUSINESS_KEY_CHECK_SKIPPED, subject,
                      f"Business key check skipped for status '{status or ''}'")

    def _check_profile_cardinality(self, document: ResourceDocument, profile: str | None, counts: Counter,
                                   subject: str, context: RuleContext, sink: DiagnosticSink) -> None:
        if is_blank(profile):
            return
        structure_definition = context.catalog.structure_definition_for_profile(profile)
        if structure_definition is None:
            sink.warn(DiagnosticCode.FHIR_TASK_COULD_NOT_LOAD_PROFILE, subject,
                      f"Could not load profile {profile}; input cardinality not checked")
            return

        base, slices = slice_cardinalities(structure_definition).get(TASK_INPUT_ELEMENT, (None, {}))
        slices_by_code = {
            fixed_value(structure_definition, f"{TASK_INPUT_ELEMENT}:{name}.type.coding.code", "fixedCode") or name:
                cardinality
            for name, cardinality in slices.items()
        }

        correlation_count = counts[CORRELATION_KEY]
        correlation_slice = slices_by_code.get(CORRELATION_KEY)
        if correlation_slice is None and correlation_count:
            sink.error(DiagnosticCode.FHIR_TASK_CORRELATION_NOT_ALLOWED, subject,
                       f"Profile {profile} declares no '{CORRELATION_KEY}' input")
        elif correlation_slice is not None and correlation_slice.min > 0 and not correlation_count:
            sink.error(DiagnosticCode.FHIR_TASK_CORRELATION_MISSING_BUT_REQUIRED, subject,
                       f"Profile {profile} requires a '{CORRELATION_KEY}' input")

        self._check_count(sum(counts.values()), base or Cardinality(), "inputs", subject, sink,
                          DiagnosticCode.FHIR_TASK_INPUT_COUNT_BELOW_MIN,
                          DiagnosticCode.FHIR_TASK_INPUT_COUNT_EXCEEDS_MAX)
        for code, cardinality in sorted(slices_by_code.items()):
            self._check_count(counts[code], cardinality, f"'{code}' inputs", subject, sink,
                              DiagnosticCode.FHIR_TASK_INPUT_SLICE_COUNT_BELOW_MIN,
                              DiagnosticCode.FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_MAX)

    def _check_count(self, count: int, cardinality: Cardinality, label: str, subject: str, sink: DiagnosticSink,
                     below_code: DiagnosticCode, above_code: DiagnosticCode) -> None:
        if count < cardinality.min:
            sink.error(below_code, subject, f"{count} {label}, profile requires at least {cardinality.min}")
        elif not cardinality.allows(count):
            sink.error(above_code, subject, f"{count} {label}, profile allows at most {cardinality.max}")
        else:
            sink.success(subject, f"{count} {label} within profile cardinality")
