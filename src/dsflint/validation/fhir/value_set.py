"""ValueSet rules."""

from dsflint.constants import CS_ORGANIZATION_ROLE, EXTENSION_READ_ACCESS_PARENT_ORGANIZATION_ROLE, VERSION_PLACEHOLDER
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.resource import ResourceDocument, ResourceKind, children, find_extensions, first
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import (
    check_placeholder,
    check_required,
    read_access_codes,
    subject_of,
)
from dsflint.validation.framework import ResourceRule, RuleContext

ORGANIZATION_ROLE_EXTENSION = "organization-role"


class ValueSetRule(ResourceRule):
    kind = ResourceKind.VALUE_SET

    @property
    def name(self) -> str:
        return "value_set"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)

        if any(code in ("ALL", "LOCAL") for code in read_access_codes(document)):
            sink.success(subject, "Read-access tag ALL or LOCAL is present")
        else:
            sink.error(DiagnosticCode.FHIR_VALUE_SET_MISSING_READ_ACCESS_TAG_ALL_OR_LOCAL, subject,
                       "Read-access tag ALL or LOCAL is missing")
        self._check_organization_roles(document, subject, context, sink)

        check_required(document, sink, "url", DiagnosticCode.FHIR_VALUE_SET_MISSING_URL)
        check_required(document, sink, "name", DiagnosticCode.FHIR_VALUE_SET_MISSING_NAME)
        check_required(document, sink, "title", DiagnosticCode.FHIR_VALUE_SET_MISSING_TITLE, Severity.WARN)
        check_required(document, sink, "publisher", DiagnosticCode.FHIR_VALUE_SET_MISSING_PUBLISHER, Severity.WARN)
        check_required(document, sink, "description", DiagnosticCode.FHIR_VALUE_SET_MISSING_DESCRIPTION,
                       Severity.WARN)
        check_placeholder(document, sink, "version", DiagnosticCode.FHIR_VALUE_SET_VERSION_NO_PLACEHOLDER)
        check_placeholder(document, sink, "date", DiagnosticCode.FHIR_VALUE_SET_DATE_NO_PLACEHOLDER)
        self._check_includes(document, subject, context, sink)

    def _check_organization_roles(self, document: ResourceDocument, subject: str, context: RuleContext,
                                  sink: DiagnosticSink) -> None:
        for tag in document.elements("meta", "tag"):
            for extension in find_extensions(tag, EXTENSION_READ_ACCESS_PARENT_ORGANIZATION_ROLE):
                for role in children(extension, "extension"):
                    if not isinstance(role, dict) or role.get("url") != ORGANIZATION_ROLE_EXTENSION:
                        continue
                    system = first(role, "valueCoding", "system") or CS_ORGANIZATION_ROLE
                    code = first(role, "valueCoding", "code")
                    if is_blank(code) or context.codes.is_unknown(system, code):
                        sink.error(DiagnosticCode.FHIR_VALUE_SET_ORGANIZATION_ROLE_INVALID_CODE, subject,
                                   f"Organization role '{code or ''}' is not a known code of {system}")
                    else:
                        sink.success(subject, f"Organization role '{code}' is valid")

    def _check_includes(self, document: ResourceDocument, subject: str, context: RuleContext,
                        sink: DiagnosticSink) -> None:
        includes = [include for include in document.elements("compose", "include") if isinstance(include, dict)]
        if not includes:
            sink.error(DiagnosticCode.FHIR_VALUE_SET_MISSING_COMPOSE_INCLUDE, subject, "compose.include is missing")
            return

        for index, include in enumerate(includes, start=1):
            system = first(include, "system")
            if is_blank(system):
                sink.error(DiagnosticCode.FHIR_VALUE_SET_INCLUDE_MISSING_SYSTEM, subject,
                           f"compose.include #{index} has no system")
                continue

            version = first(include, "version")
            if version == VERSION_PLACEHOLDER:
                sink.success(subject, f"Include of {system} uses {VERSION_PLACEHOLDER}")
            else:
                sink.warn(DiagnosticCode.FHIR_VALUE_SET_INCLUDE_VERSION_NO_PLACEHOLDER, subject,
                          f"Include of {system} must use version {VERSION_PLACEHOLDER}, found '{version or ''}'")

            self._check_concepts(include, system, subject, context, sink)

    def _check_concepts(self, include: dict, system: str, subject: str, context: RuleContext,
                        sink: DiagnosticSink) -> None:
        seen: set[str] = set()
        for concept in children(include, "concept"):
            code = first(concept, "code")
            if is_blank(code):
                sink.error(DiagnosticCode.FHIR_VALUE_SET_CONCEPT_MISSING_CODE, subject,
                           f"Concept of {system} has no code")
                continue
            if code in seen:
                sink.error(DiagnosticCode.FHIR_VALUE_SET_DUPLICATE_CONCEPT_CODE, subject,
                           f"Concept code '{code}' of {system} is listed more than once")
                continue
            seen.add(code)

            if not context.codes.is_unknown(system, code):
                sink.success(subject, f"Code {system}|{code} is known")
                continue
            other_systems = [s for s in context.codes.find_systems_containing_code(code) if s != system]
            if other_systems:
                sink.error(DiagnosticCode.FHIR_VALUE_SET_FALSE_URL_REFERENCED, subject,
                           f"Code '{code}' is not defined in {system} but in {', '.join(other_systems)}")
            else:
                sink.error(DiagnosticCode.FHIR_VALUE_SET_UNKNOWN_CODE, subject,
                           f"Code '{code}' is not a known code of {system}")
