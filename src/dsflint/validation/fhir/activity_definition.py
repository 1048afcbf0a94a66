"""ActivityDefinition rules."""

from dsflint.constants import (
    ACTIVITY_DEFINITION_PROFILE,
    ACTIVITY_DEFINITION_URL_PATTERN,
    CS_PROCESS_AUTHORIZATION,
    CS_READ_ACCESS_TAG,
    EXTENSION_PROCESS_AUTHORIZATION,
)
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.resource import ResourceDocument, ResourceKind, children, find_extensions, first, walk
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import check_status_unknown, subject_of
from dsflint.validation.framework import ResourceRule, RuleContext

REQUESTER = "requester"
RECIPIENT = "recipient"


class ActivityDefinitionRule(ResourceRule):
    kind = ResourceKind.ACTIVITY_DEFINITION

    @property
    def name(self) -> str:
        return "activity_definition"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)
        self._check_url(document, subject, sink)

        if is_blank(document.value("status")):
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_STATUS_EMPTY, subject, "Status is missing")
        else:
            check_status_unknown(document, sink, DiagnosticCode.FHIR_ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN)

        kind = document.value("kind")
        if is_blank(kind):
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_KIND_EMPTY, subject, "Kind is missing")
        elif kind != "Task":
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_KIND_NOT_TASK, subject,
                       f"Kind must be 'Task', found '{kind}'")
        else:
            sink.success(subject, "Kind is 'Task'")

        self._check_profile(document, subject, sink)
        self._check_access_tag(document, subject, sink)
        self._check_authorizations(document, subject, context, sink)

    def _check_url(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        url = document.value("url")
        if is_blank(url):
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_URL_EMPTY, subject, "Url is missing")
        elif not ACTIVITY_DEFINITION_URL_PATTERN.match(url):
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_INVALID_URL_PATTERN, subject,
                       f"Url '{url}' does not match http[s]://<host>/bpe/Process/<processName>")
        else:
            sink.success(subject, f"Url '{url}' is valid")

    def _check_profile(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        profiles = [p for p in document.values("meta", "profile") if p.startswith(ACTIVITY_DEFINITION_PROFILE)]
        if not profiles:
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_MISSING_PROFILE, subject,
                       f"meta.profile must reference {ACTIVITY_DEFINITION_PROFILE}")
        elif "|" in profiles[0]:
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_PROFILE_HAS_VERSION, subject,
                       f"meta.profile '{profiles[0]}' must not carry a version")
        else:
            sink.success(subject, "meta.profile is the ActivityDefinition profile")

    def _check_access_tag(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        tags = document.elements("meta", "tag")
        if not tags:
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_MISSING_ACCESS_TAG, subject, "meta.tag is missing")
            return
        tag = tags[0]
        if first(tag, "system") == CS_READ_ACCESS_TAG and first(tag, "code") == "ALL":
            sink.success(subject, "First meta.tag is read-access ALL")
        else:
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_INVALID_ACCESS_TAG, subject,
                       f"First meta.tag must be {CS_READ_ACCESS_TAG}|ALL")

    def _check_authorizations(self, document: ResourceDocument, subject: str, context: RuleContext,
                              sink: DiagnosticSink) -> None:
        authorizations = find_extensions(document.fields, EXTENSION_PROCESS_AUTHORIZATION)
        if not authorizations:
            sink.error(DiagnosticCode.FHIR_ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION, subject,
                       "No process-authorization extension declared")
            return

        for index, authorization in enumerate(authorizations, start=1):
            entry = f"{subject} authorization #{index}"
            for role, missing_code, invalid_code in (
                (REQUESTER, DiagnosticCode.FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_REQUESTER,
                 DiagnosticCode.FHIR_ACTIVITY_DEFINITION_INVALID_REQUESTER),
                (RECIPIENT, DiagnosticCode.FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT,
                 DiagnosticCode.FHIR_ACTIVITY_DEFINITION_INVALID_RECIPIENT),
            ):
                sub_extensions = [ext for ext in children(authorization, "extension")
                                  if isinstance(ext, dict) and ext.get("url") == role]
                if not sub_extensions:
                    sink.error(missing_code, entry, f"Authorization declares no {role}")
                    continue
                for sub_extension in sub_extensions:
                    check_authorization_coding(sub_extension, role, entry, invalid_code, context, sink)


def check_authorization_coding(sub_extension: dict, role: str, subject: str, invalid_code: DiagnosticCode,
                               context: RuleContext, sink: DiagnosticSink) -> None:
    """Exactly one diagnostic per requester / recipient sub-extension."""
    coding = next((c for c in children(sub_extension, "valueCoding") if isinstance(c, dict)), None)
    system = first(coding, "system") if coding else None
    code = first(coding, "code") if coding else None

    if is_blank(system) or is_blank(code):
        sink.error(invalid_code, subject, f"{role} has no valueCoding with system and code")
        return
    if system != CS_PROCESS_AUTHORIZATION:
        sink.error(invalid_code, subject, f"{role} coding system must be {CS_PROCESS_AUTHORIZATION}, found {system}")
        return
    if context.codes.is_unknown(system, code):
        sink.error(invalid_code, subject, f"{role} code '{code}' is not a known process-authorization code")
        return

    # organization / practitioner role codings nested in the coding's extensions
    for nested in walk(children(coding, "extension")):
        nested_system, nested_code = first(nested, "system"), first(nested, "code")
        if not (nested_system and nested_code):
            continue
        if context.codes.contains_system(nested_system) and context.codes.is_unknown(nested_system, nested_code):
            sink.error(invalid_code, subject, f"{role} uses unknown code '{nested_code}' of {nested_system}")
            return

    sink.success(subject, f"{role} {system}|{code} is valid")
