"""Questionnaire rules."""

from dsflint.constants import LINK_ID_PATTERN, QUESTIONNAIRE_PROFILE_PATTERN, USER_TASK_ID_LINK_ID
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.resource import ResourceDocument, ResourceKind, children, first
from dsflint.utils.paths import is_blank
from dsflint.validation.fhir.common import check_placeholder, check_status_unknown, read_access_codes, subject_of
from dsflint.validation.framework import ResourceRule, RuleContext

QUESTIONNAIRE_READ_ACCESS_CODES = frozenset({"ALL", "LOCAL", "ORGANIZATION", "ROLE"})


def questionnaire_items(node) -> list[dict]:
    """All items, nested groups included, in document order."""
    items = []
    for item in children(node, "item"):
        if isinstance(item, dict):
            items.append(item)
            items.extend(questionnaire_items(item))
    return items


class QuestionnaireRule(ResourceRule):
    kind = ResourceKind.QUESTIONNAIRE

    @property
    def name(self) -> str:
        return "questionnaire"

    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        subject = subject_of(document)

        profiles = document.values("meta", "profile")
        if not profiles:
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_MISSING_META_PROFILE, subject, "meta.profile is missing")
        elif not any(QUESTIONNAIRE_PROFILE_PATTERN.match(profile) for profile in profiles):
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_INVALID_META_PROFILE, subject,
                       f"meta.profile must be the DSF questionnaire profile with a version, found {profiles[0]}")
        else:
            sink.success(subject, "meta.profile is the versioned questionnaire profile")

        if any(code in QUESTIONNAIRE_READ_ACCESS_CODES for code in read_access_codes(document)):
            sink.success(subject, "Read-access tag is present")
        else:
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_MISSING_READ_ACCESS_TAG, subject,
                       "No read-access tag with ALL, LOCAL, ORGANIZATION or ROLE")

        check_status_unknown(document, sink, DiagnosticCode.FHIR_QUESTIONNAIRE_INVALID_STATUS)
        check_placeholder(document, sink, "version", DiagnosticCode.FHIR_QUESTIONNAIRE_VERSION_NO_PLACEHOLDER)
        check_placeholder(document, sink, "date", DiagnosticCode.FHIR_QUESTIONNAIRE_DATE_NO_PLACEHOLDER)
        self._check_items(document, subject, sink)

    def _check_items(self, document: ResourceDocument, subject: str, sink: DiagnosticSink) -> None:
        items = questionnaire_items(document.fields)
        if not items:
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_MISSING_ITEM, subject, "Questionnaire has no item")
            return

        seen: set[str] = set()
        for index, item in enumerate(items, start=1):
            link_id = first(item, "linkId")
            if is_blank(link_id):
                sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_ITEM_MISSING_LINK_ID, subject,
                           f"Item #{index} has no linkId")
                continue
            item_type = first(item, "type")
            if is_blank(item_type):
                sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_ITEM_MISSING_TYPE, subject,
                           f"Item '{link_id}' has no type")
                continue
            if is_blank(first(item, "text")):
                sink.info(DiagnosticCode.FHIR_QUESTIONNAIRE_ITEM_MISSING_TEXT, subject, f"Item '{link_id}' has no text")

            if link_id in seen:
                sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_DUPLICATE_LINK_ID, subject,
                           f"linkId '{link_id}' is used more than once")
                continue
            seen.add(link_id)

            if not LINK_ID_PATTERN.match(link_id):
                sink.warn(DiagnosticCode.FHIR_QUESTIONNAIRE_UNUSUAL_LINK_ID, subject,
                          f"linkId '{link_id}' is not lower-case kebab case")

            if link_id == USER_TASK_ID_LINK_ID:
                self._check_user_task_id(item, item_type, subject, sink)
            else:
                sink.success(subject, f"Item '{link_id}' is valid")

    def _check_user_task_id(self, item: dict, item_type: str, subject: str, sink: DiagnosticSink) -> None:
        valid = True
        if item_type != "string":
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE, subject,
                       f"Item '{USER_TASK_ID_LINK_ID}' must have type 'string', found '{item_type}'")
            valid = False
        if first(item, "required") != "true":
            sink.error(DiagnosticCode.FHIR_QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED, subject,
                       f"Item '{USER_TASK_ID_LINK_ID}' must be required")
            valid = False
        if valid:
            sink.success(subject, f"Mandatory item '{USER_TASK_ID_LINK_ID}' is valid")
