"""Resource document rule engine."""

import logging

from dsflint.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, SubjectKind
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.validation.fhir.activity_definition import ActivityDefinitionRule
from dsflint.validation.fhir.code_system import CodeSystemRule
from dsflint.validation.fhir.questionnaire import QuestionnaireRule
from dsflint.validation.fhir.structure_definition import StructureDefinitionRule
from dsflint.validation.fhir.task import TaskRule
from dsflint.validation.fhir.value_set import ValueSetRule
from dsflint.validation.framework import ResourceRule, RuleContext, run_guarded

logger = logging.getLogger(__name__)


def default_resource_rules() -> list[ResourceRule]:
    return [
        ActivityDefinitionRule(),
        StructureDefinitionRule(),
        QuestionnaireRule(),
        CodeSystemRule(),
        ValueSetRule(),
        TaskRule(),
    ]


class ResourceDocumentRuleEngine:
    """Evaluates FHIR resource documents, dispatching on the resource kind."""

    def __init__(self, rules: list[ResourceRule] | None = None):
        self.rules = list(rules) if rules is not None else default_resource_rules()
        self._rules_by_kind: dict[ResourceKind, list[ResourceRule]] = {}
        for rule in self.rules:
            self._rules_by_kind.setdefault(rule.kind, []).append(rule)

    def evaluate(self, document: ResourceDocument, context: RuleContext) -> list[Diagnostic]:
        sink = DiagnosticSink(SubjectKind.FHIR, file=document.path, unit_id=context.unit_id)
        subject = document.reference()

        if not document.parsed:
            sink.error(DiagnosticCode.PARSE_FAILURE, subject, f"Document could not be parsed: {document.parse_error}")
            return sink.diagnostics

        rules = self._rules_by_kind.get(document.resource_kind, [])
        if not rules:
            sink.info(DiagnosticCode.UNSUPPORTED_RESOURCE_KIND, subject,
                      f"No rules for resource type {document.resource_type or document.resource_kind.value}")
            return sink.diagnostics

        for rule in rules:
            run_guarded(rule.name, subject, context, sink,
                        lambda rule=rule: rule.check(document, context, sink))

        logger.debug(f"Evaluated {document.path}: {len(sink.diagnostics)} diagnostics")
        return sink.diagnostics
