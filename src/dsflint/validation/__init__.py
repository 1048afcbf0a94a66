"""Rule framework, rule engines and plugin definition checks."""

from dsflint.validation.bpmn import ProcessGraphRuleEngine, default_node_rules
from dsflint.validation.fhir import ResourceDocumentRuleEngine, default_resource_rules
from dsflint.validation.framework import ClassLookupError, NodeRule, ResourceRule, RuleContext
from dsflint.validation.references import check_unit_references

__all__ = [
    "ClassLookupError",
    "NodeRule",
    "ProcessGraphRuleEngine",
    "ResourceDocumentRuleEngine",
    "ResourceRule",
    "RuleContext",
    "check_unit_references",
    "default_node_rules",
    "default_resource_rules",
]
