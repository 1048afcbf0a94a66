"""FHIR resource document rules."""

from dsflint.validation.fhir.engine import ResourceDocumentRuleEngine, default_resource_rules

__all__ = ["ResourceDocumentRuleEngine", "default_resource_rules"]
