"""BPMN process graph rules."""

from dsflint.validation.bpmn.engine import ProcessGraphRuleEngine, default_node_rules

__all__ = ["ProcessGraphRuleEngine", "default_node_rules"]
