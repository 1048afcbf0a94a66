"""Data models for process graphs, resource documents and plugin units."""

from dsflint.models.process import (
    ConditionalDefinition,
    ErrorDefinition,
    FieldInjection,
    Listener,
    MessageDefinition,
    NodeKind,
    ProcessFile,
    ProcessGraph,
    ProcessNode,
    SignalDefinition,
    TimerDefinition,
)
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.models.unit import Unit

__all__ = [
    "ConditionalDefinition",
    "ErrorDefinition",
    "FieldInjection",
    "Listener",
    "MessageDefinition",
    "NodeKind",
    "ProcessFile",
    "ProcessGraph",
    "ProcessNode",
    "ResourceDocument",
    "ResourceKind",
    "SignalDefinition",
    "TimerDefinition",
    "Unit",
]
