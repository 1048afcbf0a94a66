"""Diagnostics: severities, rule codes, reports and collaborator error collection."""

from .codes import DiagnosticCode
from .error_collector import ErrorCollector, ErrorContext, ErrorSeverity
from .model import (
    Diagnostic,
    DiagnosticSink,
    Severity,
    SubjectKind,
    UnitReport,
    ValidationStatus,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "ErrorCollector",
    "ErrorContext",
    "ErrorSeverity",
    "Severity",
    "SubjectKind",
    "UnitReport",
    "ValidationStatus",
]
