"""Diagnostic data model.

Every rule evaluation ends in at least one diagnostic: a Success item when
the check passed, otherwise one item per problem found.
"""

from dataclasses import dataclass, field
from enum import Enum

from .codes import DiagnosticCode


class Severity(str, Enum):
    """Graded outcome of a single check."""
    SUCCESS = "success"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.SUCCESS: 0,
    Severity.INFO: 1,
    Severity.WARN: 2,
    Severity.ERROR: 3,
}


class SubjectKind(str, Enum):
    """Kind of document a diagnostic is about."""
    BPMN = "bpmn"
    FHIR = "fhir"
    PLUGIN = "plugin"


@dataclass(frozen=True)
class Diagnostic:
    """A single graded finding."""
    severity: Severity
    code: DiagnosticCode
    subject: str
    message: str
    kind: SubjectKind
    file: str | None = None
    unit_id: str | None = None
    process_id: str | None = None

    def __str__(self) -> str:
        location = ""
        if self.file:
            location += f" in {self.file}"
        if self.process_id:
            location += f" (process {self.process_id})"
        return f"[{self.severity.value.upper()}] {self.code.value} {self.subject}: {self.message}{location}"

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "kind": self.kind.value,
            "subject": self.subject,
            "message": self.message,
            "file": self.file,
            "unitId": self.unit_id,
            "processId": self.process_id,
        }


@dataclass
class DiagnosticSink:
    """Collects diagnostics for one document, stamping shared location data."""
    kind: SubjectKind
    file: str | None = None
    unit_id: str | None = None
    process_id: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, severity: Severity, code: DiagnosticCode, subject: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(
            severity=severity,
            code=code,
            subject=subject,
            message=message,
            kind=self.kind,
            file=self.file,
            unit_id=self.unit_id,
            process_id=self.process_id,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def success(self, subject: str, message: str) -> Diagnostic:
        return self.add(Severity.SUCCESS, DiagnosticCode.SUCCESS, subject, message)

    def info(self, code: DiagnosticCode, subject: str, message: str) -> Diagnostic:
        return self.add(Severity.INFO, code, subject, message)

    def warn(self, code: DiagnosticCode, subject: str, message: str) -> Diagnostic:
        return self.add(Severity.WARN, code, subject, message)

    def error(self, code: DiagnosticCode, subject: str, message: str) -> Diagnostic:
        return self.add(Severity.ERROR, code, subject, message)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)


class ValidationStatus(str, Enum):
    """Overall status of a unit or run."""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass
class UnitReport:
    """Diagnostics of one plugin unit."""
    unit_id: str
    status: ValidationStatus = ValidationStatus.PASS
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

        # fail > warn > pass
        if diagnostic.severity == Severity.ERROR:
            self.status = ValidationStatus.FAIL
        elif diagnostic.severity == Severity.WARN and self.status == ValidationStatus.PASS:
            self.status = ValidationStatus.WARN

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def count(self, severity: Severity) -> int:
        return sum(1 for d in self.diagnostics if d.severity == severity)

    def problems(self) -> list[Diagnostic]:
        """Diagnostics other than Success items."""
        return [d for d in self.diagnostics if d.severity != Severity.SUCCESS]

    def to_dict(self, include_success: bool = True) -> dict:
        diagnostics = self.diagnostics if include_success else self.problems()
        return {
            "unitId": self.unit_id,
            "status": self.status.value,
            "counts": {severity.value: self.count(severity) for severity in Severity},
            "diagnostics": [d.to_dict() for d in diagnostics],
        }
