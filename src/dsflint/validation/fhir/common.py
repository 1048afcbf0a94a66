"""Helpers shared by the FHIR resource rules."""

from dataclasses import dataclass

from dsflint.constants import CS_READ_ACCESS_TAG, DATE_PLACEHOLDER, VERSION_PLACEHOLDER
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.resource import ResourceDocument, first
from dsflint.utils.paths import is_blank


@dataclass(frozen=True)
class Cardinality:
    """``min``/``max`` of an element definition; ``max`` None means unbounded."""
    min: int = 0
    max: int | None = None

    def allows(self, count: int) -> bool:
        return self.max is None or count <= self.max


def parse_min(value: str | None, default: int = 0) -> int:
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        return default


def parse_max(value: str | None) -> int | None:
    if value in (None, "", "*"):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def cardinality_of(element: dict) -> Cardinality:
    return Cardinality(parse_min(first(element, "min")), parse_max(first(element, "max")))


def differential_elements(document: ResourceDocument) -> list[dict]:
    return [element for element in document.elements("differential", "element") if isinstance(element, dict)]


def slice_cardinalities(document: ResourceDocument) -> dict[str, tuple[Cardinality | None, dict[str, Cardinality]]]:
    """Per sliced element id: the base cardinality (if declared) and each slice's cardinality.

    Only direct slices count: ``Task.input:message-name`` is a slice of
    ``Task.input``; ``Task.input:message-name.value[x]`` is not.
    """
    elements = {element.get("id"): element for element in differential_elements(document) if element.get("id")}
    result: dict[str, tuple[Cardinality | None, dict[str, Cardinality]]] = {}
    for element_id, element in elements.items():
        base_id, separator, slice_name = element_id.rpartition(":")
        if not separator or not slice_name or "." in slice_name or "/" in slice_name:
            continue
        base = elements.get(base_id)
        entry = result.setdefault(base_id, (cardinality_of(base) if base is not None else None, {}))
        entry[1][slice_name] = cardinality_of(element)
    return result


def read_access_codes(document: ResourceDocument) -> list[str]:
    """Codes of the ``meta.tag`` entries using the read-access tag system."""
    return [
        first(tag, "code") or ""
        for tag in document.elements("meta", "tag")
        if first(tag, "system") == CS_READ_ACCESS_TAG
    ]


def subject_of(document: ResourceDocument) -> str:
    return document.reference()


def check_required(document: ResourceDocument, sink: DiagnosticSink, element: str, code: DiagnosticCode,
                   severity: Severity = Severity.ERROR) -> str | None:
    value = document.value(element)
    if is_blank(value):
        sink.add(severity, code, subject_of(document), f"Element '{element}' is missing")
        return None
    sink.success(subject_of(document), f"Element '{element}' is present")
    return value


def check_status_unknown(document: ResourceDocument, sink: DiagnosticSink, code: DiagnosticCode) -> None:
    status = document.value("status")
    if status == "unknown":
        sink.success(subject_of(document), "Status is 'unknown'")
    else:
        sink.error(code, subject_of(document), f"Status must be 'unknown', found '{status or ''}'")


def check_placeholder(document: ResourceDocument, sink: DiagnosticSink, element: str, code: DiagnosticCode,
                      severity: Severity = Severity.ERROR, optional: bool = False) -> None:
    """``version`` must be ``#{version}`` and ``date`` must be ``#{date}``."""
    expected = VERSION_PLACEHOLDER if element == "version" else DATE_PLACEHOLDER
    value = document.value(element)
    if value is None and optional:
        return
    if value == expected:
        sink.success(subject_of(document), f"Element '{element}' is {expected}")
    else:
        sink.add(severity, code, subject_of(document), f"Element '{element}' must be {expected}, found '{value or ''}'")
