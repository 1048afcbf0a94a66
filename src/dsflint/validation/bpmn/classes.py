"""Implementation class checks backed by the type introspector."""

from dataclasses import dataclass

from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.utils.paths import is_blank
from dsflint.validation.framework import ClassLookupError, RuleContext


@dataclass(frozen=True)
class ClassRequirement:
    """A type the implementation class must extend or implement."""
    target: str
    code: DiagnosticCode
    severity: Severity = Severity.ERROR
    extends: bool = False

    def describe(self) -> str:
        relation = "extend" if self.extends else "implement"
        return f"{relation} {self.target.rsplit('.', 1)[-1]}"


def class_lookup_failed(context: RuleContext, sink: DiagnosticSink, subject: str, error: ClassLookupError) -> None:
    context.record_failure(error, "class lookup", "TypeIntrospector", sink.file, subject)
    sink.error(DiagnosticCode.CLASS_LOOKUP_FAILED, subject, f"Class lookup failed: {error}")


def check_class(
    class_name: str,
    subject: str,
    context: RuleContext,
    sink: DiagnosticSink,
    not_found_code: DiagnosticCode,
    requirements: list[ClassRequirement],
) -> bool:
    """Check that ``class_name`` exists and meets every requirement.

    Requirements are only checked for a class that exists. Returns False when
    the class could not be confirmed.
    """
    if context.introspector is None:
        sink.info(DiagnosticCode.CLASS_CHECK_SKIPPED, subject, f"No class index available; {class_name} not checked")
        return False

    try:
        if not context.class_exists(class_name):
            sink.error(not_found_code, subject, f"Class {class_name} not found")
            return False
        sink.success(subject, f"Class {class_name} found")

        for requirement in requirements:
            if requirement.extends:
                satisfied = context.is_subclass_of(class_name, requirement.target)
            else:
                satisfied = context.implements(class_name, requirement.target)
            if satisfied:
                sink.success(subject, f"{class_name} does {requirement.describe()}")
            else:
                sink.add(requirement.severity, requirement.code, subject,
                         f"{class_name} does not {requirement.describe()}")
    except ClassLookupError as e:
        class_lookup_failed(context, sink, subject, e)
        return False
    return True


def check_implementation_class(
    node,
    context: RuleContext,
    sink: DiagnosticSink,
    empty_code: DiagnosticCode,
    not_found_code: DiagnosticCode,
    requirements: list[ClassRequirement],
    missing_code: DiagnosticCode | None = None,
) -> None:
    """Presence, existence and type checks for a node's ``camunda:class``."""
    class_name = node.implementation_class
    if class_name is None and missing_code is not None:
        sink.error(missing_code, node.id, "No implementation class declared")
        return
    if is_blank(class_name):
        sink.error(empty_code, node.id, "Implementation class is empty")
        return
    check_class(class_name.strip(), node.id, context, sink, not_found_code, requirements)
