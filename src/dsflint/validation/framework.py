"""Rule framework shared by the BPMN and FHIR rule engines.

Rules are small classes registered per node kind or resource kind. Every
rule runs inside a guard: an exception raised by a rule is logged, recorded
in the run's ErrorCollector and turned into a ``RULE_EXECUTION_FAILED``
diagnostic, so sibling rules and sibling documents are still evaluated.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dsflint.authorization import AuthorizationCodeCache
from dsflint.constants import ApiVersion
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, ErrorCollector, ErrorContext
from dsflint.introspection import TypeIntrospector
from dsflint.models.process import NodeKind, ProcessGraph, ProcessNode
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.resources.catalog import ResourceCatalog
from dsflint.resources.resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class ClassLookupError(Exception):
    """The introspector failed while answering a class question."""


@dataclass
class RuleContext:
    """Read-only inputs shared by every rule evaluated for one unit."""
    unit_id: str
    api_version: ApiVersion
    catalog: ResourceCatalog
    resolver: ReferenceResolver
    codes: AuthorizationCodeCache
    introspector: TypeIntrospector | None = None
    errors: ErrorCollector | None = None

    def record_failure(self, error: Exception, operation: str, component: str,
                       file: str | None = None, subject: str | None = None) -> None:
        """Log a collaborator or rule failure and keep it for the run report."""
        logger.warning(f"{component} failed during {operation} for {subject or file}: {error}")
        if self.errors is not None:
            self.errors.collect_error(
                error,
                ErrorContext(
                    operation=operation,
                    component=component,
                    unit_id=self.unit_id,
                    file=file,
                    subject=subject,
                ),
            )

    # Introspector access; failures are re-raised as ClassLookupError

    def class_exists(self, class_name: str) -> bool:
        return self._ask("class_exists", class_name)

    def implements(self, class_name: str, interface_name: str) -> bool:
        return self._ask("implements", class_name, interface_name)

    def is_subclass_of(self, class_name: str, super_name: str) -> bool:
        return self._ask("is_subclass_of", class_name, super_name)

    def _ask(self, question: str, *args: str) -> bool:
        try:
            return bool(getattr(self.introspector, question)(*args))
        except Exception as e:
            raise ClassLookupError(f"{question}({', '.join(args)}) failed: {e}") from e


class NodeRule(ABC):
    """Rule evaluated for every process node of the kinds it declares."""

    kinds: tuple[NodeKind, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""

    @abstractmethod
    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        """Append the diagnostics for ``node`` to ``sink``."""

    def applies_to(self, node: ProcessNode, graph: ProcessGraph) -> bool:
        return node.kind in self.kinds


class ResourceRule(ABC):
    """Rule evaluated for every resource document of one kind."""

    kind: ResourceKind = ResourceKind.OTHER

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""

    @abstractmethod
    def check(self, document: ResourceDocument, context: RuleContext, sink: DiagnosticSink) -> None:
        """Append the diagnostics for ``document`` to ``sink``."""


def run_guarded(rule_name: str, subject: str, context: RuleContext, sink: DiagnosticSink, check) -> None:
    """Run ``check()``; a raised exception becomes a diagnostic instead of propagating."""
    try:
        check()
    except ClassLookupError as e:
        context.record_failure(e, "class lookup", rule_name, sink.file, subject)
        sink.error(DiagnosticCode.CLASS_LOOKUP_FAILED, subject, f"Class lookup failed: {e}")
    except Exception as e:
        logger.error(f"Rule {rule_name} failed on {subject}: {e}")
        context.record_failure(e, "rule execution", rule_name, sink.file, subject)
        sink.error(DiagnosticCode.RULE_EXECUTION_FAILED, subject, f"Rule execution failed: {e}")
