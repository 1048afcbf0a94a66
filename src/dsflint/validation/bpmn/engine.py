"""Process graph rule engine.

Dispatches each node to the rules registered for its kind. Rules only read
the node, its graph and the shared read-only context, so nodes can be
evaluated in any order.
"""

import logging

from dsflint.constants import PROCESS_ID_PATTERN
from dsflint.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, SubjectKind
from dsflint.models.process import NodeKind, ProcessFile, ProcessGraph, ProcessNode
from dsflint.utils.paths import is_blank
from dsflint.validation.bpmn.events import (
    BoundaryEventRule,
    EndEventRule,
    IntermediateCatchEventRule,
    IntermediateThrowEventRule,
    StartEventRule,
)
from dsflint.validation.bpmn.flows import FloatingElementRule, GatewayRule, SequenceFlowRule, SubProcessRule
from dsflint.validation.bpmn.listeners import ExecutionListenerRule
from dsflint.validation.bpmn.tasks import ReceiveTaskRule, SendTaskRule, ServiceTaskRule, UserTaskRule
from dsflint.validation.framework import NodeRule, RuleContext, run_guarded

logger = logging.getLogger(__name__)


def default_node_rules() -> list[NodeRule]:
    return [
        StartEventRule(),
        EndEventRule(),
        IntermediateThrowEventRule(),
        IntermediateCatchEventRule(),
        BoundaryEventRule(),
        ServiceTaskRule(),
        SendTaskRule(),
        UserTaskRule(),
        ReceiveTaskRule(),
        GatewayRule(),
        SequenceFlowRule(),
        SubProcessRule(),
        ExecutionListenerRule(),
        FloatingElementRule(),
    ]


class ProcessGraphRuleEngine:
    """Evaluates BPMN process files against the node rules."""

    def __init__(self, rules: list[NodeRule] | None = None):
        self.rules = list(rules) if rules is not None else default_node_rules()
        self._rules_by_kind: dict[NodeKind, list[NodeRule]] = {}
        for rule in self.rules:
            for kind in rule.kinds:
                self._rules_by_kind.setdefault(kind, []).append(rule)

    def evaluate_file(self, process_file: ProcessFile, context: RuleContext) -> list[Diagnostic]:
        """File level checks followed by every process of the file."""
        sink = DiagnosticSink(SubjectKind.BPMN, file=process_file.file, unit_id=context.unit_id)
        count = len(process_file.processes)
        if count == 0:
            sink.error(DiagnosticCode.BPMN_FILE_NO_PROCESS, process_file.file, "BPMN file contains no process")
        elif count > 1:
            sink.error(DiagnosticCode.BPMN_FILE_MULTIPLE_PROCESSES, process_file.file,
                       f"BPMN file contains {count} processes; expected exactly one")
        else:
            sink.success(process_file.file, "BPMN file contains exactly one process")

        for graph in process_file.processes:
            sink.extend(self.evaluate(graph, context))
        return sink.diagnostics

    def evaluate(self, graph: ProcessGraph, context: RuleContext) -> list[Diagnostic]:
        sink = DiagnosticSink(SubjectKind.BPMN, file=graph.file, unit_id=context.unit_id,
                              process_id=graph.process_id)
        self._check_process(graph, sink)
        for node in graph.nodes:
            self.evaluate_node(node, graph, context, sink)

        logger.debug(f"Evaluated {len(graph.nodes)} nodes of process {graph.process_id}: "
                     f"{len(sink.diagnostics)} diagnostics")
        return sink.diagnostics

    def evaluate_node(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext,
                      sink: DiagnosticSink) -> None:
        for rule in self._rules_by_kind.get(node.kind, []):
            if not rule.applies_to(node, graph):
                continue
            run_guarded(rule.name, node.id, context, sink,
                        lambda rule=rule: rule.check(node, graph, context, sink))

    def _check_process(self, graph: ProcessGraph, sink: DiagnosticSink) -> None:
        subject = graph.process_id or graph.file
        if is_blank(graph.process_id):
            sink.error(DiagnosticCode.BPMN_PROCESS_ID_EMPTY, subject, "Process has no id")
        elif not PROCESS_ID_PATTERN.match(graph.process_id):
            sink.error(DiagnosticCode.BPMN_PROCESS_ID_PATTERN_MISMATCH, subject,
                       f"Process id '{graph.process_id}' does not match <domain>_<processName>")
        else:
            sink.success(subject, f"Process id '{graph.process_id}' is valid")

        if graph.is_executable:
            sink.success(subject, "Process is executable")
        else:
            sink.error(DiagnosticCode.BPMN_PROCESS_NOT_EXECUTABLE, subject, "Process is not marked isExecutable")

        if is_blank(graph.history_time_to_live):
            sink.warn(DiagnosticCode.BPMN_PROCESS_HISTORY_TIME_TO_LIVE_MISSING, subject,
                      "Process has no camunda:historyTimeToLive")
        else:
            sink.success(subject, f"History time to live is {graph.history_time_to_live}")
