"""Rules for gateways, sequence flows, sub processes and graph connectivity."""

from dsflint.diagnostics import DiagnosticCode, DiagnosticSink
from dsflint.models.process import NodeKind, ProcessGraph, ProcessNode
from dsflint.utils.paths import is_blank
from dsflint.validation.framework import NodeRule, RuleContext

CHOICE_GATEWAYS = (NodeKind.EXCLUSIVE_GATEWAY, NodeKind.INCLUSIVE_GATEWAY)

_GATEWAY_NAME_CODES = {
    NodeKind.EXCLUSIVE_GATEWAY: DiagnosticCode.BPMN_EXCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY,
    NodeKind.INCLUSIVE_GATEWAY: DiagnosticCode.BPMN_INCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY,
}


class GatewayRule(NodeRule):
    """A splitting exclusive or inclusive gateway should be named."""

    kinds = CHOICE_GATEWAYS

    @property
    def name(self) -> str:
        return "gateway"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        outgoing = graph.outgoing_flows(node)
        if len(outgoing) <= 1:
            sink.success(node.id, "Gateway does not split")
        elif is_blank(node.name):
            sink.warn(_GATEWAY_NAME_CODES[node.kind], node.id,
                      f"Gateway has {len(outgoing)} outgoing flows but no name")
        else:
            sink.success(node.id, f"Splitting gateway name '{node.name}' is set")


class SequenceFlowRule(NodeRule):
    kinds = (NodeKind.SEQUENCE_FLOW,)

    @property
    def name(self) -> str:
        return "sequence_flow"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        source = graph.source_of(node)
        if source is None:
            sink.error(DiagnosticCode.BPMN_SEQUENCE_FLOW_SOURCE_MISSING, node.id,
                       f"Sequence flow source '{node.source_ref or ''}' does not exist")
            return
        sink.success(node.id, f"Sequence flow source '{source.id}' exists")

        is_default = source.default_flow == node.id
        has_condition = not is_blank(node.condition_expression)
        if is_default and has_condition:
            sink.warn(DiagnosticCode.BPMN_SEQUENCE_FLOW_DEFAULT_HAS_CONDITION, node.id,
                      "Default flow carries a condition expression that is never evaluated")

        if len(graph.outgoing_flows(source)) <= 1:
            return

        if is_blank(node.name):
            sink.warn(DiagnosticCode.BPMN_SEQUENCE_FLOW_AMBIGUOUS_NAME_IS_EMPTY, node.id,
                      f"One of several flows leaving '{source.display_name}' has no name")
        else:
            sink.success(node.id, f"Sequence flow name '{node.name}' is set")

        if source.kind in CHOICE_GATEWAYS and not is_default:
            if has_condition:
                sink.success(node.id, "Conditional flow has a condition expression")
            else:
                sink.error(DiagnosticCode.BPMN_SEQUENCE_FLOW_MISSING_CONDITION, node.id,
                           f"Non-default flow leaving gateway '{source.display_name}' has no condition")


class SubProcessRule(NodeRule):
    kinds = (NodeKind.SUB_PROCESS,)

    @property
    def name(self) -> str:
        return "sub_process"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        if not node.multi_instance:
            sink.success(node.id, "Sub process is not multi-instance")
            return
        loop_async = node.attributes.get("multiInstanceAsyncBefore", "false").lower() == "true"
        if node.async_before or loop_async:
            sink.success(node.id, "Multi-instance sub process is asyncBefore")
        else:
            sink.warn(DiagnosticCode.BPMN_SUB_PROCESS_HAS_MULTI_INSTANCE_BUT_IS_NOT_ASYNC_BEFORE_TRUE, node.id,
                      "Multi-instance sub process should have asyncBefore=true")


class FloatingElementRule(NodeRule):
    """Flow nodes must be connected by at least one sequence flow."""

    kinds = tuple(kind for kind in NodeKind if kind != NodeKind.SEQUENCE_FLOW)

    @property
    def name(self) -> str:
        return "floating_element"

    def applies_to(self, node: ProcessNode, graph: ProcessGraph) -> bool:
        if node.kind == NodeKind.SUB_PROCESS and node.attributes.get("triggeredByEvent", "false").lower() == "true":
            return False
        return node.kind in self.kinds

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        if node.incoming or node.outgoing:
            sink.success(node.id, "Element is connected")
        else:
            sink.warn(DiagnosticCode.BPMN_FLOATING_ELEMENT, node.id,
                      f"{node.kind.value} '{node.display_name}' is not connected to any sequence flow")
