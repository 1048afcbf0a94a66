"""Typed process graph model.

Graphs are built once by the BPMN parser and are read-only afterwards. The
parent SubProcess of a node is kept as an id and looked up through the
owning graph, never as an object reference.
"""

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    """Closed set of process element kinds (BPMN local tag names)."""
    START_EVENT = "startEvent"
    END_EVENT = "endEvent"
    INTERMEDIATE_THROW_EVENT = "intermediateThrowEvent"
    INTERMEDIATE_CATCH_EVENT = "intermediateCatchEvent"
    BOUNDARY_EVENT = "boundaryEvent"
    SERVICE_TASK = "serviceTask"
    SEND_TASK = "sendTask"
    RECEIVE_TASK = "receiveTask"
    USER_TASK = "userTask"
    SCRIPT_TASK = "scriptTask"
    SUB_PROCESS = "subProcess"
    EXCLUSIVE_GATEWAY = "exclusiveGateway"
    INCLUSIVE_GATEWAY = "inclusiveGateway"
    PARALLEL_GATEWAY = "parallelGateway"
    EVENT_BASED_GATEWAY = "eventBasedGateway"
    SEQUENCE_FLOW = "sequenceFlow"


@dataclass(frozen=True)
class MessageDefinition:
    message_name: str | None = None
    message_ref: str | None = None


@dataclass(frozen=True)
class TimerDefinition:
    time_date: str | None = None
    time_cycle: str | None = None
    time_duration: str | None = None


@dataclass(frozen=True)
class SignalDefinition:
    signal_name: str | None = None
    signal_ref: str | None = None


@dataclass(frozen=True)
class ConditionalDefinition:
    variable_name: str | None = None
    variable_events: str | None = None
    condition_type: str | None = None
    expression: str | None = None


@dataclass(frozen=True)
class ErrorDefinition:
    error_ref: str | None = None
    error_name: str | None = None
    error_code: str | None = None
    error_code_variable: str | None = None


EventDefinition = MessageDefinition | TimerDefinition | SignalDefinition | ConditionalDefinition | ErrorDefinition


@dataclass(frozen=True)
class FieldInjection:
    """A ``camunda:field`` entry; either a string literal or an expression."""
    name: str
    value: str | None = None
    is_expression: bool = False


@dataclass(frozen=True)
class Listener:
    """An execution or task listener declared on an element."""
    class_name: str | None
    event: str | None = None
    input_parameters: tuple[tuple[str, str | None], ...] = ()

    def parameter(self, name: str) -> str | None:
        for key, value in self.input_parameters:
            if key == name:
                return value
        return None

    def has_parameter(self, name: str) -> bool:
        return any(key == name for key, _ in self.input_parameters)


@dataclass(frozen=True)
class ProcessNode:
    """One element of a process graph."""
    id: str
    kind: NodeKind
    name: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    event_definition: EventDefinition | None = None
    field_injections: tuple[FieldInjection, ...] = ()
    execution_listeners: tuple[Listener, ...] = ()
    task_listeners: tuple[Listener, ...] = ()
    incoming: tuple[str, ...] = ()
    outgoing: tuple[str, ...] = ()
    parent_id: str | None = None

    @property
    def implementation_class(self) -> str | None:
        return self.attributes.get("class")

    @property
    def form_key(self) -> str | None:
        return self.attributes.get("formKey")

    @property
    def async_before(self) -> bool:
        return self.attributes.get("asyncBefore", "false").lower() == "true"

    @property
    def async_after(self) -> bool:
        return self.attributes.get("asyncAfter", "false").lower() == "true"

    @property
    def multi_instance(self) -> bool:
        return self.attributes.get("multiInstance", "false").lower() == "true"

    @property
    def source_ref(self) -> str | None:
        return self.attributes.get("sourceRef")

    @property
    def default_flow(self) -> str | None:
        return self.attributes.get("default")

    @property
    def condition_expression(self) -> str | None:
        return self.attributes.get("conditionExpression")

    @property
    def display_name(self) -> str:
        return self.name if self.name and self.name.strip() else self.id


@dataclass(frozen=True)
class ProcessGraph:
    """A single ``<process>`` with its nodes in document order."""
    process_id: str | None
    file: str
    is_executable: bool = True
    history_time_to_live: str | None = None
    nodes: tuple[ProcessNode, ...] = ()
    _index: dict[str, ProcessNode] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {node.id: node for node in self.nodes})

    def node(self, node_id: str | None) -> ProcessNode | None:
        if node_id is None:
            return None
        return self._index.get(node_id)

    def parent_of(self, node: ProcessNode) -> ProcessNode | None:
        return self.node(node.parent_id)

    def is_in_sub_process(self, node: ProcessNode) -> bool:
        parent = self.parent_of(node)
        return parent is not None and parent.kind == NodeKind.SUB_PROCESS

    def source_of(self, flow: ProcessNode) -> ProcessNode | None:
        return self.node(flow.source_ref)

    def outgoing_flows(self, node: ProcessNode) -> list[ProcessNode]:
        return [flow for flow_id in node.outgoing if (flow := self.node(flow_id)) is not None]


@dataclass(frozen=True)
class ProcessFile:
    """All processes parsed from one BPMN file."""
    file: str
    processes: tuple[ProcessGraph, ...] = ()
