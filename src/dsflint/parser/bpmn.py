"""BPMN 2.0 process model parser.

Builds typed :class:`ProcessGraph` objects from Camunda-flavoured BPMN XML.
Parsing happens in two passes per process: the first collects nodes and their
raw data in document order, the second wires ``incoming``/``outgoing`` from
the sequence flows before the immutable nodes are created.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from defusedxml.ElementTree import fromstring

from dsflint.errors import DocumentParseError
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
from dsflint.parser.fhir import document_key

logger = logging.getLogger(__name__)

BPMN_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/MODEL"
CAMUNDA_NAMESPACE = "http://camunda.org/schema/1.0/bpmn"

_BPMN = "{" + BPMN_NAMESPACE + "}"
_CAMUNDA = "{" + CAMUNDA_NAMESPACE + "}"

_NODE_KINDS = {kind.value: kind for kind in NodeKind}

# Camunda attributes copied into ProcessNode.attributes
_CAMUNDA_ATTRIBUTES = ("class", "formKey", "asyncBefore", "asyncAfter")
# Plain BPMN attributes copied into ProcessNode.attributes
_BPMN_ATTRIBUTES = (
    "sourceRef", "targetRef", "default", "attachedToRef", "cancelActivity", "messageRef", "triggeredByEvent",
)


def _camunda(name: str) -> str:
    return _CAMUNDA + name


def _bpmn(name: str) -> str:
    return _BPMN + name


def _text(element) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()


@dataclass
class _RootDefinitions:
    """Root-level ``message``, ``signal`` and ``error`` declarations by id."""
    messages: dict[str, str | None] = field(default_factory=dict)
    signals: dict[str, str | None] = field(default_factory=dict)
    errors: dict[str, tuple[str | None, str | None]] = field(default_factory=dict)


@dataclass
class _PendingNode:
    """Mutable node data collected during the first pass."""
    id: str
    kind: NodeKind
    name: str | None
    attributes: dict[str, str]
    event_definition: object
    field_injections: tuple[FieldInjection, ...]
    execution_listeners: tuple[Listener, ...]
    task_listeners: tuple[Listener, ...]
    parent_id: str | None
    incoming: list[str] = field(default_factory=list)
    outgoing: list[str] = field(default_factory=list)


class BpmnParser:
    """Parser for ``.bpmn`` process model files."""

    def parse_process_graph(self, file_path: Path, root: Path | None = None) -> ProcessFile:
        """Parse every ``<process>`` of a BPMN file.

        Raises:
            DocumentParseError: If the file cannot be read or is not BPMN
        """
        file_path = Path(file_path)
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise DocumentParseError(file_path, f"cannot read file: {e}") from e
        return self.parse_content(content, document_key(file_path, root))

    def parse_content(self, content: bytes | str, file: str) -> ProcessFile:
        try:
            definitions = fromstring(content)
        except Exception as e:
            raise DocumentParseError(file, f"invalid XML: {e}") from e

        if definitions.tag != _bpmn("definitions"):
            raise DocumentParseError(file, f"root element {definitions.tag} is not bpmn:definitions")

        root_definitions = self._root_definitions(definitions)
        processes = tuple(
            self._parse_process(process, file, root_definitions)
            for process in definitions.findall(_bpmn("process"))
        )
        logger.debug(f"Parsed {len(processes)} processes from {file}")
        return ProcessFile(file=file, processes=processes)

    def _root_definitions(self, definitions) -> _RootDefinitions:
        result = _RootDefinitions()
        for message in definitions.findall(_bpmn("message")):
            result.messages[message.get("id", "")] = message.get("name")
        for signal in definitions.findall(_bpmn("signal")):
            result.signals[signal.get("id", "")] = signal.get("name")
        for error in definitions.findall(_bpmn("error")):
            result.errors[error.get("id", "")] = (error.get("name"), error.get("errorCode"))
        return result

    def _parse_process(self, process, file: str, root_definitions: _RootDefinitions) -> ProcessGraph:
        pending: list[_PendingNode] = []
        self._collect(process, None, root_definitions, pending)

        by_id = {node.id: node for node in pending}
        for node in pending:
            if node.kind != NodeKind.SEQUENCE_FLOW:
                continue
            source = by_id.get(node.attributes.get("sourceRef", ""))
            target = by_id.get(node.attributes.get("targetRef", ""))
            if source is not None:
                source.outgoing.append(node.id)
            if target is not None:
                target.incoming.append(node.id)

        nodes = tuple(
            ProcessNode(
                id=node.id,
                kind=node.kind,
                name=node.name,
                attributes=node.attributes,
                event_definition=node.event_definition,
                field_injections=node.field_injections,
                execution_listeners=node.execution_listeners,
                task_listeners=node.task_listeners,
                incoming=tuple(node.incoming),
                outgoing=tuple(node.outgoing),
                parent_id=node.parent_id,
            )
            for node in pending
        )

        executable = process.get("isExecutable")
        return ProcessGraph(
            process_id=process.get("id"),
            file=file,
            is_executable=executable is not None and executable.lower() == "true",
            history_time_to_live=process.get(_camunda("historyTimeToLive")),
            nodes=nodes,
        )

    def _collect(self, container, parent_id: str | None, root_definitions: _RootDefinitions,
                 pending: list[_PendingNode]) -> None:
        for element in container:
            if not element.tag.startswith(_BPMN):
                continue
            kind = _NODE_KINDS.get(element.tag[len(_BPMN):])
            if kind is None:
                continue

            pending.append(self._pending_node(element, kind, parent_id, root_definitions))
            if kind == NodeKind.SUB_PROCESS:
                self._collect(element, element.get("id"), root_definitions, pending)

    def _pending_node(self, element, kind: NodeKind, parent_id: str | None,
                      root_definitions: _RootDefinitions) -> _PendingNode:
        attributes: dict[str, str] = {}
        for name in _BPMN_ATTRIBUTES:
            if (value := element.get(name)) is not None:
                attributes[name] = value
        for name in _CAMUNDA_ATTRIBUTES:
            if (value := element.get(_camunda(name))) is not None:
                attributes[name] = value

        condition = element.find(_bpmn("conditionExpression"))
        if condition is not None:
            attributes["conditionExpression"] = _text(condition) or ""

        loop = element.find(_bpmn("multiInstanceLoopCharacteristics"))
        if loop is not None:
            attributes["multiInstance"] = "true"
            if (loop_async := loop.get(_camunda("asyncBefore"))) is not None:
                attributes["multiInstanceAsyncBefore"] = loop_async

        extensions = element.find(_bpmn("extensionElements"))
        field_injections = self._field_injections(extensions)

        # message throw and end events carry class and fields on the event definition
        message_definition = element.find(_bpmn("messageEventDefinition"))
        if message_definition is not None:
            if (value := message_definition.get(_camunda("class"))) is not None:
                attributes.setdefault("class", value)
            field_injections += self._field_injections(message_definition.find(_bpmn("extensionElements")))

        return _PendingNode(
            id=element.get("id", ""),
            kind=kind,
            name=element.get("name"),
            attributes=attributes,
            event_definition=self._event_definition(element, kind, root_definitions),
            field_injections=field_injections,
            execution_listeners=self._listeners(extensions, "executionListener"),
            task_listeners=self._listeners(extensions, "taskListener"),
            parent_id=parent_id,
        )

    # Event definitions

    def _event_definition(self, element, kind: NodeKind, root_definitions: _RootDefinitions):
        if kind == NodeKind.RECEIVE_TASK:
            message_ref = element.get("messageRef")
            return MessageDefinition(root_definitions.messages.get(message_ref or ""), message_ref)

        if (definition := element.find(_bpmn("messageEventDefinition"))) is not None:
            message_ref = definition.get("messageRef")
            return MessageDefinition(root_definitions.messages.get(message_ref or ""), message_ref)

        if (definition := element.find(_bpmn("timerEventDefinition"))) is not None:
            return TimerDefinition(
                time_date=_text(definition.find(_bpmn("timeDate"))),
                time_cycle=_text(definition.find(_bpmn("timeCycle"))),
                time_duration=_text(definition.find(_bpmn("timeDuration"))),
            )

        if (definition := element.find(_bpmn("signalEventDefinition"))) is not None:
            signal_ref = definition.get("signalRef")
            return SignalDefinition(root_definitions.signals.get(signal_ref or ""), signal_ref)

        if (definition := element.find(_bpmn("conditionalEventDefinition"))) is not None:
            condition = definition.find(_bpmn("condition"))
            condition_type = None
            if condition is not None:
                condition_type = "script" if condition.get("language") else "expression"
            return ConditionalDefinition(
                variable_name=definition.get(_camunda("variableName")),
                variable_events=definition.get(_camunda("variableEvents")),
                condition_type=condition_type,
                expression=_text(condition),
            )

        if (definition := element.find(_bpmn("errorEventDefinition"))) is not None:
            error_ref = definition.get("errorRef")
            error_name, error_code = root_definitions.errors.get(error_ref or "", (None, None))
            return ErrorDefinition(
                error_ref=error_ref,
                error_name=error_name,
                error_code=error_code,
                error_code_variable=definition.get(_camunda("errorCodeVariable")),
            )

        return None

    # Camunda extension elements

    def _field_injections(self, extensions) -> tuple[FieldInjection, ...]:
        if extensions is None:
            return ()
        fields = []
        for field_element in extensions.findall(_camunda("field")):
            name = field_element.get("name", "")
            if (value := field_element.get("stringValue")) is not None:
                fields.append(FieldInjection(name, value))
            elif (value := field_element.get("expression")) is not None:
                fields.append(FieldInjection(name, value, is_expression=True))
            elif (string := field_element.find(_camunda("string"))) is not None:
                fields.append(FieldInjection(name, _text(string) or ""))
            elif (expression := field_element.find(_camunda("expression"))) is not None:
                fields.append(FieldInjection(name, _text(expression), is_expression=True))
            else:
                fields.append(FieldInjection(name, None))
        return tuple(fields)

    def _listeners(self, extensions, tag: str) -> tuple[Listener, ...]:
        if extensions is None:
            return ()
        listeners = []
        for listener in extensions.findall(_camunda(tag)):
            parameters = []
            for parameter in listener.iter(_camunda("inputParameter")):
                parameters.append((parameter.get("name", ""), self._parameter_value(parameter)))
            listeners.append(Listener(
                class_name=listener.get("class"),
                event=listener.get("event"),
                input_parameters=tuple(parameters),
            ))
        return tuple(listeners)

    def _parameter_value(self, parameter) -> str | None:
        values = [_text(value) for value in parameter.iter(_camunda("value"))]
        values = [value for value in values if value]
        if values:
            return ",".join(values)
        return _text(parameter) or None
