"""Rules for service, send, user and receive tasks."""

from dsflint.constants import (
    EXTERNAL_FORM_PREFIXES,
    V1_ABSTRACT_SERVICE_DELEGATE,
    V1_ABSTRACT_TASK_MESSAGE_SEND,
    V1_JAVA_DELEGATE,
    V2_MESSAGE_SEND_TASK,
    V2_SERVICE_TASK,
    ApiVersion,
)
from dsflint.diagnostics import DiagnosticCode, DiagnosticSink, Severity
from dsflint.models.process import NodeKind, ProcessGraph, ProcessNode
from dsflint.validation.bpmn.classes import ClassRequirement, check_implementation_class
from dsflint.validation.bpmn.common import check_message_catch, check_name
from dsflint.validation.bpmn.field_injection import check_field_injections
from dsflint.validation.bpmn.listeners import check_task_listeners
from dsflint.validation.framework import NodeRule, RuleContext


class ServiceTaskRule(NodeRule):
    kinds = (NodeKind.SERVICE_TASK,)

    @property
    def name(self) -> str:
        return "service_task"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        check_name(node, sink, DiagnosticCode.BPMN_SERVICE_TASK_NAME_EMPTY, Severity.ERROR, "Service task")

        if context.api_version == ApiVersion.V2:
            requirements = [
                ClassRequirement(V2_SERVICE_TASK, DiagnosticCode.BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING),
            ]
        else:
            requirements = [
                ClassRequirement(V1_ABSTRACT_SERVICE_DELEGATE,
                                 DiagnosticCode.BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE,
                                 Severity.WARN, extends=True),
                ClassRequirement(V1_JAVA_DELEGATE, DiagnosticCode.BPMN_SERVICE_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE),
            ]
        check_implementation_class(
            node, context, sink,
            empty_code=DiagnosticCode.BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_EMPTY,
            not_found_code=DiagnosticCode.BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND,
            requirements=requirements,
            missing_code=DiagnosticCode.BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST,
        )


class SendTaskRule(NodeRule):
    kinds = (NodeKind.SEND_TASK,)

    @property
    def name(self) -> str:
        return "send_task"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        check_name(node, sink, DiagnosticCode.BPMN_SEND_TASK_NAME_EMPTY, Severity.WARN, "Send task")

        if context.api_version == ApiVersion.V2:
            requirements = [
                ClassRequirement(V2_MESSAGE_SEND_TASK, DiagnosticCode.BPMN_SEND_TASK_NO_INTERFACE_CLASS_IMPLEMENTING),
            ]
        else:
            requirements = [
                ClassRequirement(V1_ABSTRACT_TASK_MESSAGE_SEND,
                                 DiagnosticCode.BPMN_MESSAGE_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND,
                                 Severity.WARN, extends=True),
                ClassRequirement(V1_JAVA_DELEGATE,
                                 DiagnosticCode.BPMN_MESSAGE_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE),
            ]
        check_implementation_class(
            node, context, sink,
            empty_code=DiagnosticCode.BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY,
            not_found_code=DiagnosticCode.BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND,
            requirements=requirements,
            missing_code=DiagnosticCode.BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY,
        )
        check_field_injections(node, context, sink)


class UserTaskRule(NodeRule):
    kinds = (NodeKind.USER_TASK,)

    @property
    def name(self) -> str:
        return "user_task"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        check_name(node, sink, DiagnosticCode.BPMN_USER_TASK_NAME_EMPTY, Severity.ERROR, "User task")
        self._check_form_key(node, context, sink)
        check_task_listeners(node, context, sink)

    def _check_form_key(self, node: ProcessNode, context: RuleContext, sink: DiagnosticSink) -> None:
        form_key = (node.form_key or "").strip()
        if not form_key:
            sink.error(DiagnosticCode.BPMN_USER_TASK_FORM_KEY_EMPTY, node.id, "User task has no formKey")
            return
        if not form_key.startswith(EXTERNAL_FORM_PREFIXES):
            sink.error(DiagnosticCode.BPMN_USER_TASK_FORM_KEY_IS_NOT_AN_EXTERNAL_FORM, node.id,
                       f"formKey '{form_key}' is not an external form")
            return
        sink.success(node.id, f"formKey '{form_key}' is an external form")

        questionnaire = context.catalog.questionnaire_for_form_key(form_key)
        if questionnaire is None:
            sink.error(DiagnosticCode.BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND, node.id,
                       f"No Questionnaire found for formKey '{form_key}'")
        else:
            sink.success(node.id, f"Questionnaire {questionnaire.path} found for formKey")


class ReceiveTaskRule(NodeRule):
    kinds = (NodeKind.RECEIVE_TASK,)

    @property
    def name(self) -> str:
        return "receive_task"

    def check(self, node: ProcessNode, graph: ProcessGraph, context: RuleContext, sink: DiagnosticSink) -> None:
        check_message_catch(
            node, context, sink,
            name_code=DiagnosticCode.BPMN_RECEIVE_TASK_NAME_EMPTY,
            message_code=DiagnosticCode.BPMN_RECEIVE_TASK_MESSAGE_NAME_EMPTY,
            label="Receive task",
        )
