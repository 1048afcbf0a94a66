"""DSF API and FHIR constants shared by rules, parsers and the code cache."""

import re
from enum import Enum


class ApiVersion(str, Enum):
    """DSF process plugin API generations."""
    V1 = "v1"
    V2 = "v2"


# BPE API types (v1)
V1_JAVA_DELEGATE = "org.camunda.bpm.engine.delegate.JavaDelegate"
V1_EXECUTION_LISTENER = "org.camunda.bpm.engine.delegate.ExecutionListener"
V1_TASK_LISTENER = "org.camunda.bpm.engine.delegate.TaskListener"
V1_ABSTRACT_SERVICE_DELEGATE = "dev.dsf.bpe.v1.activity.AbstractServiceDelegate"
V1_ABSTRACT_TASK_MESSAGE_SEND = "dev.dsf.bpe.v1.activity.AbstractTaskMessageSend"
V1_DEFAULT_USER_TASK_LISTENER = "dev.dsf.bpe.v1.activity.DefaultUserTaskListener"
V1_PLUGIN_DEFINITION = "dev.dsf.bpe.v1.ProcessPluginDefinition"

# BPE API types (v2)
V2_SERVICE_TASK = "dev.dsf.bpe.v2.activity.ServiceTask"
V2_MESSAGE_SEND_TASK = "dev.dsf.bpe.v2.activity.MessageSendTask"
V2_MESSAGE_INTERMEDIATE_THROW_EVENT = "dev.dsf.bpe.v2.activity.MessageIntermediateThrowEvent"
V2_MESSAGE_END_EVENT = "dev.dsf.bpe.v2.activity.MessageEndEvent"
V2_EXECUTION_LISTENER = "dev.dsf.bpe.v2.activity.ExecutionListener"
V2_USER_TASK_LISTENER = "dev.dsf.bpe.v2.activity.UserTaskListener"
V2_DEFAULT_USER_TASK_LISTENER = "dev.dsf.bpe.v2.activity.DefaultUserTaskListener"
V2_PLUGIN_DEFINITION = "dev.dsf.bpe.v2.ProcessPluginDefinition"

# Type relations the API itself declares; merged into every class index.
API_TYPE_HIERARCHY: dict[str, dict[str, list[str]]] = {
    V1_ABSTRACT_SERVICE_DELEGATE: {"extends": [], "implements": [V1_JAVA_DELEGATE]},
    V1_ABSTRACT_TASK_MESSAGE_SEND: {"extends": [V1_ABSTRACT_SERVICE_DELEGATE], "implements": []},
    V1_DEFAULT_USER_TASK_LISTENER: {"extends": [], "implements": [V1_TASK_LISTENER]},
    V2_DEFAULT_USER_TASK_LISTENER: {"extends": [], "implements": [V2_USER_TASK_LISTENER]},
}

# Code systems
CS_PROCESS_AUTHORIZATION = "http://dsf.dev/fhir/CodeSystem/process-authorization"
CS_READ_ACCESS_TAG = "http://dsf.dev/fhir/CodeSystem/read-access-tag"
CS_PRACTITIONER_ROLE = "http://dsf.dev/fhir/CodeSystem/practitioner-role"
CS_ORGANIZATION_ROLE = "http://dsf.dev/fhir/CodeSystem/organization-role"
CS_TASK_STATUS = "http://hl7.org/fhir/task-status"
CS_BPMN_MESSAGE = "http://dsf.dev/fhir/CodeSystem/bpmn-message"

BUILT_IN_CODES: dict[str, frozenset[str]] = {
    CS_PROCESS_AUTHORIZATION: frozenset({
        "LOCAL_ORGANIZATION",
        "LOCAL_ORGANIZATION_PRACTITIONER",
        "REMOTE_ORGANIZATION",
        "LOCAL_ROLE",
        "LOCAL_ROLE_PRACTITIONER",
        "REMOTE_ROLE",
        "LOCAL_ALL",
        "LOCAL_ALL_PRACTITIONER",
        "REMOTE_ALL",
    }),
    CS_READ_ACCESS_TAG: frozenset({
        "ALL", "LOCAL", "ORGANIZATION", "ROLE", "PRACTITIONER", "ROLE_PRACTITIONER",
    }),
    CS_PRACTITIONER_ROLE: frozenset({
        "DSF_ADMIN", "UAC_USER", "COS_USER", "CRR_USER", "DIC_USER",
        "DMS_USER", "DTS_USER", "HRP_USER", "TTP_USER", "AMS_USER",
    }),
    CS_ORGANIZATION_ROLE: frozenset({
        "AMS", "COS", "CRR", "DIC", "DMS", "DTS", "HRP", "TTP", "UAC",
    }),
    CS_TASK_STATUS: frozenset({
        "draft", "requested", "received", "accepted", "rejected", "ready",
        "cancelled", "in-progress", "on-hold", "failed", "completed",
        "entered-in-error",
    }),
}

# FHIR structure definitions and extensions
FHIR_NAMESPACE = "http://hl7.org/fhir"
ACTIVITY_DEFINITION_PROFILE = "http://dsf.dev/fhir/StructureDefinition/activity-definition"
QUESTIONNAIRE_PROFILE = "http://dsf.dev/fhir/StructureDefinition/questionnaire"
EXTENSION_PROCESS_AUTHORIZATION = "http://dsf.dev/fhir/StructureDefinition/extension-process-authorization"
EXTENSION_READ_ACCESS_PARENT_ORGANIZATION_ROLE = (
    "http://dsf.dev/fhir/StructureDefinition/extension-read-access-parent-organization-role"
)
SID_ORGANIZATION_IDENTIFIER = "http://dsf.dev/sid/organization-identifier"

TASK_INSTANTIATES_CANONICAL_ELEMENT = "Task.instantiatesCanonical"
TASK_MESSAGE_NAME_ELEMENT = "Task.input:message-name.value[x]"

# Placeholders and patterns
VERSION_PLACEHOLDER = "#{version}"
DATE_PLACEHOLDER = "#{date}"
ORGANIZATION_PLACEHOLDER = "#{organization}"

PROCESS_ID_PATTERN = re.compile(r"^[a-zA-Z0-9-]+_[a-zA-Z0-9-]+$")
ACTIVITY_DEFINITION_URL_PATTERN = re.compile(r"^https?://[^/]+/bpe/Process/[a-zA-Z0-9-]+$")
QUESTIONNAIRE_PROFILE_PATTERN = re.compile(
    "^" + re.escape(QUESTIONNAIRE_PROFILE) + r"\|\d+\.\d+\.\d+$"
)
LINK_ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

EXTERNAL_FORM_PREFIXES = ("external:", "http://", "https://")
USER_TASK_ID_LINK_ID = "user-task-id"

# Conventional layout below the resource root
BPMN_DIRECTORY = "bpe"
FHIR_DIRECTORY = "fhir"
