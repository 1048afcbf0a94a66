"""Rule identifiers carried by diagnostics."""

from enum import Enum


class DiagnosticCode(str, Enum):
    """Identifier of the check that produced a diagnostic.

    Success diagnostics always carry ``SUCCESS``; every other code names the
    problem that was found.
    """

    SUCCESS = "SUCCESS"

    # Engine and collaborator failures
    RULE_EXECUTION_FAILED = "RULE_EXECUTION_FAILED"
    CLASS_LOOKUP_FAILED = "CLASS_LOOKUP_FAILED"
    CLASS_CHECK_SKIPPED = "CLASS_CHECK_SKIPPED"
    UNSUPPORTED_RESOURCE_KIND = "UNSUPPORTED_RESOURCE_KIND"
    PARSE_FAILURE = "PARSE_FAILURE"

    # Plugin definition and reference resolution
    PLUGIN_DEFINITION_NO_PROCESS_MODEL_DEFINED = "PLUGIN_DEFINITION_NO_PROCESS_MODEL_DEFINED"
    PLUGIN_DEFINITION_NO_FHIR_RESOURCES_DEFINED = "PLUGIN_DEFINITION_NO_FHIR_RESOURCES_DEFINED"
    PLUGIN_DEFINITION_BPMN_FILE_NOT_FOUND = "PLUGIN_DEFINITION_BPMN_FILE_NOT_FOUND"
    PLUGIN_DEFINITION_FHIR_RESOURCE_NOT_FOUND = "PLUGIN_DEFINITION_FHIR_RESOURCE_NOT_FOUND"
    PLUGIN_DEFINITION_BPMN_FILE_OUTSIDE_ROOT = "PLUGIN_DEFINITION_BPMN_FILE_OUTSIDE_ROOT"
    PLUGIN_DEFINITION_FHIR_FILE_OUTSIDE_ROOT = "PLUGIN_DEFINITION_FHIR_FILE_OUTSIDE_ROOT"
    PLUGIN_DEFINITION_BPMN_FILE_FROM_DEPENDENCY = "PLUGIN_DEFINITION_BPMN_FILE_FROM_DEPENDENCY"
    PLUGIN_DEFINITION_FHIR_FILE_FROM_DEPENDENCY = "PLUGIN_DEFINITION_FHIR_FILE_FROM_DEPENDENCY"
    PLUGIN_DEFINITION_BPMN_FILE_AMBIGUOUS = "PLUGIN_DEFINITION_BPMN_FILE_AMBIGUOUS"
    PLUGIN_DEFINITION_FHIR_RESOURCE_AMBIGUOUS = "PLUGIN_DEFINITION_FHIR_RESOURCE_AMBIGUOUS"
    PLUGIN_DEFINITION_UNPARSABLE_BPMN_RESOURCE = "PLUGIN_DEFINITION_UNPARSABLE_BPMN_RESOURCE"
    PLUGIN_DEFINITION_UNPARSABLE_FHIR_RESOURCE = "PLUGIN_DEFINITION_UNPARSABLE_FHIR_RESOURCE"
    PLUGIN_DEFINITION_PROCESS_PLUGIN_RESOURCE_NOT_LOADED = "PLUGIN_DEFINITION_PROCESS_PLUGIN_RESOURCE_NOT_LOADED"

    # BPMN file and process
    BPMN_FILE_NO_PROCESS = "BPMN_FILE_NO_PROCESS"
    BPMN_FILE_MULTIPLE_PROCESSES = "BPMN_FILE_MULTIPLE_PROCESSES"
    BPMN_PROCESS_ID_EMPTY = "BPMN_PROCESS_ID_EMPTY"
    BPMN_PROCESS_ID_PATTERN_MISMATCH = "BPMN_PROCESS_ID_PATTERN_MISMATCH"
    BPMN_PROCESS_NOT_EXECUTABLE = "BPMN_PROCESS_NOT_EXECUTABLE"
    BPMN_PROCESS_HISTORY_TIME_TO_LIVE_MISSING = "BPMN_PROCESS_HISTORY_TIME_TO_LIVE_MISSING"

    # Service tasks
    BPMN_SERVICE_TASK_NAME_EMPTY = "BPMN_SERVICE_TASK_NAME_EMPTY"
    BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST = "BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST"
    BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_EMPTY = "BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_EMPTY"
    BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND = "BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND"
    BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE = "BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE"
    BPMN_SERVICE_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE = "BPMN_SERVICE_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE"
    BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING = "BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING"

    # Send tasks and message throw/end events
    BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY = "BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY"
    BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND = "BPMN_MESSAGE_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND"
    BPMN_MESSAGE_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND = "BPMN_MESSAGE_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND"
    BPMN_MESSAGE_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE = "BPMN_MESSAGE_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE"
    BPMN_SEND_TASK_NO_INTERFACE_CLASS_IMPLEMENTING = "BPMN_SEND_TASK_NO_INTERFACE_CLASS_IMPLEMENTING"
    BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY = "BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY"
    BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_FOUND = "BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_FOUND"
    BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_IMPLEMENTING_JAVA_DELEGATE = (
        "BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_IMPLEMENTING_JAVA_DELEGATE"
    )
    BPMN_END_OR_INTERMEDIATE_THROW_EVENT_MISSING_INTERFACE = "BPMN_END_OR_INTERMEDIATE_THROW_EVENT_MISSING_INTERFACE"
    BPMN_MESSAGE_INTERMEDIATE_THROW_EVENT_HAS_MESSAGE = "BPMN_MESSAGE_INTERMEDIATE_THROW_EVENT_HAS_MESSAGE"

    # User tasks and listeners
    BPMN_USER_TASK_NAME_EMPTY = "BPMN_USER_TASK_NAME_EMPTY"
    BPMN_USER_TASK_FORM_KEY_EMPTY = "BPMN_USER_TASK_FORM_KEY_EMPTY"
    BPMN_USER_TASK_FORM_KEY_IS_NOT_AN_EXTERNAL_FORM = "BPMN_USER_TASK_FORM_KEY_IS_NOT_AN_EXTERNAL_FORM"
    BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND = "BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND"
    BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE = "BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE"
    BPMN_USER_TASK_LISTENER_JAVA_CLASS_NOT_FOUND = "BPMN_USER_TASK_LISTENER_JAVA_CLASS_NOT_FOUND"
    BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS = (
        "BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS"
    )
    BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE_OR_NULL = "BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE_OR_NULL"
    BPMN_PRACTITIONERS_HAS_NO_VALUE_OR_NULL = "BPMN_PRACTITIONERS_HAS_NO_VALUE_OR_NULL"
    BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND = "BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND"
    BPMN_EXECUTION_LISTENER_NOT_IMPLEMENTING_REQUIRED_INTERFACE = "BPMN_EXECUTION_LISTENER_NOT_IMPLEMENTING_REQUIRED_INTERFACE"
    BPMN_EXECUTION_LISTENER_WITHOUT_CLASS = "BPMN_EXECUTION_LISTENER_WITHOUT_CLASS"

    # Message events and receive tasks
    BPMN_EVENT_NAME_EMPTY = "BPMN_EVENT_NAME_EMPTY"
    BPMN_SEND_TASK_NAME_EMPTY = "BPMN_SEND_TASK_NAME_EMPTY"
    BPMN_RECEIVE_TASK_NAME_EMPTY = "BPMN_RECEIVE_TASK_NAME_EMPTY"
    BPMN_RECEIVE_TASK_MESSAGE_NAME_EMPTY = "BPMN_RECEIVE_TASK_MESSAGE_NAME_EMPTY"
    BPMN_MESSAGE_START_EVENT_MESSAGE_NAME_EMPTY = "BPMN_MESSAGE_START_EVENT_MESSAGE_NAME_EMPTY"
    BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY"
    BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY = "BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY"
    BPMN_MESSAGE_BOUNDARY_EVENT_NAME_EMPTY = "BPMN_MESSAGE_BOUNDARY_EVENT_NAME_EMPTY"
    BPMN_MESSAGE_BOUNDARY_EVENT_MESSAGE_NAME_EMPTY = "BPMN_MESSAGE_BOUNDARY_EVENT_MESSAGE_NAME_EMPTY"
    BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE = "BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE"
    BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE = "BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE"

    # Start, end, signal, timer, conditional and error events
    BPMN_START_EVENT_NOT_PART_OF_SUB_PROCESS = "BPMN_START_EVENT_NOT_PART_OF_SUB_PROCESS"
    BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS = "BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS"
    BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE = "BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE"
    BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_NAME_EMPTY = "BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_NAME_EMPTY"
    BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_SIGNAL_EMPTY = "BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_SIGNAL_EMPTY"
    BPMN_SIGNAL_END_EVENT_NAME_EMPTY = "BPMN_SIGNAL_END_EVENT_NAME_EMPTY"
    BPMN_SIGNAL_END_EVENT_SIGNAL_EMPTY = "BPMN_SIGNAL_END_EVENT_SIGNAL_EMPTY"
    BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY"
    BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY = "BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY"
    BPMN_FLOATING_ELEMENT = "BPMN_FLOATING_ELEMENT"
    BPMN_TIMER_DEFINITION_EMPTY = "BPMN_TIMER_DEFINITION_EMPTY"
    BPMN_TIMER_FIXED_DATE = "BPMN_TIMER_FIXED_DATE"
    BPMN_TIMER_NO_PLACEHOLDER = "BPMN_TIMER_NO_PLACEHOLDER"
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY"
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_NAME_EMPTY = "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_NAME_EMPTY"
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_EVENTS_EMPTY = "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_VARIABLE_EVENTS_EMPTY"
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_EMPTY = "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_EMPTY"
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_NOT_EXPRESSION = (
        "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_CONDITION_TYPE_NOT_EXPRESSION"
    )
    BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_EXPRESSION_EMPTY = "BPMN_CONDITIONAL_INTERMEDIATE_CATCH_EVENT_EXPRESSION_EMPTY"
    BPMN_ERROR_BOUNDARY_EVENT_NAME_EMPTY = "BPMN_ERROR_BOUNDARY_EVENT_NAME_EMPTY"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_NAME_EMPTY = "BPMN_ERROR_BOUNDARY_EVENT_ERROR_NAME_EMPTY"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY = "BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY = "BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY"

    # Gateways, flows and sub processes
    BPMN_EXCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY = (
        "BPMN_EXCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY"
    )
    BPMN_INCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY = (
        "BPMN_INCLUSIVE_GATEWAY_HAS_MULTIPLE_OUTGOING_FLOWS_BUT_NAME_IS_EMPTY"
    )
    BPMN_SEQUENCE_FLOW_SOURCE_MISSING = "BPMN_SEQUENCE_FLOW_SOURCE_MISSING"
    BPMN_SEQUENCE_FLOW_AMBIGUOUS_NAME_IS_EMPTY = "BPMN_SEQUENCE_FLOW_AMBIGUOUS_NAME_IS_EMPTY"
    BPMN_SEQUENCE_FLOW_DEFAULT_HAS_CONDITION = "BPMN_SEQUENCE_FLOW_DEFAULT_HAS_CONDITION"
    BPMN_SEQUENCE_FLOW_MISSING_CONDITION = "BPMN_SEQUENCE_FLOW_MISSING_CONDITION"
    BPMN_SUB_PROCESS_HAS_MULTI_INSTANCE_BUT_IS_NOT_ASYNC_BEFORE_TRUE = (
        "BPMN_SUB_PROCESS_HAS_MULTI_INSTANCE_BUT_IS_NOT_ASYNC_BEFORE_TRUE"
    )

    # Field injections
    BPMN_FIELD_INJECTION_NOT_STRING_LITERAL = "BPMN_FIELD_INJECTION_NOT_STRING_LITERAL"
    BPMN_FIELD_INJECTION_PROFILE_EMPTY = "BPMN_FIELD_INJECTION_PROFILE_EMPTY"
    BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER = "BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER"
    BPMN_FIELD_INJECTION_MESSAGE_VALUE_EMPTY = "BPMN_FIELD_INJECTION_MESSAGE_VALUE_EMPTY"
    BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY = "BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY"
    BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NO_VERSION_PLACEHOLDER = (
        "BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NO_VERSION_PLACEHOLDER"
    )
    BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_PROFILE = "BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_PROFILE"
    BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_FIXED_IN_PROFILE = "BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_FIXED_IN_PROFILE"
    BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NOT_FIXED_IN_PROFILE = (
        "BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NOT_FIXED_IN_PROFILE"
    )
    BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_ACTIVITY_DEFINITION = (
        "BPMN_FIELD_INJECTION_MESSAGE_NAME_NOT_IN_ACTIVITY_DEFINITION"
    )
    BPMN_UNKNOWN_FIELD_INJECTION = "BPMN_UNKNOWN_FIELD_INJECTION"

    # ActivityDefinition
    FHIR_ACTIVITY_DEFINITION_URL_EMPTY = "FHIR_ACTIVITY_DEFINITION_URL_EMPTY"
    FHIR_ACTIVITY_DEFINITION_INVALID_URL_PATTERN = "FHIR_ACTIVITY_DEFINITION_INVALID_URL_PATTERN"
    FHIR_ACTIVITY_DEFINITION_STATUS_EMPTY = "FHIR_ACTIVITY_DEFINITION_STATUS_EMPTY"
    FHIR_ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN = "FHIR_ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN"
    FHIR_ACTIVITY_DEFINITION_KIND_EMPTY = "FHIR_ACTIVITY_DEFINITION_KIND_EMPTY"
    FHIR_ACTIVITY_DEFINITION_KIND_NOT_TASK = "FHIR_ACTIVITY_DEFINITION_KIND_NOT_TASK"
    FHIR_ACTIVITY_DEFINITION_MISSING_PROFILE = "FHIR_ACTIVITY_DEFINITION_MISSING_PROFILE"
    FHIR_ACTIVITY_DEFINITION_PROFILE_HAS_VERSION = "FHIR_ACTIVITY_DEFINITION_PROFILE_HAS_VERSION"
    FHIR_ACTIVITY_DEFINITION_MISSING_ACCESS_TAG = "FHIR_ACTIVITY_DEFINITION_MISSING_ACCESS_TAG"
    FHIR_ACTIVITY_DEFINITION_INVALID_ACCESS_TAG = "FHIR_ACTIVITY_DEFINITION_INVALID_ACCESS_TAG"
    FHIR_ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION = "FHIR_ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION"
    FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_REQUESTER = "FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_REQUESTER"
    FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT = "FHIR_ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT"
    FHIR_ACTIVITY_DEFINITION_INVALID_REQUESTER = "FHIR_ACTIVITY_DEFINITION_INVALID_REQUESTER"
    FHIR_ACTIVITY_DEFINITION_INVALID_RECIPIENT = "FHIR_ACTIVITY_DEFINITION_INVALID_RECIPIENT"

    # StructureDefinition
    FHIR_STRUCTURE_DEFINITION_MISSING_READ_ACCESS_TAG = "FHIR_STRUCTURE_DEFINITION_MISSING_READ_ACCESS_TAG"
    FHIR_STRUCTURE_DEFINITION_URL_MISSING = "FHIR_STRUCTURE_DEFINITION_URL_MISSING"
    FHIR_STRUCTURE_DEFINITION_INVALID_STATUS = "FHIR_STRUCTURE_DEFINITION_INVALID_STATUS"
    FHIR_STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER = "FHIR_STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER"
    FHIR_STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER = "FHIR_STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER"
    FHIR_STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING = "FHIR_STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING"
    FHIR_STRUCTURE_DEFINITION_SNAPSHOT_PRESENT = "FHIR_STRUCTURE_DEFINITION_SNAPSHOT_PRESENT"
    FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_MISSING = "FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_MISSING"
    FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE = "FHIR_STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE"
    FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_BELOW_BASE_MIN = "FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_BELOW_BASE_MIN"
    FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN = "FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN"
    FHIR_STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH = "FHIR_STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH"
    FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX = "FHIR_STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX"

    # Questionnaire
    FHIR_QUESTIONNAIRE_MISSING_META_PROFILE = "FHIR_QUESTIONNAIRE_MISSING_META_PROFILE"
    FHIR_QUESTIONNAIRE_INVALID_META_PROFILE = "FHIR_QUESTIONNAIRE_INVALID_META_PROFILE"
    FHIR_QUESTIONNAIRE_MISSING_READ_ACCESS_TAG = "FHIR_QUESTIONNAIRE_MISSING_READ_ACCESS_TAG"
    FHIR_QUESTIONNAIRE_INVALID_STATUS = "FHIR_QUESTIONNAIRE_INVALID_STATUS"
    FHIR_QUESTIONNAIRE_VERSION_NO_PLACEHOLDER = "FHIR_QUESTIONNAIRE_VERSION_NO_PLACEHOLDER"
    FHIR_QUESTIONNAIRE_DATE_NO_PLACEHOLDER = "FHIR_QUESTIONNAIRE_DATE_NO_PLACEHOLDER"
    FHIR_QUESTIONNAIRE_MISSING_ITEM = "FHIR_QUESTIONNAIRE_MISSING_ITEM"
    FHIR_QUESTIONNAIRE_ITEM_MISSING_LINK_ID = "FHIR_QUESTIONNAIRE_ITEM_MISSING_LINK_ID"
    FHIR_QUESTIONNAIRE_ITEM_MISSING_TYPE = "FHIR_QUESTIONNAIRE_ITEM_MISSING_TYPE"
    FHIR_QUESTIONNAIRE_ITEM_MISSING_TEXT = "FHIR_QUESTIONNAIRE_ITEM_MISSING_TEXT"
    FHIR_QUESTIONNAIRE_DUPLICATE_LINK_ID = "FHIR_QUESTIONNAIRE_DUPLICATE_LINK_ID"
    FHIR_QUESTIONNAIRE_UNUSUAL_LINK_ID = "FHIR_QUESTIONNAIRE_UNUSUAL_LINK_ID"
    FHIR_QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE = "FHIR_QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE"
    FHIR_QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED = "FHIR_QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED"

    # CodeSystem
    FHIR_CODE_SYSTEM_MISSING_READ_ACCESS_TAG = "FHIR_CODE_SYSTEM_MISSING_READ_ACCESS_TAG"
    FHIR_CODE_SYSTEM_MISSING_ELEMENT = "FHIR_CODE_SYSTEM_MISSING_ELEMENT"
    FHIR_CODE_SYSTEM_INVALID_STATUS = "FHIR_CODE_SYSTEM_INVALID_STATUS"
    FHIR_CODE_SYSTEM_VERSION_NO_PLACEHOLDER = "FHIR_CODE_SYSTEM_VERSION_NO_PLACEHOLDER"
    FHIR_CODE_SYSTEM_DATE_NO_PLACEHOLDER = "FHIR_CODE_SYSTEM_DATE_NO_PLACEHOLDER"
    FHIR_CODE_SYSTEM_MISSING_CONCEPT = "FHIR_CODE_SYSTEM_MISSING_CONCEPT"
    FHIR_CODE_SYSTEM_CONCEPT_MISSING_CODE = "FHIR_CODE_SYSTEM_CONCEPT_MISSING_CODE"
    FHIR_CODE_SYSTEM_CONCEPT_MISSING_DISPLAY = "FHIR_CODE_SYSTEM_CONCEPT_MISSING_DISPLAY"
    FHIR_CODE_SYSTEM_DUPLICATE_CODE = "FHIR_CODE_SYSTEM_DUPLICATE_CODE"

    # ValueSet
    FHIR_VALUE_SET_MISSING_READ_ACCESS_TAG_ALL_OR_LOCAL = "FHIR_VALUE_SET_MISSING_READ_ACCESS_TAG_ALL_OR_LOCAL"
    FHIR_VALUE_SET_ORGANIZATION_ROLE_INVALID_CODE = "FHIR_VALUE_SET_ORGANIZATION_ROLE_INVALID_CODE"
    FHIR_VALUE_SET_MISSING_URL = "FHIR_VALUE_SET_MISSING_URL"
    FHIR_VALUE_SET_MISSING_NAME = "FHIR_VALUE_SET_MISSING_NAME"
    FHIR_VALUE_SET_MISSING_TITLE = "FHIR_VALUE_SET_MISSING_TITLE"
    FHIR_VALUE_SET_MISSING_PUBLISHER = "FHIR_VALUE_SET_MISSING_PUBLISHER"
    FHIR_VALUE_SET_MISSING_DESCRIPTION = "FHIR_VALUE_SET_MISSING_DESCRIPTION"
    FHIR_VALUE_SET_VERSION_NO_PLACEHOLDER = "FHIR_VALUE_SET_VERSION_NO_PLACEHOLDER"
    FHIR_VALUE_SET_DATE_NO_PLACEHOLDER = "FHIR_VALUE_SET_DATE_NO_PLACEHOLDER"
    FHIR_VALUE_SET_MISSING_COMPOSE_INCLUDE = "FHIR_VALUE_SET_MISSING_COMPOSE_INCLUDE"
    FHIR_VALUE_SET_INCLUDE_MISSING_SYSTEM = "FHIR_VALUE_SET_INCLUDE_MISSING_SYSTEM"
    FHIR_VALUE_SET_INCLUDE_VERSION_NO_PLACEHOLDER = "FHIR_VALUE_SET_INCLUDE_VERSION_NO_PLACEHOLDER"
    FHIR_VALUE_SET_CONCEPT_MISSING_CODE = "FHIR_VALUE_SET_CONCEPT_MISSING_CODE"
    FHIR_VALUE_SET_DUPLICATE_CONCEPT_CODE = "FHIR_VALUE_SET_DUPLICATE_CONCEPT_CODE"
    FHIR_VALUE_SET_UNKNOWN_CODE = "FHIR_VALUE_SET_UNKNOWN_CODE"
    FHIR_VALUE_SET_FALSE_URL_REFERENCED = "FHIR_VALUE_SET_FALSE_URL_REFERENCED"

    # Task
    FHIR_TASK_MISSING_PROFILE = "FHIR_TASK_MISSING_PROFILE"
    FHIR_TASK_MISSING_INSTANTIATES_CANONICAL = "FHIR_TASK_MISSING_INSTANTIATES_CANONICAL"
    FHIR_TASK_INSTANTIATES_CANONICAL_NO_PLACEHOLDER = "FHIR_TASK_INSTANTIATES_CANONICAL_NO_PLACEHOLDER"
    FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL = "FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL"
    FHIR_TASK_MISSING_STATUS = "FHIR_TASK_MISSING_STATUS"
    FHIR_TASK_STATUS_NOT_DRAFT = "FHIR_TASK_STATUS_NOT_DRAFT"
    FHIR_TASK_UNKNOWN_STATUS = "FHIR_TASK_UNKNOWN_STATUS"
    FHIR_TASK_INTENT_NOT_ORDER = "FHIR_TASK_INTENT_NOT_ORDER"
    FHIR_TASK_MISSING_REQUESTER = "FHIR_TASK_MISSING_REQUESTER"
    FHIR_TASK_INVALID_REQUESTER = "FHIR_TASK_INVALID_REQUESTER"
    FHIR_TASK_MISSING_RECIPIENT = "FHIR_TASK_MISSING_RECIPIENT"
    FHIR_TASK_INVALID_RECIPIENT = "FHIR_TASK_INVALID_RECIPIENT"
    FHIR_TASK_DATE_NO_PLACEHOLDER = "FHIR_TASK_DATE_NO_PLACEHOLDER"
    FHIR_TASK_REQUESTER_ORGANIZATION_NO_PLACEHOLDER = "FHIR_TASK_REQUESTER_ORGANIZATION_NO_PLACEHOLDER"
    FHIR_TASK_RECIPIENT_ORGANIZATION_NO_PLACEHOLDER = "FHIR_TASK_RECIPIENT_ORGANIZATION_NO_PLACEHOLDER"
    FHIR_TASK_COULD_NOT_LOAD_PROFILE = "FHIR_TASK_COULD_NOT_LOAD_PROFILE"
    FHIR_TASK_MISSING_INPUT = "FHIR_TASK_MISSING_INPUT"
    FHIR_TASK_INPUT_MISSING_CODING = "FHIR_TASK_INPUT_MISSING_CODING"
    FHIR_TASK_INPUT_MISSING_VALUE = "FHIR_TASK_INPUT_MISSING_VALUE"
    FHIR_TASK_INPUT_DUPLICATE_SLICE = "FHIR_TASK_INPUT_DUPLICATE_SLICE"
    FHIR_TASK_MISSING_MESSAGE_NAME_INPUT = "FHIR_TASK_MISSING_MESSAGE_NAME_INPUT"
    FHIR_TASK_BUSINESS_KEY_REQUIRED = "FHIR_TASK_BUSINESS_KEY_REQUIRED"
    FHIR_TASK_BUSINESS_KEY_EXISTS = "FHIR_TASK_BUSINESS_KEY_EXISTS"
    FHIR_TASK_BUSINESS_KEY_CHECK_SKIPPED = "FHIR_TASK_BUSINESS_KEY_CHECK_SKIPPED"
    FHIR_TASK_CORRELATION_NOT_ALLOWED = "FHIR_TASK_CORRELATION_NOT_ALLOWED"
    FHIR_TASK_CORRELATION_MISSING_BUT_REQUIRED = "FHIR_TASK_CORRELATION_MISSING_BUT_REQUIRED"
    FHIR_TASK_INPUT_COUNT_BELOW_MIN = "FHIR_TASK_INPUT_COUNT_BELOW_MIN"
    FHIR_TASK_INPUT_COUNT_EXCEEDS_MAX = "FHIR_TASK_INPUT_COUNT_EXCEEDS_MAX"
    FHIR_TASK_INPUT_SLICE_COUNT_BELOW_MIN = "FHIR_TASK_INPUT_SLICE_COUNT_BELOW_MIN"
    FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_MAX = "FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_MAX"
    FHIR_TASK_UNKNOWN_CODE = "FHIR_TASK_UNKNOWN_CODE"
