"""
A2A (Agent-to-Agent) Protocol Conformance

This package checks that values exchanged between agents conform to the A2A
protocol before they are sent or trusted: task lifecycle transitions, field
formats, security scheme completeness, extension requirements and JSON-RPC
request shapes.

Main exports:
- Types: Immutable A2A protocol models
- StateMachine: Task lifecycle transitions
- Validation: Primitive field validators
- Security: Security scheme validation
- Extensions: Agent extension validation
- Protocol: Build-and-validate constructors and request parsing
- AgentCard: Agent card construction and validation
- Serialization: JSON wire round-trip

Usage Examples:

# Build a message and a task:
message = unwrap(create_message("user", [create_a2a_text_part("Hello")]))
task = unwrap(create_task(message, context_id="ctx_1"))

# Drive the task lifecycle:
result = apply_task_event(task, TaskEvent.START_WORKING)

# Parse an incoming JSON-RPC request:
request = parse_request({"jsonrpc": "2.0", "id": 1, "method": "sendMessage", "params": {...}})
"""

from .agent_card import (
    check_agent_card_extensions,
    create_agent_card,
    create_minimal_agent_card,
    parse_agent_card,
    validate_agent_card,
    validate_skill,
)
from .config import (
    DEFAULT_VALIDATION_CONFIG,
    PROTOCOL_VERSION,
    ValidationConfig,
    create_validation_config_from_env,
)
from .errors import (
    Failure,
    IllegalTransition,
    IncompleteSecurityScheme,
    InvalidField,
    MalformedRequest,
    MissingRequiredExtension,
    PayloadParseError,
    ProtocolError,
    Result,
    Success,
    create_jsonrpc_error_response,
    is_failure,
    is_success,
    to_jsonrpc_error,
)
from .exceptions import A2AConformanceException, ProtocolViolationError, unwrap
from .extensions import (
    DEFAULT_EXTENSION_REGISTRY,
    ExtensionParamSchema,
    ExtensionRegistry,
    check_required_extensions,
    validate_extension,
)
from .methods import LEGACY_METHOD_NAMES, RequestMethod, is_streaming_method, normalize_method
from .protocol import (
    append_history,
    apply_artifact_update,
    apply_status_update,
    apply_task_event,
    create_artifact,
    create_artifact_update_event,
    create_cancel_task_request,
    create_delete_push_notification_config_request,
    create_get_push_notification_config_request,
    create_get_task_request,
    create_list_push_notification_configs_request,
    create_message,
    create_request,
    create_resubscribe_request,
    create_send_message_request,
    create_set_push_notification_config_request,
    create_status_update_event,
    create_task,
    parse_request,
    validate_event_stream,
    validate_message,
    validate_task,
)
from .security import parse_security_scheme, validate_security_scheme, validate_security_schemes
from .serialization import deserialize_task, parse_json_payload, serialize_response, serialize_task, to_wire
from .state_machine import (
    INTERRUPTED_STATES,
    TERMINAL_STATES,
    TaskEvent,
    allowed_events,
    apply_transition,
    is_terminal_state,
    validate_state_transition,
)
from .types import (
    A2AArtifact,
    A2AErrorCodes,
    A2AFile,
    A2AMessage,
    A2ATask,
    A2ATaskStatus,
    AgentCard,
    AgentExtension,
    AgentSkill,
    APIKeySecurityScheme,
    HTTPAuthSecurityScheme,
    OAuth2SecurityScheme,
    OpenIdConnectSecurityScheme,
    TaskArtifactUpdateEvent,
    TaskState,
    TaskStatusUpdateEvent,
    create_a2a_data_part,
    create_a2a_file_part,
    create_a2a_text_part,
)
from .validation import (
    FieldKind,
    validate_agent_name,
    validate_field,
    validate_identifier,
    validate_media_type,
    validate_uri,
    validate_url,
    validate_version,
)

__all__ = [
    # Types
    "A2AArtifact",
    "A2AErrorCodes",
    "A2AFile",
    "A2AMessage",
    "A2ATask",
    "A2ATaskStatus",
    "AgentCard",
    "AgentExtension",
    "AgentSkill",
    "APIKeySecurityScheme",
    "HTTPAuthSecurityScheme",
    "OAuth2SecurityScheme",
    "OpenIdConnectSecurityScheme",
    "TaskArtifactUpdateEvent",
    "TaskState",
    "TaskStatusUpdateEvent",
    "create_a2a_data_part",
    "create_a2a_file_part",
    "create_a2a_text_part",

    # Configuration
    "DEFAULT_VALIDATION_CONFIG",
    "PROTOCOL_VERSION",
    "ValidationConfig",
    "create_validation_config_from_env",

    # Results and errors
    "Failure",
    "IllegalTransition",
    "IncompleteSecurityScheme",
    "InvalidField",
    "MalformedRequest",
    "MissingRequiredExtension",
    "PayloadParseError",
    "ProtocolError",
    "Result",
    "Success",
    "create_jsonrpc_error_response",
    "is_failure",
    "is_success",
    "to_jsonrpc_error",
    "A2AConformanceException",
    "ProtocolViolationError",
    "unwrap",

    # State machine
    "INTERRUPTED_STATES",
    "TERMINAL_STATES",
    "TaskEvent",
    "allowed_events",
    "apply_transition",
    "is_terminal_state",
    "validate_state_transition",

    # Field validators
    "FieldKind",
    "validate_agent_name",
    "validate_field",
    "validate_identifier",
    "validate_media_type",
    "validate_uri",
    "validate_url",
    "validate_version",

    # Security and extensions
    "parse_security_scheme",
    "validate_security_scheme",
    "validate_security_schemes",
    "DEFAULT_EXTENSION_REGISTRY",
    "ExtensionParamSchema",
    "ExtensionRegistry",
    "check_required_extensions",
    "validate_extension",

    # Methods
    "LEGACY_METHOD_NAMES",
    "RequestMethod",
    "is_streaming_method",
    "normalize_method",

    # Protocol
    "append_history",
    "apply_artifact_update",
    "apply_status_update",
    "apply_task_event",
    "create_artifact",
    "create_artifact_update_event",
    "create_cancel_task_request",
    "create_delete_push_notification_config_request",
    "create_get_push_notification_config_request",
    "create_get_task_request",
    "create_list_push_notification_configs_request",
    "create_message",
    "create_request",
    "create_resubscribe_request",
    "create_send_message_request",
    "create_set_push_notification_config_request",
    "create_status_update_event",
    "create_task",
    "parse_request",
    "validate_event_stream",
    "validate_message",
    "validate_task",

    # Agent card
    "check_agent_card_extensions",
    "create_agent_card",
    "create_minimal_agent_card",
    "parse_agent_card",
    "validate_agent_card",
    "validate_skill",

    # Serialization
    "deserialize_task",
    "parse_json_payload",
    "serialize_response",
    "serialize_task",
    "to_wire",
]
