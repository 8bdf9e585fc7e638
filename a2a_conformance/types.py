"""
Immutable A2A protocol types
Maintains immutability and type safety through Pydantic

Field names serialize with the protocol's camelCase aliases. Polymorphic
values (message parts, security schemes, stream events) are closed tagged
unions so an unrecognized shape is rejected at parse time.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class A2AErrorCodes(Enum):
    """A2A protocol error codes"""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    TASK_NOT_FOUND = -32001
    TASK_NOT_CANCELABLE = -32002
    PUSH_NOTIFICATION_NOT_SUPPORTED = -32003
    UNSUPPORTED_OPERATION = -32004
    CONTENT_TYPE_NOT_SUPPORTED = -32005
    INVALID_AGENT_RESPONSE = -32006


# Message parts

class A2AFile(BaseModel):
    """A2A file representation, either inline base64 bytes or a URI reference"""
    model_config = {"frozen": True}

    bytes: Optional[str] = None
    uri: Optional[str] = None
    name: Optional[str] = None
    mime_type: Optional[str] = Field(None, alias="mimeType")


class A2ATextPart(BaseModel):
    """A2A text part"""
    model_config = {"frozen": True, "extra": "forbid"}

    kind: Literal["text"] = "text"
    text: str
    metadata: Optional[Dict[str, Any]] = None


class A2ADataPart(BaseModel):
    """A2A data part"""
    model_config = {"frozen": True, "extra": "forbid"}

    kind: Literal["data"] = "data"
    data: Dict[str, Any]
    metadata: Optional[Dict[str, Any]] = None


class A2AFilePart(BaseModel):
    """A2A file part"""
    model_config = {"frozen": True}

    kind: Literal["file"] = "file"
    file: A2AFile
    metadata: Optional[Dict[str, Any]] = None


A2APart = Annotated[Union[A2ATextPart, A2ADataPart, A2AFilePart], Field(discriminator="kind")]


class A2AMessage(BaseModel):
    """Core A2A message type"""
    model_config = {"frozen": True}

    role: Literal["user", "agent"]
    parts: List[A2APart]
    message_id: str = Field(alias="messageId")
    context_id: Optional[str] = Field(None, alias="contextId")
    task_id: Optional[str] = Field(None, alias="taskId")
    kind: Literal["message"] = "message"
    metadata: Optional[Dict[str, Any]] = None
    extensions: Optional[List[str]] = None
    reference_task_ids: Optional[List[str]] = Field(None, alias="referenceTaskIds")


# Tasks

class TaskState(str, Enum):
    """Task state enumeration"""
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    REJECTED = "rejected"
    AUTH_REQUIRED = "auth-required"
    UNKNOWN = "unknown"


class A2ATaskStatus(BaseModel):
    """Task status information"""
    model_config = {"frozen": True}

    state: TaskState
    message: Optional[A2AMessage] = None
    timestamp: Optional[str] = None


class A2AArtifact(BaseModel):
    """A2A artifact type"""
    model_config = {"frozen": True}

    artifact_id: str = Field(alias="artifactId")
    name: Optional[str] = None
    description: Optional[str] = None
    parts: List[A2APart]
    metadata: Optional[Dict[str, Any]] = None
    extensions: Optional[List[str]] = None


class A2ATask(BaseModel):
    """A2A task representation"""
    model_config = {"frozen": True}

    id: str
    context_id: Optional[str] = Field(None, alias="contextId")
    status: A2ATaskStatus
    history: Optional[List[A2AMessage]] = None
    artifacts: Optional[List[A2AArtifact]] = None
    metadata: Optional[Dict[str, Any]] = None
    kind: Literal["task"] = "task"


# Streaming events

class TaskStatusUpdateEvent(BaseModel):
    """A2A status update stream event"""
    model_config = {"frozen": True}

    kind: Literal["status-update"] = "status-update"
    task_id: str = Field(alias="taskId")
    context_id: str = Field(alias="contextId")
    status: A2ATaskStatus
    final: bool
    metadata: Optional[Dict[str, Any]] = None


class TaskArtifactUpdateEvent(BaseModel):
    """A2A artifact update stream event"""
    model_config = {"frozen": True}

    kind: Literal["artifact-update"] = "artifact-update"
    task_id: str = Field(alias="taskId")
    context_id: str = Field(alias="contextId")
    artifact: A2AArtifact
    append: Optional[bool] = None
    last_chunk: Optional[bool] = Field(None, alias="lastChunk")
    metadata: Optional[Dict[str, Any]] = None


A2AStreamEvent = Annotated[
    Union[TaskStatusUpdateEvent, TaskArtifactUpdateEvent],
    Field(discriminator="kind")
]


# Security schemes
#
# Fields the validator reports on are optional here so a missing value
# surfaces as IncompleteSecurityScheme rather than a parse error.

class APIKeySecurityScheme(BaseModel):
    """API key security scheme"""
    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["apiKey"] = "apiKey"
    name: Optional[str] = None
    in_: Optional[str] = Field(None, alias="in")
    description: Optional[str] = None


class HTTPAuthSecurityScheme(BaseModel):
    """HTTP authentication security scheme"""
    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["http"] = "http"
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(None, alias="bearerFormat")
    description: Optional[str] = None


class AuthorizationCodeOAuthFlow(BaseModel):
    """OAuth2 authorization code flow"""
    model_config = {"frozen": True, "populate_by_name": True}

    authorization_url: Optional[str] = Field(None, alias="authorizationUrl")
    token_url: Optional[str] = Field(None, alias="tokenUrl")
    refresh_url: Optional[str] = Field(None, alias="refreshUrl")
    scopes: Dict[str, str] = Field(default_factory=dict)


class ClientCredentialsOAuthFlow(BaseModel):
    """OAuth2 client credentials flow"""
    model_config = {"frozen": True, "populate_by_name": True}

    token_url: Optional[str] = Field(None, alias="tokenUrl")
    refresh_url: Optional[str] = Field(None, alias="refreshUrl")
    scopes: Dict[str, str] = Field(default_factory=dict)


class ImplicitOAuthFlow(BaseModel):
    """OAuth2 implicit flow"""
    model_config = {"frozen": True, "populate_by_name": True}

    authorization_url: Optional[str] = Field(None, alias="authorizationUrl")
    refresh_url: Optional[str] = Field(None, alias="refreshUrl")
    scopes: Dict[str, str] = Field(default_factory=dict)


class PasswordOAuthFlow(BaseModel):
    """OAuth2 resource owner password flow"""
    model_config = {"frozen": True, "populate_by_name": True}

    token_url: Optional[str] = Field(None, alias="tokenUrl")
    refresh_url: Optional[str] = Field(None, alias="refreshUrl")
    scopes: Dict[str, str] = Field(default_factory=dict)


class OAuthFlows(BaseModel):
    """Available OAuth2 flows"""
    model_config = {"frozen": True, "populate_by_name": True}

    authorization_code: Optional[AuthorizationCodeOAuthFlow] = Field(None, alias="authorizationCode")
    client_credentials: Optional[ClientCredentialsOAuthFlow] = Field(None, alias="clientCredentials")
    implicit: Optional[ImplicitOAuthFlow] = None
    password: Optional[PasswordOAuthFlow] = None


class OAuth2SecurityScheme(BaseModel):
    """OAuth2 security scheme"""
    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["oauth2"] = "oauth2"
    flows: OAuthFlows = Field(default_factory=OAuthFlows)
    description: Optional[str] = None


class OpenIdConnectSecurityScheme(BaseModel):
    """OpenID Connect security scheme"""
    model_config = {"frozen": True, "populate_by_name": True}

    type: Literal["openIdConnect"] = "openIdConnect"
    open_id_connect_url: Optional[str] = Field(None, alias="openIdConnectUrl")
    description: Optional[str] = None


SecurityScheme = Annotated[
    Union[APIKeySecurityScheme, HTTPAuthSecurityScheme, OAuth2SecurityScheme, OpenIdConnectSecurityScheme],
    Field(discriminator="type")
]


# Agent card

class AgentExtension(BaseModel):
    """Extension declared by an agent"""
    model_config = {"frozen": True}

    uri: str
    required: Optional[bool] = None
    description: Optional[str] = None
    params: Optional[Dict[str, Any]] = None


class AgentSkill(BaseModel):
    """Agent skill definition"""
    model_config = {"frozen": True}

    id: str
    name: str
    description: str
    tags: List[str]
    examples: Optional[List[str]] = None
    input_modes: Optional[List[str]] = Field(None, alias="inputModes")
    output_modes: Optional[List[str]] = Field(None, alias="outputModes")


class AgentCapabilities(BaseModel):
    """Agent capabilities definition"""
    model_config = {"frozen": True}

    streaming: Optional[bool] = None
    push_notifications: Optional[bool] = Field(None, alias="pushNotifications")
    state_transition_history: Optional[bool] = Field(None, alias="stateTransitionHistory")
    extensions: Optional[List[AgentExtension]] = None


class AgentProvider(BaseModel):
    """Agent provider information"""
    model_config = {"frozen": True}

    organization: str
    url: str


class AgentInterface(BaseModel):
    """Additional transport interface announced by an agent"""
    model_config = {"frozen": True}

    url: str
    transport: str


class AgentCard(BaseModel):
    """A2A agent card for discovery"""
    model_config = {"frozen": True}

    protocol_version: str = Field(alias="protocolVersion")
    name: str
    description: str
    url: str
    preferred_transport: Optional[str] = Field(None, alias="preferredTransport")
    version: str
    provider: Optional[AgentProvider] = None
    capabilities: AgentCapabilities
    default_input_modes: List[str] = Field(alias="defaultInputModes")
    default_output_modes: List[str] = Field(alias="defaultOutputModes")
    skills: List[AgentSkill]
    documentation_url: Optional[str] = Field(None, alias="documentationUrl")
    icon_url: Optional[str] = Field(None, alias="iconUrl")
    supports_authenticated_extended_card: Optional[bool] = Field(None, alias="supportsAuthenticatedExtendedCard")
    additional_interfaces: Optional[List[AgentInterface]] = Field(None, alias="additionalInterfaces")
    security_schemes: Optional[Dict[str, SecurityScheme]] = Field(None, alias="securitySchemes")
    security: Optional[List[Dict[str, List[str]]]] = None


# JSON-RPC envelopes

class JSONRPCError(BaseModel):
    """JSON-RPC error format"""
    model_config = {"frozen": True}

    code: int
    message: str
    data: Optional[Any] = None


class JSONRPCRequest(BaseModel):
    """JSON-RPC request format"""
    model_config = {"frozen": True}

    jsonrpc: Literal["2.0"] = "2.0"
    id: Union[str, int]
    method: str
    params: Optional[Dict[str, Any]] = None


class JSONRPCSuccessResponse(BaseModel):
    """JSON-RPC success response"""
    model_config = {"frozen": True}

    jsonrpc: Literal["2.0"] = "2.0"
    id: Union[str, int, None]
    result: Any


class JSONRPCErrorResponse(BaseModel):
    """JSON-RPC error response"""
    model_config = {"frozen": True}

    jsonrpc: Literal["2.0"] = "2.0"
    id: Union[str, int, None]
    error: JSONRPCError


JSONRPCResponse = Union[JSONRPCSuccessResponse, JSONRPCErrorResponse]


# Request parameters

class PushNotificationAuthenticationInfo(BaseModel):
    """Authentication details for push notifications"""
    model_config = {"frozen": True}

    schemes: List[str]
    credentials: Optional[str] = None


class PushNotificationConfig(BaseModel):
    """Where an agent should deliver task updates while the client is disconnected"""
    model_config = {"frozen": True}

    url: str
    id: Optional[str] = None
    token: Optional[str] = None
    authentication: Optional[PushNotificationAuthenticationInfo] = None


class MessageSendConfiguration(BaseModel):
    """Configuration for message sending"""
    model_config = {"frozen": True}

    accepted_output_modes: Optional[List[str]] = Field(None, alias="acceptedOutputModes")
    history_length: Optional[int] = Field(None, alias="historyLength")
    blocking: Optional[bool] = None
    push_notification_config: Optional[PushNotificationConfig] = Field(None, alias="pushNotificationConfig")


class SendMessageParams(BaseModel):
    """Parameters for message/send and message/stream"""
    model_config = {"frozen": True}

    message: A2AMessage
    configuration: Optional[MessageSendConfiguration] = None
    metadata: Optional[Dict[str, Any]] = None


class TaskIdParams(BaseModel):
    """Parameters carrying only a task id"""
    model_config = {"frozen": True}

    id: str
    metadata: Optional[Dict[str, Any]] = None


class TaskQueryParams(BaseModel):
    """Parameters for tasks/get"""
    model_config = {"frozen": True}

    id: str
    history_length: Optional[int] = Field(None, alias="historyLength")
    metadata: Optional[Dict[str, Any]] = None


class TaskPushNotificationConfig(BaseModel):
    """Parameters for tasks/pushNotificationConfig/set"""
    model_config = {"frozen": True}

    task_id: str = Field(alias="taskId")
    push_notification_config: PushNotificationConfig = Field(alias="pushNotificationConfig")


class PushNotificationConfigQueryParams(BaseModel):
    """Parameters for tasks/pushNotificationConfig/get and /delete"""
    model_config = {"frozen": True}

    id: str
    push_notification_config_id: Optional[str] = Field(None, alias="pushNotificationConfigId")
    metadata: Optional[Dict[str, Any]] = None


# Typed requests

class SendMessageRequest(JSONRPCRequest):
    """A2A message/send request"""
    model_config = {"frozen": True}

    method: Literal["message/send"] = "message/send"
    params: SendMessageParams


class SendStreamingMessageRequest(JSONRPCRequest):
    """A2A message/stream request"""
    model_config = {"frozen": True}

    method: Literal["message/stream"] = "message/stream"
    params: SendMessageParams


class GetTaskRequest(JSONRPCRequest):
    """A2A tasks/get request"""
    model_config = {"frozen": True}

    method: Literal["tasks/get"] = "tasks/get"
    params: TaskQueryParams


class CancelTaskRequest(JSONRPCRequest):
    """A2A tasks/cancel request"""
    model_config = {"frozen": True}

    method: Literal["tasks/cancel"] = "tasks/cancel"
    params: TaskIdParams


class TaskResubscriptionRequest(JSONRPCRequest):
    """A2A tasks/resubscribe request"""
    model_config = {"frozen": True}

    method: Literal["tasks/resubscribe"] = "tasks/resubscribe"
    params: TaskIdParams


class SetTaskPushNotificationConfigRequest(JSONRPCRequest):
    """A2A tasks/pushNotificationConfig/set request"""
    model_config = {"frozen": True}

    method: Literal["tasks/pushNotificationConfig/set"] = "tasks/pushNotificationConfig/set"
    params: TaskPushNotificationConfig


class GetTaskPushNotificationConfigRequest(JSONRPCRequest):
    """A2A tasks/pushNotificationConfig/get request"""
    model_config = {"frozen": True}

    method: Literal["tasks/pushNotificationConfig/get"] = "tasks/pushNotificationConfig/get"
    params: PushNotificationConfigQueryParams


class ListTaskPushNotificationConfigRequest(JSONRPCRequest):
    """A2A tasks/pushNotificationConfig/list request"""
    model_config = {"frozen": True}

    method: Literal["tasks/pushNotificationConfig/list"] = "tasks/pushNotificationConfig/list"
    params: TaskIdParams


class DeleteTaskPushNotificationConfigRequest(JSONRPCRequest):
    """A2A tasks/pushNotificationConfig/delete request"""
    model_config = {"frozen": True}

    method: Literal["tasks/pushNotificationConfig/delete"] = "tasks/pushNotificationConfig/delete"
    params: PushNotificationConfigQueryParams


class GetAuthenticatedExtendedCardRequest(JSONRPCRequest):
    """A2A agent/getAuthenticatedExtendedCard request"""
    model_config = {"frozen": True}

    method: Literal["agent/getAuthenticatedExtendedCard"] = "agent/getAuthenticatedExtendedCard"
    params: Optional[Dict[str, Any]] = None


A2ARequest = Union[
    SendMessageRequest,
    SendStreamingMessageRequest,
    GetTaskRequest,
    CancelTaskRequest,
    TaskResubscriptionRequest,
    SetTaskPushNotificationConfigRequest,
    GetTaskPushNotificationConfigRequest,
    ListTaskPushNotificationConfigRequest,
    DeleteTaskPushNotificationConfigRequest,
    GetAuthenticatedExtendedCardRequest,
]


# Factory functions for creating parts

def create_a2a_text_part(text: str, metadata: Optional[Dict[str, Any]] = None) -> A2ATextPart:
    """Create an A2A text part"""
    return A2ATextPart(kind="text", text=text, metadata=metadata)


def create_a2a_data_part(data: Dict[str, Any], metadata: Optional[Dict[str, Any]] = None) -> A2ADataPart:
    """Create an A2A data part"""
    return A2ADataPart(kind="data", data=data, metadata=metadata)


def create_a2a_file_part(file: A2AFile, metadata: Optional[Dict[str, Any]] = None) -> A2AFilePart:
    """Create an A2A file part"""
    return A2AFilePart(kind="file", file=file, metadata=metadata)


def create_jsonrpc_success_response(id: Union[str, int, None], result: Any) -> JSONRPCSuccessResponse:
    """Create a JSON-RPC success response"""
    return JSONRPCSuccessResponse(jsonrpc="2.0", id=id, result=result)
