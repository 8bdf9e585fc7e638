"""
Build-and-validate constructors for A2A protocol values

Every constructor routes primitive fields through the field validators and,
for task-affecting operations, consults the task state machine. It returns
the fully formed value only when every check passes, otherwise the first
failure with enough context to build a protocol-level error response.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from .config import ValidationConfig
from .errors import (
    Failure,
    InvalidField,
    Result,
    Success,
    from_validation_error,
    invalid_field,
    with_field_prefix,
)
from .methods import RequestMethod, normalize_method
from .state_machine import (
    INTERRUPTED_STATES,
    TERMINAL_STATES,
    TaskEvent,
    apply_transition,
    validate_state_transition,
)
from .types import (
    A2AArtifact,
    A2AFilePart,
    A2AMessage,
    A2APart,
    A2ARequest,
    A2ATask,
    A2ATaskStatus,
    CancelTaskRequest,
    DeleteTaskPushNotificationConfigRequest,
    GetAuthenticatedExtendedCardRequest,
    GetTaskPushNotificationConfigRequest,
    GetTaskRequest,
    ListTaskPushNotificationConfigRequest,
    MessageSendConfiguration,
    PushNotificationConfig,
    SendMessageRequest,
    SendStreamingMessageRequest,
    SetTaskPushNotificationConfigRequest,
    TaskArtifactUpdateEvent,
    TaskResubscriptionRequest,
    TaskState,
    TaskStatusUpdateEvent,
)
from .validation import (
    validate_artifact_id,
    validate_context_id,
    validate_identifier,
    validate_media_type,
    validate_message_id,
    validate_non_empty_string,
    validate_task_id,
    validate_uri,
    validate_url,
)

logger = logging.getLogger(__name__)

RequestId = Union[str, int]


def generate_id(prefix: str) -> str:
    """Generate a protocol-safe identifier"""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _build(model: type, prefix: Optional[str] = None, **fields: Any) -> Result[Any, InvalidField]:
    """Construct a pydantic model, mapping construction errors to InvalidField"""
    try:
        return Success(model(**fields))
    except ValidationError as error:
        return from_validation_error(error, prefix)


def _first_failure(checks: Iterable[Callable[[], Result]]) -> Optional[Failure]:
    for check in checks:
        result = check()
        if isinstance(result, Failure):
            return result
    return None


# Composite value validation

def validate_part(part: Any, field: str = "part", config: Optional[ValidationConfig] = None) -> Result[Any, InvalidField]:
    """Validate a single message or artifact part"""
    if isinstance(part, A2AFilePart):
        file = part.file
        if (file.bytes is None) == (file.uri is None):
            return invalid_field(f"{field}.file", file, "must carry exactly one of 'bytes' or 'uri'")
        if file.bytes is not None and not file.bytes:
            return invalid_field(f"{field}.file.bytes", file.bytes, "cannot be empty")
        if file.uri is not None:
            uri_result = validate_uri(file.uri, f"{field}.file.uri", config)
            if isinstance(uri_result, Failure):
                return uri_result
        if file.mime_type is not None:
            media_result = validate_media_type(file.mime_type, f"{field}.file.mimeType")
            if isinstance(media_result, Failure):
                return media_result
    return Success(part)


def validate_parts(parts: Any, field: str = "parts", config: Optional[ValidationConfig] = None) -> Result[Any, InvalidField]:
    """Validate a non-empty ordered sequence of parts"""
    if not isinstance(parts, list):
        return invalid_field(field, parts, "must be a list")
    if not parts:
        return invalid_field(field, parts, "must contain at least one part")
    for index, part in enumerate(parts):
        result = validate_part(part, f"{field}[{index}]", config)
        if isinstance(result, Failure):
            return result
    return Success(parts)


def _validate_uri_list(values: Optional[List[str]], field: str, config: Optional[ValidationConfig]) -> Result:
    for index, value in enumerate(values or []):
        result = validate_uri(value, f"{field}[{index}]", config)
        if isinstance(result, Failure):
            return result
    return Success(values)


def _validate_identifier_list(values: Optional[List[str]], field: str, config: Optional[ValidationConfig]) -> Result:
    for index, value in enumerate(values or []):
        result = validate_identifier(value, f"{field}[{index}]", config)
        if isinstance(result, Failure):
            return result
    return Success(values)


def validate_message(message: A2AMessage, config: Optional[ValidationConfig] = None) -> Result[A2AMessage, InvalidField]:
    """Validate a constructed or parsed message"""
    failure = _first_failure([
        lambda: validate_message_id(message.message_id, config),
        lambda: validate_parts(message.parts, "parts", config),
        lambda: validate_context_id(message.context_id, config) if message.context_id is not None else Success(None),
        lambda: validate_task_id(message.task_id, config) if message.task_id is not None else Success(None),
        lambda: _validate_identifier_list(message.reference_task_ids, "referenceTaskIds", config),
        lambda: _validate_uri_list(message.extensions, "extensions", config),
    ])
    return failure or Success(message)


def validate_artifact(artifact: A2AArtifact, config: Optional[ValidationConfig] = None) -> Result[A2AArtifact, InvalidField]:
    """Validate an artifact's identifier, parts and extension URIs"""
    failure = _first_failure([
        lambda: validate_artifact_id(artifact.artifact_id, config),
        lambda: validate_parts(artifact.parts, "parts", config),
        lambda: _validate_uri_list(artifact.extensions, "extensions", config),
    ])
    return failure or Success(artifact)


def validate_task(task: A2ATask, config: Optional[ValidationConfig] = None) -> Result[A2ATask, InvalidField]:
    """
    Validate a task record.

    History message ids and artifact ids must each be unique within the task,
    and messages linked to a task must be linked to this one.
    """
    failure = _first_failure([
        lambda: validate_task_id(task.id, config),
        lambda: validate_context_id(task.context_id, config) if task.context_id is not None else Success(None),
    ])
    if failure:
        return failure

    if task.status.message is not None:
        status_result = validate_message(task.status.message, config)
        if isinstance(status_result, Failure):
            return with_field_prefix(status_result, "status.message")

    seen_messages = set()
    for index, message in enumerate(task.history or []):
        result = validate_message(message, config)
        if isinstance(result, Failure):
            return with_field_prefix(result, f"history[{index}]")
        if message.message_id in seen_messages:
            return invalid_field(f"history[{index}].messageId", message.message_id, "duplicate message id in task history")
        if message.task_id is not None and message.task_id != task.id:
            return invalid_field(f"history[{index}].taskId", message.task_id, "message belongs to a different task")
        seen_messages.add(message.message_id)

    seen_artifacts = set()
    for index, artifact in enumerate(task.artifacts or []):
        result = validate_artifact(artifact, config)
        if isinstance(result, Failure):
            return with_field_prefix(result, f"artifacts[{index}]")
        if artifact.artifact_id in seen_artifacts:
            return invalid_field(f"artifacts[{index}].artifactId", artifact.artifact_id, "duplicate artifact id in task")
        seen_artifacts.add(artifact.artifact_id)

    return Success(task)


def validate_status_update_event(
    event: TaskStatusUpdateEvent,
    config: Optional[ValidationConfig] = None
) -> Result[TaskStatusUpdateEvent, InvalidField]:
    """
    Validate a status update; a final event must leave the task terminal or interrupted.

    Interrupted states count because a stream ends while the agent waits for
    input or authentication, so input-required and auth-required may be final.
    """
    failure = _first_failure([
        lambda: validate_task_id(event.task_id, config),
        lambda: validate_context_id(event.context_id, config),
    ])
    if failure:
        return failure

    if event.status.message is not None:
        result = validate_message(event.status.message, config)
        if isinstance(result, Failure):
            return with_field_prefix(result, "status.message")

    if event.final and event.status.state not in TERMINAL_STATES | INTERRUPTED_STATES:
        return invalid_field(
            "final", event.final,
            f"a final status update cannot leave the task in state '{event.status.state.value}'"
        )
    return Success(event)


def validate_artifact_update_event(
    event: TaskArtifactUpdateEvent,
    config: Optional[ValidationConfig] = None
) -> Result[TaskArtifactUpdateEvent, InvalidField]:
    """
    Validate an artifact update event.

    append and lastChunk may both be set: the last chunk of a streamed artifact
    is itself appended to the earlier ones.
    """
    failure = _first_failure([
        lambda: validate_task_id(event.task_id, config),
        lambda: validate_context_id(event.context_id, config),
    ])
    if failure:
        return failure

    result = validate_artifact(event.artifact, config)
    if isinstance(result, Failure):
        return with_field_prefix(result, "artifact")
    return Success(event)


def validate_stream_event(event: Any, config: Optional[ValidationConfig] = None) -> Result[Any, InvalidField]:
    """Validate a single streaming event of either kind"""
    if isinstance(event, TaskStatusUpdateEvent):
        return validate_status_update_event(event, config)
    if isinstance(event, TaskArtifactUpdateEvent):
        return validate_artifact_update_event(event, config)
    return invalid_field("kind", event, "must be a status-update or artifact-update event")


def validate_event_stream(
    events: Iterable[Any],
    config: Optional[ValidationConfig] = None
) -> Iterator[Result[Any, InvalidField]]:
    """
    Lazily validate a stream of task events.

    Each event is validated on its own as it is pulled from the stream; no
    events are buffered or reordered. Events arriving after a final status
    update are rejected.
    """
    finished = False
    for event in events:
        if finished:
            yield invalid_field("final", event, "event received after the final event of the stream")
            continue
        result = validate_stream_event(event, config)
        if isinstance(result, Success) and isinstance(event, TaskStatusUpdateEvent) and event.final:
            finished = True
        yield result


def validate_push_notification_config(
    push_config: PushNotificationConfig,
    config: Optional[ValidationConfig] = None
) -> Result[PushNotificationConfig, InvalidField]:
    """Validate a push notification endpoint configuration"""
    url_result = validate_url(push_config.url, "pushNotificationConfig.url", config)
    if isinstance(url_result, Failure):
        return url_result
    if push_config.id is not None:
        id_result = validate_identifier(push_config.id, "pushNotificationConfig.id", config)
        if isinstance(id_result, Failure):
            return id_result
    if push_config.authentication is not None:
        schemes = push_config.authentication.schemes
        if not schemes:
            return invalid_field("pushNotificationConfig.authentication.schemes", schemes, "must list at least one scheme")
        for index, scheme in enumerate(schemes):
            result = validate_non_empty_string(scheme, f"pushNotificationConfig.authentication.schemes[{index}]")
            if isinstance(result, Failure):
                return result
    return Success(push_config)


def validate_send_configuration(
    configuration: MessageSendConfiguration,
    config: Optional[ValidationConfig] = None
) -> Result[MessageSendConfiguration, InvalidField]:
    """Validate message/send configuration: output modes, history length and push config"""
    for index, mode in enumerate(configuration.accepted_output_modes or []):
        result = validate_media_type(mode, f"configuration.acceptedOutputModes[{index}]")
        if isinstance(result, Failure):
            return result

    length_result = _validate_history_length(configuration.history_length, "configuration.historyLength")
    if isinstance(length_result, Failure):
        return length_result

    if configuration.push_notification_config is not None:
        push_result = validate_push_notification_config(configuration.push_notification_config, config)
        if isinstance(push_result, Failure):
            return with_field_prefix(push_result, "configuration")

    return Success(configuration)


# Value constructors

def create_message(
    role: str,
    parts: List[A2APart],
    message_id: Optional[str] = None,
    context_id: Optional[str] = None,
    task_id: Optional[str] = None,
    reference_task_ids: Optional[List[str]] = None,
    extensions: Optional[List[str]] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[A2AMessage, InvalidField]:
    """Create a validated A2A message, generating a message id if none is given"""
    if role not in ("user", "agent"):
        return invalid_field("role", role, "must be 'user' or 'agent'")

    built = _build(
        A2AMessage,
        role=role,
        parts=parts,
        messageId=message_id if message_id is not None else generate_id("msg"),
        contextId=context_id,
        taskId=task_id,
        referenceTaskIds=reference_task_ids,
        extensions=extensions,
        metadata=metadata,
        kind="message",
    )
    if isinstance(built, Failure):
        return built
    return validate_message(built.data, config)


def create_task(
    initial_message: A2AMessage,
    task_id: Optional[str] = None,
    context_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, InvalidField]:
    """Create a validated task in the submitted state with the initial message as history"""
    resolved_task_id = task_id or initial_message.task_id or generate_id("task")
    resolved_context_id = context_id or initial_message.context_id

    if initial_message.context_id is not None and initial_message.context_id != resolved_context_id:
        return invalid_field("contextId", context_id, "does not match the initial message's contextId")

    built = _build(
        A2ATask,
        id=resolved_task_id,
        contextId=resolved_context_id,
        status=A2ATaskStatus(state=TaskState.SUBMITTED, timestamp=_timestamp()),
        history=[initial_message],
        artifacts=[],
        metadata=metadata,
        kind="task",
    )
    if isinstance(built, Failure):
        return built
    return validate_task(built.data, config)


def create_artifact(
    parts: List[A2APart],
    artifact_id: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    extensions: Optional[List[str]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[A2AArtifact, InvalidField]:
    """Create a validated artifact"""
    built = _build(
        A2AArtifact,
        artifactId=artifact_id if artifact_id is not None else generate_id("artifact"),
        name=name,
        description=description,
        parts=parts,
        metadata=metadata,
        extensions=extensions,
    )
    if isinstance(built, Failure):
        return built
    return validate_artifact(built.data, config)


def create_status_update_event(
    task_id: str,
    context_id: str,
    state: Union[TaskState, str],
    final: bool = False,
    message: Optional[A2AMessage] = None,
    timestamp: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[TaskStatusUpdateEvent, InvalidField]:
    """Create a validated status-update event"""
    try:
        task_state = TaskState(state)
    except ValueError:
        return invalid_field("status.state", state, "is not a task state")

    built = _build(
        TaskStatusUpdateEvent,
        kind="status-update",
        taskId=task_id,
        contextId=context_id,
        status=A2ATaskStatus(state=task_state, message=message, timestamp=timestamp or _timestamp()),
        final=final,
        metadata=metadata,
    )
    if isinstance(built, Failure):
        return built
    return validate_status_update_event(built.data, config)


def create_artifact_update_event(
    task_id: str,
    context_id: str,
    artifact: A2AArtifact,
    append: Optional[bool] = None,
    last_chunk: Optional[bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[TaskArtifactUpdateEvent, InvalidField]:
    """Create a validated artifact-update event"""
    built = _build(
        TaskArtifactUpdateEvent,
        kind="artifact-update",
        taskId=task_id,
        contextId=context_id,
        artifact=artifact,
        append=append,
        lastChunk=last_chunk,
        metadata=metadata,
    )
    if isinstance(built, Failure):
        return built
    return validate_artifact_update_event(built.data, config)


# Task updates

def apply_task_event(
    task: A2ATask,
    event: Union[TaskEvent, str],
    message: Optional[A2AMessage] = None,
    timestamp: Optional[str] = None,
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, Any]:
    """Apply a lifecycle event to a task, returning the updated task"""
    transition = apply_transition(task.status.state, event)
    if isinstance(transition, Failure):
        return transition

    if message is not None:
        message_result = validate_message(message, config)
        if isinstance(message_result, Failure):
            return with_field_prefix(message_result, "status.message")

    status = A2ATaskStatus(state=transition.data, message=message, timestamp=timestamp or _timestamp())
    return Success(task.model_copy(update={"status": status}))


def _check_event_target(task: A2ATask, task_id: str, context_id: str) -> Optional[Failure]:
    if task_id != task.id:
        return invalid_field("taskId", task_id, f"event targets a different task than '{task.id}'")
    if task.context_id is not None and context_id != task.context_id:
        return invalid_field("contextId", context_id, f"event context does not match task context '{task.context_id}'")
    return None


def apply_status_update(
    task: A2ATask,
    event: TaskStatusUpdateEvent,
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, Any]:
    """
    Apply a status-update event to a task.

    A status carrying the task's current non-terminal state refreshes the
    status message without a transition; any other state change must be a
    legal transition.
    """
    failure = _check_event_target(task, event.task_id, event.context_id)
    if failure:
        return failure

    event_result = validate_status_update_event(event, config)
    if isinstance(event_result, Failure):
        return event_result

    current = task.status.state
    target = event.status.state
    if not (target == current and current not in TERMINAL_STATES):
        transition = validate_state_transition(current, target)
        if isinstance(transition, Failure):
            return transition

    return Success(task.model_copy(update={"status": event.status}))


def apply_artifact_update(
    task: A2ATask,
    event: TaskArtifactUpdateEvent,
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, Any]:
    """
    Apply an artifact-update event to a task.

    With append set, the event's parts extend the existing artifact with the
    same id; otherwise the artifact is replaced, or added when new.
    """
    failure = _check_event_target(task, event.task_id, event.context_id)
    if failure:
        return failure

    event_result = validate_artifact_update_event(event, config)
    if isinstance(event_result, Failure):
        return event_result

    artifacts = list(task.artifacts or [])
    positions = {artifact.artifact_id: index for index, artifact in enumerate(artifacts)}
    incoming = event.artifact
    position = positions.get(incoming.artifact_id)

    if event.append:
        if position is None:
            return invalid_field(
                "artifact.artifactId", incoming.artifact_id,
                "cannot append to an artifact the task does not have"
            )
        existing = artifacts[position]
        artifacts[position] = existing.model_copy(update={
            "parts": [*existing.parts, *incoming.parts],
            "metadata": {**(existing.metadata or {}), **(incoming.metadata or {})} or None,
        })
    elif position is None:
        artifacts.append(incoming)
    else:
        artifacts[position] = incoming

    return Success(task.model_copy(update={"artifacts": artifacts}))


def append_history(
    task: A2ATask,
    message: A2AMessage,
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, InvalidField]:
    """Append a message to a task's history, keeping message ids unique"""
    result = validate_message(message, config)
    if isinstance(result, Failure):
        return result
    if message.task_id is not None and message.task_id != task.id:
        return invalid_field("taskId", message.task_id, f"message belongs to a different task than '{task.id}'")
    if any(existing.message_id == message.message_id for existing in task.history or []):
        return invalid_field("messageId", message.message_id, "duplicate message id in task history")

    return Success(task.model_copy(update={"history": [*(task.history or []), message]}))


# Requests

def _request_id(request_id: Optional[RequestId]) -> RequestId:
    return request_id if request_id is not None else generate_id("req")


def _validate_history_length(history_length: Optional[int], field: str) -> Result:
    if history_length is not None and (isinstance(history_length, bool) or not isinstance(history_length, int) or history_length < 0):
        return invalid_field(field, history_length, "must be a non-negative integer")
    return Success(history_length)


def create_send_message_request(
    message: A2AMessage,
    request_id: Optional[RequestId] = None,
    configuration: Optional[MessageSendConfiguration] = None,
    metadata: Optional[Dict[str, Any]] = None,
    method: Union[RequestMethod, str] = RequestMethod.MESSAGE_SEND,
    config: Optional[ValidationConfig] = None
) -> Result[Union[SendMessageRequest, SendStreamingMessageRequest], Any]:
    """Create a message/send (or message/stream) request; legacy 'sendMessage' is accepted"""
    normalized = normalize_method(method)
    if isinstance(normalized, Failure):
        return normalized
    if normalized.data not in (RequestMethod.MESSAGE_SEND, RequestMethod.MESSAGE_STREAM):
        return invalid_field("method", method, "must be a message/send or message/stream method")

    message_result = validate_message(message, config)
    if isinstance(message_result, Failure):
        return with_field_prefix(message_result, "params.message")

    if configuration is not None:
        configuration_result = validate_send_configuration(configuration, config)
        if isinstance(configuration_result, Failure):
            return with_field_prefix(configuration_result, "params")

    model = SendMessageRequest if normalized.data == RequestMethod.MESSAGE_SEND else SendStreamingMessageRequest
    return _build(
        model,
        jsonrpc="2.0",
        id=_request_id(request_id),
        method=normalized.data.value,
        params={"message": message, "configuration": configuration, "metadata": metadata},
    )


def create_get_task_request(
    task_id: str,
    request_id: Optional[RequestId] = None,
    history_length: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
    method: Union[RequestMethod, str] = RequestMethod.TASKS_GET,
    config: Optional[ValidationConfig] = None
) -> Result[GetTaskRequest, Any]:
    """Create a tasks/get request; legacy 'getTask' is accepted"""
    normalized = normalize_method(method)
    if isinstance(normalized, Failure):
        return normalized
    if normalized.data != RequestMethod.TASKS_GET:
        return invalid_field("method", method, "must be a tasks/get method")

    id_result = validate_identifier(task_id, "id", config)
    if isinstance(id_result, Failure):
        return with_field_prefix(id_result, "params")
    length_result = _validate_history_length(history_length, "params.historyLength")
    if isinstance(length_result, Failure):
        return length_result

    return _build(
        GetTaskRequest,
        jsonrpc="2.0",
        id=_request_id(request_id),
        method=RequestMethod.TASKS_GET.value,
        params={"id": task_id, "historyLength": history_length, "metadata": metadata},
    )


def _task_id_request(
    model: type,
    canonical: RequestMethod,
    method: Union[RequestMethod, str],
    task_id: str,
    request_id: Optional[RequestId],
    metadata: Optional[Dict[str, Any]],
    config: Optional[ValidationConfig]
) -> Result[Any, Any]:
    normalized = normalize_method(method)
    if isinstance(normalized, Failure):
        return normalized
    if normalized.data != canonical:
        return invalid_field("method", method, f"must be a {canonical.value} method")

    id_result = validate_identifier(task_id, "id", config)
    if isinstance(id_result, Failure):
        return with_field_prefix(id_result, "params")

    return _build(
        model,
        jsonrpc="2.0",
        id=_request_id(request_id),
        method=canonical.value,
        params={"id": task_id, "metadata": metadata},
    )


def create_cancel_task_request(
    task_id: str,
    request_id: Optional[RequestId] = None,
    metadata: Optional[Dict[str, Any]] = None,
    method: Union[RequestMethod, str] = RequestMethod.TASKS_CANCEL,
    config: Optional[ValidationConfig] = None
) -> Result[CancelTaskRequest, Any]:
    """Create a tasks/cancel request; legacy 'cancelTask' is accepted"""
    return _task_id_request(CancelTaskRequest, RequestMethod.TASKS_CANCEL, method, task_id, request_id, metadata, config)


def create_resubscribe_request(
    task_id: str,
    request_id: Optional[RequestId] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[TaskResubscriptionRequest, Any]:
    """Create a tasks/resubscribe request"""
    return _task_id_request(
        TaskResubscriptionRequest, RequestMethod.TASKS_RESUBSCRIBE, RequestMethod.TASKS_RESUBSCRIBE,
        task_id, request_id, metadata, config
    )


def create_list_push_notification_configs_request(
    task_id: str,
    request_id: Optional[RequestId] = None,
    metadata: Optional[Dict[str, Any]] = None,
    config: Optional[ValidationConfig] = None
) -> Result[ListTaskPushNotificationConfigRequest, Any]:
    """Create a tasks/pushNotificationConfig/list request"""
    return _task_id_request(
        ListTaskPushNotificationConfigRequest, RequestMethod.PUSH_NOTIFICATION_CONFIG_LIST,
        RequestMethod.PUSH_NOTIFICATION_CONFIG_LIST, task_id, request_id, metadata, config
    )


def create_set_push_notification_config_request(
    task_id: str,
    push_config: PushNotificationConfig,
    request_id: Optional[RequestId] = None,
    config: Optional[ValidationConfig] = None
) -> Result[SetTaskPushNotificationConfigRequest, Any]:
    """Create a tasks/pushNotificationConfig/set request"""
    id_result = validate_identifier(task_id, "taskId", config)
    if isinstance(id_result, Failure):
        return with_field_prefix(id_result, "params")
    push_result = validate_push_notification_config(push_config, config)
    if isinstance(push_result, Failure):
        return with_field_prefix(push_result, "params")

    return _build(
        SetTaskPushNotificationConfigRequest,
        jsonrpc="2.0",
        id=_request_id(request_id),
        method=RequestMethod.PUSH_NOTIFICATION_CONFIG_SET.value,
        params={"taskId": task_id, "pushNotificationConfig": push_config},
    )


def _push_config_query_request(
    model: type,
    canonical: RequestMethod,
    task_id: str,
    config_id: Optional[str],
    request_id: Optional[RequestId],
    config: Optional[ValidationConfig]
) -> Result[Any, Any]:
    id_result = validate_identifier(task_id, "id", config)
    if isinstance(id_result, Failure):
        return with_field_prefix(id_result, "params")
    if config_id is not None:
        config_id_result = validate_identifier(config_id, "pushNotificationConfigId", config)
        if isinstance(config_id_result, Failure):
            return with_field_prefix(config_id_result, "params")

    return _build(
        model,
        jsonrpc="2.0",
        id=_request_id(request_id),
        method=canonical.value,
        params={"id": task_id, "pushNotificationConfigId": config_id},
    )


def create_get_push_notification_config_request(
    task_id: str,
    config_id: Optional[str] = None,
    request_id: Optional[RequestId] = None,
    config: Optional[ValidationConfig] = None
) -> Result[GetTaskPushNotificationConfigRequest, Any]:
    """Create a tasks/pushNotificationConfig/get request"""
    return _push_config_query_request(
        GetTaskPushNotificationConfigRequest, RequestMethod.PUSH_NOTIFICATION_CONFIG_GET,
        task_id, config_id, request_id, config
    )


def create_delete_push_notification_config_request(
    task_id: str,
    config_id: str,
    request_id: Optional[RequestId] = None,
    config: Optional[ValidationConfig] = None
) -> Result[DeleteTaskPushNotificationConfigRequest, Any]:
    """Create a tasks/pushNotificationConfig/delete request"""
    if config_id is None:
        return invalid_field("params.pushNotificationConfigId", config_id, "is required")
    return _push_config_query_request(
        DeleteTaskPushNotificationConfigRequest, RequestMethod.PUSH_NOTIFICATION_CONFIG_DELETE,
        task_id, config_id, request_id, config
    )


def _parse_model(model: type, raw: Any, prefix: str) -> Result[Any, InvalidField]:
    if not isinstance(raw, dict):
        return invalid_field(prefix, raw, "must be an object")
    try:
        return Success(model.model_validate(raw))
    except ValidationError as error:
        return from_validation_error(error, prefix)


def create_request(
    method: Union[RequestMethod, str],
    params: Optional[Dict[str, Any]] = None,
    request_id: Optional[RequestId] = None,
    config: Optional[ValidationConfig] = None
) -> Result[A2ARequest, Any]:
    """
    Create a typed request from a method name and raw params.

    The method name is normalized before anything else, so a legacy name and
    its canonical form produce identical requests.
    """
    normalized = normalize_method(method)
    if isinstance(normalized, Failure):
        logger.debug("Rejected request with unknown method %r", method)
        return normalized
    canonical = normalized.data

    if canonical == RequestMethod.GET_AUTHENTICATED_EXTENDED_CARD:
        return _build(GetAuthenticatedExtendedCardRequest, jsonrpc="2.0", id=_request_id(request_id),
                      method=canonical.value, params=params)

    if not isinstance(params, dict):
        return invalid_field("params", params, "must be an object")

    if canonical in (RequestMethod.MESSAGE_SEND, RequestMethod.MESSAGE_STREAM):
        message = _parse_model(A2AMessage, params.get("message"), "params.message")
        if isinstance(message, Failure):
            return message
        configuration = None
        if params.get("configuration") is not None:
            parsed = _parse_model(MessageSendConfiguration, params["configuration"], "params.configuration")
            if isinstance(parsed, Failure):
                return parsed
            configuration = parsed.data
        return create_send_message_request(
            message.data, request_id, configuration, params.get("metadata"), canonical, config
        )

    if canonical == RequestMethod.TASKS_GET:
        return create_get_task_request(
            params.get("id"), request_id, params.get("historyLength"), params.get("metadata"), canonical, config
        )

    if canonical == RequestMethod.PUSH_NOTIFICATION_CONFIG_SET:
        push_config = _parse_model(PushNotificationConfig, params.get("pushNotificationConfig"),
                                   "params.pushNotificationConfig")
        if isinstance(push_config, Failure):
            return push_config
        return create_set_push_notification_config_request(params.get("taskId"), push_config.data, request_id, config)

    if canonical == RequestMethod.PUSH_NOTIFICATION_CONFIG_GET:
        return create_get_push_notification_config_request(
            params.get("id"), params.get("pushNotificationConfigId"), request_id, config
        )

    if canonical == RequestMethod.PUSH_NOTIFICATION_CONFIG_DELETE:
        return create_delete_push_notification_config_request(
            params.get("id"), params.get("pushNotificationConfigId"), request_id, config
        )

    task_id_models = {
        RequestMethod.TASKS_CANCEL: CancelTaskRequest,
        RequestMethod.TASKS_RESUBSCRIBE: TaskResubscriptionRequest,
        RequestMethod.PUSH_NOTIFICATION_CONFIG_LIST: ListTaskPushNotificationConfigRequest,
    }
    return _task_id_request(
        task_id_models[canonical], canonical, canonical, params.get("id"), request_id, params.get("metadata"), config
    )


def parse_request(raw: Any, config: Optional[ValidationConfig] = None) -> Result[A2ARequest, Any]:
    """Validate a raw JSON-RPC record and build the typed A2A request it describes"""
    if not isinstance(raw, dict):
        return invalid_field("request", raw, "must be a JSON-RPC request object")
    if raw.get("jsonrpc") != "2.0":
        return invalid_field("jsonrpc", raw.get("jsonrpc"), "must be '2.0'")
    if "id" not in raw or isinstance(raw["id"], bool) or not isinstance(raw["id"], (str, int)):
        return invalid_field("id", raw.get("id"), "must be a string or integer")
    if not isinstance(raw.get("method"), str):
        return invalid_field("method", raw.get("method"), "must be a string")

    return create_request(raw["method"], raw.get("params"), raw["id"], config)
