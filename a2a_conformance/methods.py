"""
A2A request method names

Legacy camelCase names are mapped to their canonical dotted form once, at
the request boundary. Everything downstream sees only canonical names.
"""

from enum import Enum
from typing import Any, Dict

from .errors import Failure, MalformedRequest, Result, Success


class RequestMethod(str, Enum):
    """Canonical A2A JSON-RPC methods"""
    MESSAGE_SEND = "message/send"
    MESSAGE_STREAM = "message/stream"
    TASKS_GET = "tasks/get"
    TASKS_CANCEL = "tasks/cancel"
    TASKS_RESUBSCRIBE = "tasks/resubscribe"
    PUSH_NOTIFICATION_CONFIG_SET = "tasks/pushNotificationConfig/set"
    PUSH_NOTIFICATION_CONFIG_GET = "tasks/pushNotificationConfig/get"
    PUSH_NOTIFICATION_CONFIG_LIST = "tasks/pushNotificationConfig/list"
    PUSH_NOTIFICATION_CONFIG_DELETE = "tasks/pushNotificationConfig/delete"
    GET_AUTHENTICATED_EXTENDED_CARD = "agent/getAuthenticatedExtendedCard"


LEGACY_METHOD_NAMES: Dict[str, RequestMethod] = {
    "sendMessage": RequestMethod.MESSAGE_SEND,
    "getTask": RequestMethod.TASKS_GET,
    "cancelTask": RequestMethod.TASKS_CANCEL,
}

STREAMING_METHODS = frozenset({RequestMethod.MESSAGE_STREAM, RequestMethod.TASKS_RESUBSCRIBE})


def normalize_method(name: Any) -> Result[RequestMethod, MalformedRequest]:
    """Resolve a canonical or legacy method name to its canonical RequestMethod"""
    if isinstance(name, RequestMethod):
        return Success(name)
    if not isinstance(name, str):
        return Failure(error=MalformedRequest(method=repr(name)))
    if name in LEGACY_METHOD_NAMES:
        return Success(LEGACY_METHOD_NAMES[name])
    try:
        return Success(RequestMethod(name))
    except ValueError:
        return Failure(error=MalformedRequest(method=name))


def is_streaming_method(method: RequestMethod) -> bool:
    """Check if a method answers with an event stream"""
    return method in STREAMING_METHODS
