"""
A2A Wire Serialization Functions

Pure functions converting protocol values to and from their JSON wire form.
Serialization always uses the protocol's camelCase field names and omits
unset optional fields; deserialization re-validates what it parses, so a
serialized-then-deserialized value is equal to and as valid as the original.
"""

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError

from .config import ValidationConfig
from .errors import (
    Failure,
    PayloadParseError,
    Result,
    Success,
    from_validation_error,
    invalid_field,
)
from .protocol import validate_task
from .types import A2ATask, JSONRPCErrorResponse, JSONRPCSuccessResponse


def to_wire(value: BaseModel) -> Dict[str, Any]:
    """Pure function to convert a protocol value to its wire record"""
    return value.model_dump(mode="json", by_alias=True, exclude_none=True)


def to_json(value: BaseModel) -> str:
    """Pure function to encode a protocol value as a JSON string"""
    return value.model_dump_json(by_alias=True, exclude_none=True)


def parse_json_payload(payload: Union[str, bytes]) -> Result[Any, PayloadParseError]:
    """
    Pure function to decode a raw JSON payload

    Args:
        payload: JSON text as received from the transport

    Returns:
        Success with the decoded value, or PayloadParseError
    """
    try:
        return Success(json.loads(payload))
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        return Failure(error=PayloadParseError(reason=str(error)))
    except TypeError as error:
        return Failure(error=PayloadParseError(reason=f"payload must be str or bytes: {error}"))


def serialize_task(task: A2ATask) -> str:
    """Pure function to serialize a task to JSON"""
    return to_json(task)


def deserialize_task(
    data: Union[str, bytes, Dict[str, Any]],
    config: Optional[ValidationConfig] = None
) -> Result[A2ATask, Any]:
    """
    Pure function to deserialize and re-validate a task

    Args:
        data: JSON text or an already decoded wire record

    Returns:
        Success with the validated task, or the first failure encountered
    """
    if isinstance(data, (str, bytes)):
        decoded = parse_json_payload(data)
        if isinstance(decoded, Failure):
            return decoded
        data = decoded.data

    if not isinstance(data, dict):
        return invalid_field("task", data, "must be an object")

    try:
        task = A2ATask.model_validate(data)
    except ValidationError as error:
        return from_validation_error(error, "task")

    return validate_task(task, config)


def serialize_response(response: Union[JSONRPCSuccessResponse, JSONRPCErrorResponse]) -> Dict[str, Any]:
    """Pure function to convert a JSON-RPC response to its wire record"""
    record = to_wire(response)
    # "id" is required on responses even when it is null
    record.setdefault("id", None)
    if isinstance(response, JSONRPCSuccessResponse):
        result = response.result
        record["result"] = to_wire(result) if isinstance(result, BaseModel) else result
    return record
