"""
Functional result and error types for A2A protocol validation

Every validator and constructor returns a Result: Success carrying the
validated value, or Failure carrying one of the structured error values
below. Failures are values, never raised, so callers can turn them into
protocol-level error responses.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import ValidationError

from .types import A2AErrorCodes, JSONRPCError, JSONRPCErrorResponse

T = TypeVar('T')
E = TypeVar('E')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful validation result."""
    data: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed validation result."""
    error: E


Result = Union[Success[T], Failure[E]]


# Error values

@dataclass(frozen=True)
class InvalidField:
    """A primitive field failed validation"""
    field: str
    value_class: str
    constraint: str

    @property
    def message(self) -> str:
        return f"Invalid field '{self.field}' ({self.value_class}): {self.constraint}"


@dataclass(frozen=True)
class IllegalTransition:
    """A task event is not allowed from the current state"""
    state: str
    event: str

    @property
    def message(self) -> str:
        return f"Illegal transition: event '{self.event}' is not allowed in state '{self.state}'"


@dataclass(frozen=True)
class IncompleteSecurityScheme:
    """A security scheme is missing a required field or carries an invalid one"""
    variant: str
    field: str
    reason: str
    flow: Optional[str] = None
    scheme_name: Optional[str] = None

    @property
    def message(self) -> str:
        location = f"{self.variant}.{self.flow}" if self.flow else self.variant
        if self.scheme_name:
            location = f"{self.scheme_name} ({location})"
        return f"Incomplete security scheme '{location}': field '{self.field}' {self.reason}"


@dataclass(frozen=True)
class MissingRequiredExtension:
    """A required extension is not in the caller's supported set"""
    uri: str

    @property
    def message(self) -> str:
        return f"Missing required extension: {self.uri}"


@dataclass(frozen=True)
class MalformedRequest:
    """The request method is neither a canonical nor a legacy operation name"""
    method: str

    @property
    def message(self) -> str:
        return f"Method not found: {self.method}"


@dataclass(frozen=True)
class PayloadParseError:
    """A raw payload could not be decoded as JSON"""
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid JSON payload: {self.reason}"


ProtocolError = Union[
    InvalidField,
    IllegalTransition,
    IncompleteSecurityScheme,
    MissingRequiredExtension,
    MalformedRequest,
    PayloadParseError,
]

# Envelope fields whose failure makes the whole request invalid
_ENVELOPE_FIELDS = frozenset({"jsonrpc", "id", "method", "request"})


# Result factory functions

def create_success(data: T) -> Success[T]:
    """Create a success result"""
    return Success(data=data)


def create_failure(error: E) -> Failure[E]:
    """Create a failure result"""
    return Failure(error=error)


def invalid_field(field: str, value: Any, constraint: str) -> Failure[InvalidField]:
    """Create an InvalidField failure, recording the offending value's class"""
    return Failure(error=InvalidField(
        field=field,
        value_class=type(value).__name__,
        constraint=constraint
    ))


def from_validation_error(error: ValidationError, prefix: Optional[str] = None) -> Failure[InvalidField]:
    """Convert the first pydantic validation error into an InvalidField failure"""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    field = ".".join(part for part in (prefix, location) if part) or "value"
    return invalid_field(field, first.get("input"), first["msg"])


def is_success(result: Any) -> bool:
    """Check if a result is a success"""
    return isinstance(result, Success)


def is_failure(result: Any) -> bool:
    """Check if a result is a failure"""
    return isinstance(result, Failure)


def with_field_prefix(failure: Failure, prefix: str) -> Failure:
    """Re-anchor an InvalidField failure under a parent field path"""
    error = failure.error
    if isinstance(error, InvalidField):
        return Failure(error=InvalidField(
            field=f"{prefix}.{error.field}",
            value_class=error.value_class,
            constraint=error.constraint
        ))
    return failure


# JSON-RPC mapping

def to_jsonrpc_error(error: ProtocolError) -> JSONRPCError:
    """Pure function to map a validation failure to an A2A JSON-RPC error"""
    if isinstance(error, PayloadParseError):
        code = A2AErrorCodes.PARSE_ERROR
        data = None
    elif isinstance(error, MalformedRequest):
        code = A2AErrorCodes.METHOD_NOT_FOUND
        data = {"method": error.method}
    elif isinstance(error, IllegalTransition):
        code = A2AErrorCodes.TASK_NOT_CANCELABLE if error.event == "cancel" else A2AErrorCodes.INVALID_PARAMS
        data = {"state": error.state, "event": error.event}
    elif isinstance(error, InvalidField):
        root = error.field.split(".", 1)[0]
        code = A2AErrorCodes.INVALID_REQUEST if root in _ENVELOPE_FIELDS else A2AErrorCodes.INVALID_PARAMS
        data = {"field": error.field, "value_class": error.value_class, "constraint": error.constraint}
    elif isinstance(error, IncompleteSecurityScheme):
        code = A2AErrorCodes.INVALID_PARAMS
        data = {"scheme": error.scheme_name, "variant": error.variant, "field": error.field, "flow": error.flow}
    elif isinstance(error, MissingRequiredExtension):
        code = A2AErrorCodes.INVALID_PARAMS
        data = {"uri": error.uri}
    else:
        return JSONRPCError(code=A2AErrorCodes.INTERNAL_ERROR.value, message=str(error))

    return JSONRPCError(code=code.value, message=error.message, data=data)


def create_jsonrpc_error_response(
    request_id: Union[str, int, None],
    error: ProtocolError
) -> JSONRPCErrorResponse:
    """Create a JSON-RPC error response for a validation failure"""
    return JSONRPCErrorResponse(jsonrpc="2.0", id=request_id, error=to_jsonrpc_error(error))
