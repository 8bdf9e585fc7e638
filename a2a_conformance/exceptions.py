"""
Exceptions for the A2A conformance engine.

Validators return Failure values and never raise. These exceptions exist for
callers that prefer exception-based control flow; unwrap() converts a Result
into either its value or a ProtocolViolationError.
"""

from typing import Any, Dict, Optional, TypeVar

from .errors import Failure, ProtocolError, Result, to_jsonrpc_error

T = TypeVar('T')


class A2AConformanceException(Exception):
    """Base exception for all A2A conformance errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProtocolViolationError(A2AConformanceException):
    """Raised when a value violates the A2A protocol."""

    def __init__(self, error: ProtocolError):
        jsonrpc_error = to_jsonrpc_error(error)
        super().__init__(error.message, {
            "code": jsonrpc_error.code,
            "data": jsonrpc_error.data,
        })
        self.error = error
        self.code = jsonrpc_error.code


def unwrap(result: Result[T, ProtocolError]) -> T:
    """Return the value of a Success, or raise ProtocolViolationError for a Failure."""
    if isinstance(result, Failure):
        raise ProtocolViolationError(result.error)
    return result.data
