"""
Tests for request method normalization
"""

import pytest

from a2a_conformance.errors import Failure, MalformedRequest, Success
from a2a_conformance.methods import LEGACY_METHOD_NAMES, RequestMethod, is_streaming_method, normalize_method


class TestNormalizeMethod:
    """Test canonical and legacy method names"""

    @pytest.mark.parametrize("legacy,canonical", [
        ("sendMessage", RequestMethod.MESSAGE_SEND),
        ("getTask", RequestMethod.TASKS_GET),
        ("cancelTask", RequestMethod.TASKS_CANCEL),
    ])
    def test_legacy_names(self, legacy, canonical):
        result = normalize_method(legacy)

        assert result == Success(canonical)
        assert LEGACY_METHOD_NAMES[legacy] == canonical

    def test_send_message_normalizes_to_dotted_name(self):
        assert normalize_method("sendMessage").data.value == "message/send"

    @pytest.mark.parametrize("method", list(RequestMethod))
    def test_canonical_names_are_fixed_points(self, method):
        assert normalize_method(method.value) == Success(method)
        assert normalize_method(method) == Success(method)

    @pytest.mark.parametrize("name", ["", "send_message", "SendMessage", "message/Send", "tasks/list"])
    def test_unknown_names(self, name):
        assert normalize_method(name) == Failure(error=MalformedRequest(method=name))

    def test_non_string_name(self):
        result = normalize_method(None)

        assert isinstance(result.error, MalformedRequest)
        assert result.error.method == "None"


class TestStreamingMethods:
    """Test streaming method classification"""

    def test_streaming(self):
        assert is_streaming_method(RequestMethod.MESSAGE_STREAM)
        assert is_streaming_method(RequestMethod.TASKS_RESUBSCRIBE)
        assert not is_streaming_method(RequestMethod.MESSAGE_SEND)
