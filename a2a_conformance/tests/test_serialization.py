"""
Tests for A2A wire serialization
"""

import json

from hypothesis import given
from hypothesis import strategies as st

from a2a_conformance.errors import Failure, InvalidField, PayloadParseError, Success, create_jsonrpc_error_response
from a2a_conformance.protocol import (
    apply_artifact_update,
    apply_task_event,
    create_artifact,
    create_artifact_update_event,
    create_message,
    create_task,
)
from a2a_conformance.serialization import (
    deserialize_task,
    parse_json_payload,
    serialize_response,
    serialize_task,
    to_json,
    to_wire,
)
from a2a_conformance.state_machine import TaskEvent
from a2a_conformance.types import (
    A2AFile,
    TaskState,
    create_a2a_data_part,
    create_a2a_file_part,
    create_a2a_text_part,
    create_jsonrpc_success_response,
)

identifiers = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789_-", min_size=1, max_size=40)


def build_task(task_id="task_1", context_id="ctx_1", text="Hello"):
    message = create_message(
        "user",
        [create_a2a_text_part(text)],
        message_id="msg_1",
        context_id=context_id,
        metadata={"source": "test"},
    ).data
    task = create_task(message, task_id=task_id).data
    task = apply_task_event(task, TaskEvent.START_WORKING).data
    artifact = create_artifact(
        [
            create_a2a_data_part({"temperature": 21, "unit": "C"}),
            create_a2a_file_part(A2AFile(uri="https://files.example.com/chart.png", mimeType="image/png")),
        ],
        artifact_id="artifact_1",
        name="forecast",
    ).data
    event = create_artifact_update_event(task_id, context_id, artifact).data
    return apply_artifact_update(task, event).data


class TestTaskRoundTrip:
    """Test serialize -> deserialize -> validate"""

    def test_round_trip(self):
        task = build_task()

        result = deserialize_task(serialize_task(task))

        assert isinstance(result, Success)
        assert result.data == task

    def test_round_trip_from_wire_record(self):
        task = build_task()

        assert deserialize_task(to_wire(task)) == Success(task)

    @given(task_id=identifiers, context_id=identifiers, text=st.text(max_size=200))
    def test_round_trip_property(self, task_id, context_id, text):
        """Test any valid task survives the round trip unchanged"""
        task = build_task(task_id, context_id, text)

        result = deserialize_task(serialize_task(task))

        assert result == Success(task)

    def test_wire_uses_protocol_field_names(self):
        record = json.loads(serialize_task(build_task()))

        assert record["kind"] == "task"
        assert record["contextId"] == "ctx_1"
        assert record["status"]["state"] == "working"
        assert record["history"][0]["messageId"] == "msg_1"
        assert record["artifacts"][0]["artifactId"] == "artifact_1"
        assert record["artifacts"][0]["parts"][1]["file"]["mimeType"] == "image/png"
        assert "metadata" not in record

    def test_deserialize_rejects_invalid_json(self):
        result = deserialize_task("{not json")

        assert isinstance(result.error, PayloadParseError)

    def test_deserialize_rejects_unknown_state(self):
        record = to_wire(build_task())
        record["status"]["state"] = "paused"

        result = deserialize_task(record)

        assert isinstance(result.error, InvalidField)
        assert result.error.field == "task.status.state"

    def test_deserialize_revalidates(self):
        """Test parsed tasks go through task validation"""
        record = to_wire(build_task())
        record["history"].append(dict(record["history"][0]))

        assert deserialize_task(record).error.field == "history[1].messageId"

    def test_deserialize_non_object(self):
        assert deserialize_task("[1, 2]").error.field == "task"


class TestPayloads:
    """Test raw payload decoding and response encoding"""

    def test_parse_json_payload(self):
        assert parse_json_payload('{"jsonrpc": "2.0"}') == Success({"jsonrpc": "2.0"})
        assert parse_json_payload(b'[1]') == Success([1])

    def test_parse_invalid_payloads(self):
        assert isinstance(parse_json_payload("").error, PayloadParseError)
        assert isinstance(parse_json_payload(b"\xff\xfe\xfa").error, PayloadParseError)
        assert isinstance(parse_json_payload(None).error, PayloadParseError)

    def test_serialize_success_response(self):
        task = build_task()

        record = serialize_response(create_jsonrpc_success_response("req_1", task))

        assert record["jsonrpc"] == "2.0"
        assert record["id"] == "req_1"
        assert record["result"]["id"] == "task_1"
        assert record["result"]["contextId"] == "ctx_1"

    def test_serialize_error_response_keeps_null_id(self):
        response = create_jsonrpc_error_response(None, PayloadParseError(reason="bad"))

        record = serialize_response(response)

        assert record["id"] is None
        assert record["error"]["code"] == -32700

    def test_to_json_omits_unset_fields(self):
        part = create_a2a_text_part("hi")

        assert json.loads(to_json(part)) == {"kind": "text", "text": "hi"}

    def test_failure_is_value(self):
        assert isinstance(deserialize_task("{"), Failure)
