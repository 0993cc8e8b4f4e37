"""Unit tests for the result-based MessageBoundary."""

import pytest

from corebridge.interfaces.engine import (
    DecodeError,
    EncodeError,
    EngineFailure,
    EngineInitError,
    InvalidCorrelationIdError,
    UnknownRequestError,
)
from corebridge.service_layer.boundary import EngineCell, MessageBoundary
from tests.helpers.engines import BrokenEngine, CountingFactory, RecordingEngine

# pylint: disable=redefined-outer-name


@pytest.fixture
def factory() -> CountingFactory:
    """Factory building RecordingEngines with one pending request (id 3)."""
    counting = CountingFactory()
    counting.engine_type = lambda: RecordingEngine(pending={3})
    return counting


@pytest.fixture
def boundary(factory) -> MessageBoundary:
    """Boundary over a fresh cell."""
    return MessageBoundary(EngineCell(factory))


# --- Assert Helpers ---


def assert_log_message(records, message, level: str) -> None:
    """Assert that a log message is in the log records."""
    log_msgs = [rec.getMessage() for rec in records if rec.levelname == level]
    assert message in log_msgs


# --- Tests ---


def test_process_event_returns_engine_bytes(boundary):
    """The engine's effect batch is returned unchanged."""
    assert boundary.process_event(b"inc") == b"effects:inc"


def test_bytes_like_inputs_are_accepted(boundary):
    """bytearray and memoryview are copied to bytes before reaching the engine."""
    assert boundary.process_event(bytearray(b"a")) == b"effects:a"
    assert boundary.process_event(memoryview(b"b")) == b"effects:b"
    engine = boundary.cell.get()
    assert all(isinstance(call[1], bytes) for call in engine.calls)


@pytest.mark.parametrize("payload", ["text", None, 42], ids=["str", "none", "int"])
def test_non_bytes_input_is_a_decode_error(boundary, payload):
    """Only bytes-like messages cross the boundary."""
    with pytest.raises(DecodeError, match="Expected a bytes-like message"):
        boundary.process_event(payload)


def test_sequential_calls_share_one_engine(boundary, factory):
    """Two sequential process_event calls never build a second engine."""
    boundary.process_event(b"one")
    boundary.process_event(b"two")
    assert factory.count == 1
    assert factory.constructed[0].calls == [
        ("process_event", b"one"),
        ("process_event", b"two"),
    ]


def test_every_operation_can_initialize(factory):
    """Whichever operation comes first builds the engine."""
    boundary = MessageBoundary(EngineCell(factory))
    assert not boundary.cell.initialized
    boundary.view()
    assert boundary.cell.initialized
    assert factory.count == 1


def test_handle_response_routes_id(boundary):
    """The response reaches the engine with its correlation id."""
    assert boundary.handle_response(3, b"ok") == b"resolved:3:ok"


def test_handle_response_unknown_id(boundary):
    """An id with no pending request is an UnknownRequestError."""
    with pytest.raises(UnknownRequestError):
        boundary.handle_response(4, b"ok")


def test_handle_response_id_consumed(boundary):
    """A pending request resolves once."""
    boundary.handle_response(3, b"ok")
    with pytest.raises(UnknownRequestError):
        boundary.handle_response(3, b"ok")


@pytest.mark.parametrize("request_id", [-1, 2**32, "3"])
def test_handle_response_invalid_id_rejected_before_engine(boundary, factory, request_id):
    """Invalid correlation ids never reach (or even build) the engine."""
    with pytest.raises(InvalidCorrelationIdError):
        boundary.handle_response(request_id, b"ok")
    assert factory.count == 0


def test_engine_decode_error_propagates(boundary):
    """Boundary errors raised by the engine pass through untouched."""
    with pytest.raises(DecodeError, match="bad payload"):
        boundary.process_event(RecordingEngine.BAD_PAYLOAD)


def test_view_does_not_consume_events(boundary):
    """view only reads; it is recorded but changes nothing else."""
    boundary.process_event(b"x")
    assert boundary.view() == b"view:2"
    assert boundary.view() == b"view:3"


class TestBrokenEngine:
    """Non-boundary failures inside the engine."""

    @staticmethod
    def test_unexpected_exception_becomes_engine_failure():
        """Arbitrary exceptions are wrapped in EngineFailure with the cause kept."""
        boundary = MessageBoundary(EngineCell(BrokenEngine))
        with pytest.raises(EngineFailure, match="engine exploded") as exc_info:
            boundary.process_event(b"x")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @staticmethod
    def test_unexpected_exception_in_handle_response():
        """Same wrapping for responses."""
        boundary = MessageBoundary(EngineCell(BrokenEngine))
        with pytest.raises(EngineFailure):
            boundary.handle_response(1, b"x")

    @staticmethod
    def test_non_bytes_result_is_encode_error():
        """An engine returning anything but bytes fails encoding."""
        boundary = MessageBoundary(EngineCell(BrokenEngine))
        with pytest.raises(EncodeError, match="returned str"):
            boundary.view()


def test_init_failure_propagates():
    """A failing factory surfaces from whichever call triggered construction."""

    def failing_factory():
        raise LookupError("missing")

    boundary = MessageBoundary(EngineCell(failing_factory))
    with pytest.raises(EngineInitError):
        boundary.process_event(b"x")


def test_calls_are_logged(boundary, caplog):
    """Each call logs its payload size and result size at DEBUG."""
    with caplog.at_level("DEBUG"):
        boundary.handle_response(3, b"ok")
    assert_log_message(caplog.records, "Boundary handle_response (id=3, 2 bytes)", "DEBUG")
    assert_log_message(caplog.records, "Boundary handle_response returned 13 bytes", "DEBUG")
