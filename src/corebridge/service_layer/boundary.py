"""Result-based message boundary.

`EngineCell` holds the engine handle and guarantees it is constructed at most
once, on first use, even when several threads race to be first.
`MessageBoundary` is the inner API behind the host entry points: every call
either returns bytes or raises a `BoundaryError`, which keeps it testable
without going through the fatal abort of `corebridge.entrypoints.ffi`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from corebridge.interfaces.engine import (
    BoundaryError,
    DecodeError,
    EncodeError,
    Engine,
    EngineFailure,
    EngineInitError,
    validate_request_id,
)

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], Engine]


class EngineAlreadyInitializedError(RuntimeError):
    """Raised when the factory is replaced after the engine was built."""

    def __init__(self) -> None:
        super().__init__("The engine has already been constructed.")


class EngineCell:
    """Single-initialization holder for the engine handle.

    The lock guards construction only. Once the engine exists, `get` returns
    it without locking, so engine calls never contend on this lock and the
    engine's own synchronization is the only discipline in play.

    Args:
        factory: Zero-argument callable that builds the engine. It must not
            call back into the boundary.
    """

    def __init__(self, factory: EngineFactory) -> None:
        self._factory = factory
        self._engine: Engine | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        """Whether the engine has been constructed."""
        return self._engine is not None

    def set_factory(self, factory: EngineFactory) -> None:
        """Replace the factory used for the (not yet performed) construction.

        Raises:
            EngineAlreadyInitializedError: If the engine already exists.
        """
        with self._lock:
            if self._engine is not None:
                raise EngineAlreadyInitializedError()
            self._factory = factory

    def get(self) -> Engine:
        """Return the engine, constructing it on first use.

        Raises:
            EngineInitError: If the factory fails or returns something that is
                not an `Engine`. The cell stays uninitialized.
        """
        if (engine := self._engine) is not None:
            return engine
        with self._lock:
            if self._engine is None:
                self._engine = self._construct()
            return self._engine

    def _construct(self) -> Engine:
        logger.debug("Constructing engine with factory %r", self._factory)
        try:
            engine = self._factory()
        except Exception as e:  # pylint: disable=broad-except
            raise EngineInitError(f"Engine construction failed: {e}") from e
        if not isinstance(engine, Engine):
            raise EngineInitError(
                f"Engine factory returned {type(engine).__name__}, expected an Engine."
            )
        logger.info("Engine %s constructed", type(engine).__name__)
        return engine


def _as_bytes(data: object) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise DecodeError(f"Expected a bytes-like message, got {type(data).__name__}.")


class MessageBoundary:
    """Inner API of the boundary: bytes in, bytes out, `BoundaryError` on failure.

    Args:
        cell: The cell holding (or lazily building) the engine.
    """

    def __init__(self, cell: EngineCell) -> None:
        self.cell = cell

    def process_event(self, data: bytes) -> bytes:
        """Feed an encoded Event to the engine and return the effect batch."""
        payload = _as_bytes(data)
        engine = self.cell.get()
        return self._call("process_event", engine.process_event, payload)

    def handle_response(self, request_id: int, data: bytes) -> bytes:
        """Deliver an encoded Response for ``request_id`` and return the effect batch."""
        request_id = validate_request_id(request_id)
        payload = _as_bytes(data)
        engine = self.cell.get()
        return self._call("handle_response", engine.handle_response, request_id, payload)

    def view(self) -> bytes:
        """Return the encoded view snapshot."""
        engine = self.cell.get()
        return self._call("view", engine.view)

    @staticmethod
    def _call(operation: str, fn: Callable[..., object], *args: object) -> bytes:
        logger.debug(
            "Boundary %s (%s)",
            operation,
            ", ".join(
                f"{len(arg)} bytes" if isinstance(arg, bytes) else f"id={arg}"
                for arg in args
            )
            or "no payload",
        )
        try:
            result = fn(*args)
        except BoundaryError:
            raise
        except Exception as e:  # pylint: disable=broad-except
            raise EngineFailure(f"Engine {operation} failed: {e}") from e
        if not isinstance(result, bytes):
            raise EncodeError(
                f"Engine {operation} returned {type(result).__name__}, expected bytes."
            )
        logger.debug("Boundary %s returned %d bytes", operation, len(result))
        return result
