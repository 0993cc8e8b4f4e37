"""Host entry points of the message boundary.

The three functions here are the only way in and out of the engine. They are
thin wrappers over a process-wide `MessageBoundary` whose engine is built on
first use and kept for the life of the process.

There is no recoverable error channel across this boundary: a host cannot be
expected to understand a structured failure, so a malformed message, an
unknown correlation id, an engine failure or an encoding failure is a contract
violation. It is logged at CRITICAL and re-raised as `BoundaryPanic`, which
derives from ``BaseException`` so generic ``except Exception`` handlers in host
code do not swallow it. A failed call never returns bytes.

Configure the engine either by setting ``COREBRIDGE_ENGINE`` to
``package.module:factory`` or by calling `install_engine_factory` before the
first call.

Examples
    >>> from corebridge.entrypoints import ffi
    >>> ffi.install_engine_factory(make_engine)
    >>> effects = ffi.process_event(b'{"type": "increment"}')
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn

from corebridge.bootstrap import build_boundary
from corebridge.interfaces.engine import BoundaryError
from corebridge.logging import abort_context

if TYPE_CHECKING:
    from corebridge.interfaces.engine import Engine

__all__ = [
    "BoundaryPanic",
    "handle_response",
    "install_engine_factory",
    "is_initialized",
    "process_event",
    "view",
]

logger = logging.getLogger(__name__)

_BOUNDARY = build_boundary()


class BoundaryPanic(BaseException):
    """Unrecoverable failure of a boundary call.

    Attributes:
        operation: Name of the entry point that aborted.
        cause: The `BoundaryError` that triggered the abort.
    """

    def __init__(self, operation: str, cause: BoundaryError) -> None:
        super().__init__(f"{operation} aborted: {cause}")
        self.operation = operation
        self.cause = cause


def _abort(operation: str, error: BoundaryError) -> NoReturn:
    logger.critical(
        "Boundary %s aborted (%s): %s",
        operation,
        type(error).__name__,
        error,
        exc_info=error,
        extra=abort_context(operation, error),
    )
    raise BoundaryPanic(operation, error) from error


def process_event(data: bytes) -> bytes:
    """Ask the engine to process an event.

    Raises:
        BoundaryPanic: If the engine fails to process the event.
    """
    try:
        return _BOUNDARY.process_event(data)
    except BoundaryError as e:
        _abort("process_event", e)


def handle_response(request_id: int, data: bytes) -> bytes:
    """Ask the engine to handle a response.

    Raises:
        BoundaryPanic: If the engine fails to handle the response.
    """
    try:
        return _BOUNDARY.handle_response(request_id, data)
    except BoundaryError as e:
        _abort("handle_response", e)


def view() -> bytes:
    """Ask the engine to render the view.

    Raises:
        BoundaryPanic: If the view cannot be serialized.
    """
    try:
        return _BOUNDARY.view()
    except BoundaryError as e:
        _abort("view", e)


def install_engine_factory(factory: Callable[[], Engine]) -> None:
    """Register the factory used to build the engine on first use.

    Takes precedence over ``COREBRIDGE_ENGINE``.

    Raises:
        EngineAlreadyInitializedError: If an entry point has already built the engine.
    """
    _BOUNDARY.cell.set_factory(factory)


def is_initialized() -> bool:
    """Whether the engine has been built."""
    return _BOUNDARY.cell.initialized
