"""Engine port for COREBRIDGE.

This module defines:
- The `Engine` port (framework-free ABC) the message boundary drives.
- A small exception hierarchy shared by engines and the boundary.
- Correlation id validation.

Layering & dependency rules:
- Lives under `corebridge.interfaces`. Do NOT import from adapters, bootstrap, or entrypoints.
- Safe to import from service layer and adapters.

Contract overview
-----------------
- Every payload is an opaque byte sequence whose schema belongs to the engine.
- `process_event(data)` decodes an Event and returns one encoded effect batch.
- `handle_response(request_id, data)` decodes a Response, resolves the pending
  request `request_id` and returns one encoded effect batch.
- `view()` returns the encoded view snapshot; it does not advance processing.
- Either a complete well-formed result is returned or a `BoundaryError` is raised.
- Engines own their internal synchronization; the boundary calls them from
  any number of host threads without adding a lock of its own.

Errors:
  * `DecodeError` — input bytes are not a valid message.
  * `EncodeError` — an output could not be serialized.
  * `UnknownRequestError` — no pending request matches the correlation id.
  * `InvalidCorrelationIdError` — the id is not an unsigned 32-bit integer.
  * `EngineFailure` — anything else that went wrong inside the engine.
  * `EngineInitError` — the engine could not be constructed.
"""

import abc

__all__ = [
    "BoundaryError",
    "DecodeError",
    "EncodeError",
    "Engine",
    "EngineFailure",
    "EngineInitError",
    "InvalidCorrelationIdError",
    "UnknownRequestError",
    "U32_LIMIT",
    "validate_request_id",
]

U32_LIMIT = 2**32

# --- Exceptions to standardize engine behavior ---


class BoundaryError(Exception):
    """Base class for errors crossing the message boundary."""


class DecodeError(BoundaryError):
    """The input bytes could not be decoded into a message."""


class EncodeError(BoundaryError):
    """An output value could not be encoded into bytes."""


class EngineFailure(BoundaryError):
    """The engine failed while processing a well-formed message."""


class EngineInitError(BoundaryError):
    """The engine could not be constructed."""


class UnknownRequestError(BoundaryError):
    """No pending request matches the given correlation id."""

    def __init__(self, request_id: int) -> None:
        super().__init__(f"No pending request with id {request_id}.")
        self.request_id = request_id


class InvalidCorrelationIdError(BoundaryError):
    """The correlation id is not an unsigned 32-bit integer."""

    def __init__(self, request_id: object) -> None:
        super().__init__(
            f"Correlation id must be an integer in [0, {U32_LIMIT}), got {request_id!r}."
        )
        self.request_id = request_id


def validate_request_id(request_id: object) -> int:
    """Return ``request_id`` if it is a valid correlation id.

    Raises:
        InvalidCorrelationIdError: If it is not an int in ``[0, 2**32)``.
    """
    if (
        isinstance(request_id, bool)
        or not isinstance(request_id, int)
        or not 0 <= request_id < U32_LIMIT
    ):
        raise InvalidCorrelationIdError(request_id)
    return request_id


# --- Engine Interface ---


class Engine(abc.ABC):
    """An abstract base class for an application engine."""

    @abc.abstractmethod
    def process_event(self, data: bytes) -> bytes:
        """Process a serialized event.

        Args:
            data: The encoded Event.

        Returns:
            The encoded effect batch produced by the event.

        Raises:
            DecodeError: If ``data`` is not a valid Event.
            EncodeError: If the effect batch cannot be encoded.
            EngineFailure: For any other processing failure.
        """

    @abc.abstractmethod
    def handle_response(self, request_id: int, data: bytes) -> bytes:
        """Resolve a pending request with a serialized response.

        Args:
            request_id: Correlation id of the effect being answered.
            data: The encoded Response.

        Returns:
            The encoded effect batch produced by resuming the request.

        Raises:
            UnknownRequestError: If no pending request matches ``request_id``.
            DecodeError: If ``data`` is not a valid Response.
            EncodeError: If the effect batch cannot be encoded.
            EngineFailure: For any other processing failure.
        """

    @abc.abstractmethod
    def view(self) -> bytes:
        """Return the encoded view of the current state.

        Raises:
            EncodeError: If the view cannot be encoded.
        """
