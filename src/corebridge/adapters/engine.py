"""Reference in-memory engine.

`BridgeEngine` drives an `App` over encoded messages: it decodes events and
responses with a `Codec`, runs the application's update, tracks the effects
still waiting for a host response, and encodes effect batches and views.

Effect batch wire shape (before encoding)::

    [{"id": <u32>, "capability": <str>, "operation": <any>}, ...]

Every effect gets a correlation id. Only effects that expect a response stay
pending; answering any other id is an `UnknownRequestError`. A request stays
pending until a response decodes and its continuation accepts it, so a host
may answer again after a rejected response.

State is in memory only and lost when the instance is discarded. All
operations are serialized by an internal re-entrant lock, which makes the
engine safe to share between host threads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from corebridge.interfaces.app import App
from corebridge.interfaces.codec import Codec
from corebridge.interfaces.engine import (
    U32_LIMIT,
    BoundaryError,
    Engine,
    EngineFailure,
    UnknownRequestError,
)

from .codecs import JsonCodec

logger = logging.getLogger(__name__)

Continuation = Callable[[Any], Any]


class BridgeEngine(Engine):
    """Engine running an `App` in memory.

    Args:
        app: The application state machine.
        codec: Codec for all messages; defaults to `JsonCodec`.
    """

    def __init__(self, app: App, codec: Codec | None = None) -> None:
        self._app = app
        self._codec = codec or JsonCodec()
        self._model = app.initial_model()
        self._pending: dict[int, Continuation] = {}
        self._next_id = 0
        self._lock = threading.RLock()

    @property
    def pending_requests(self) -> frozenset[int]:
        """Correlation ids of effects still waiting for a response."""
        with self._lock:
            return frozenset(self._pending)

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def process_event(self, data: bytes) -> bytes:
        event = self._codec.decode(data)
        with self._lock:
            return self._dispatch(event)

    def handle_response(self, request_id: int, data: bytes) -> bytes:
        with self._lock:
            if (continuation := self._pending.get(request_id)) is None:
                raise UnknownRequestError(request_id)
            response = self._codec.decode(data)
            with self._guard("resolve"):
                event = continuation(response)
            # only a response the continuation accepted consumes the request
            del self._pending[request_id]
            logger.debug("Resolved request %d", request_id)
            if event is None:
                return self._codec.encode([])
            return self._dispatch(event)

    def view(self) -> bytes:
        with self._lock, self._guard("view"):
            snapshot = self._app.view(self._model)
        return self._codec.encode(snapshot)

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    def _dispatch(self, event: Any) -> bytes:
        with self._guard("update"):
            effects = list(self._app.update(event, self._model))

        batch: list[dict[str, Any]] = []
        registered: list[int] = []
        for effect in effects:
            request_id = self._allocate_id()
            if effect.on_response is not None:
                self._pending[request_id] = effect.on_response
                registered.append(request_id)
            batch.append(
                {
                    "id": request_id,
                    "capability": effect.capability,
                    "operation": effect.operation,
                }
            )

        try:
            encoded = self._codec.encode(batch)
        except BoundaryError:
            # nobody will ever see these ids
            for request_id in registered:
                del self._pending[request_id]
            raise
        logger.debug(
            "Event produced %d effect(s), %d pending", len(batch), len(self._pending)
        )
        return encoded

    def _allocate_id(self) -> int:
        if len(self._pending) >= U32_LIMIT:
            raise EngineFailure("No correlation ids left.")  # pragma: no cover
        while True:
            candidate = self._next_id
            self._next_id = (candidate + 1) % U32_LIMIT
            if candidate not in self._pending:
                return candidate

    @contextmanager
    def _guard(self, step: str) -> Iterator[None]:
        try:
            yield
        except BoundaryError:
            raise
        except Exception as e:  # pylint: disable=broad-except
            raise EngineFailure(
                f"{type(self._app).__name__} {step} failed: {e}"
            ) from e
