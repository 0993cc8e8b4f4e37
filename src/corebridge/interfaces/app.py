"""Application port driven by the reference engine.

An `App` is the state machine deciding which effects an event produces. It
mutates a model it created itself and returns the effects the host must
perform. Effects that expect an answer carry an `on_response` continuation
that turns the host's response into a follow-up event (or ``None``).
"""

import abc
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EffectRequest:
    """A side effect the application asks the host to perform.

    Attributes:
        capability: Name of the capability that serves the request (e.g. "render").
        operation: Capability-specific payload; must be encodable by the codec.
        on_response: Maps the host's decoded response to a follow-up event, or
            ``None`` for fire-and-forget effects.
    """

    capability: str
    operation: Any = None
    on_response: Callable[[Any], Any] | None = None

    @property
    def expects_response(self) -> bool:
        """Whether the host is expected to answer this request."""
        return self.on_response is not None


class App(abc.ABC):
    """Contract for an application state machine."""

    @abc.abstractmethod
    def initial_model(self) -> Any:
        """Return a fresh model."""

    @abc.abstractmethod
    def update(self, event: Any, model: Any) -> Sequence[EffectRequest]:
        """Apply ``event`` to ``model`` in place and return the resulting effects."""

    @abc.abstractmethod
    def view(self, model: Any) -> Any:
        """Return the view of ``model``; must be encodable by the codec."""
