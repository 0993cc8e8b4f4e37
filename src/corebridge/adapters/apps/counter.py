"""Counter demo application.

A minimal `App` used by the CLI and the tests: a counter that asks the host
to re-render after every change and can ask the host for the current time.

Events (JSON objects, keyed by ``type``):
- ``increment`` / ``decrement`` / ``reset``
- ``get_time`` — emits a ``time`` effect; the host answers with an `Instant`
  wire record, which comes back as a ``set_time`` event.
- ``set_time`` — ``{"type": "set_time", "instant": {"seconds": .., "nanos": ..}}``
  Times beyond the nanosecond timestamp range (after 2262) are rejected and
  leave the model unchanged.

View: ``{"count": <int>, "updated_at": <ISO-8601 UTC or null>}``
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from corebridge.adapters.engine import BridgeEngine
from corebridge.domain.instant import Instant
from corebridge.interfaces.app import App, EffectRequest

RENDER = EffectRequest("render")


class UnknownEventError(ValueError):
    """Raised when an event has no handler in the counter app."""

    def __init__(self, event: Any) -> None:
        super().__init__(f"Unknown counter event: {event!r}")
        self.event = event


@dataclass
class CounterModel:
    """Mutable state of the counter app."""

    count: int = 0
    updated_at: Instant | None = None


def _renderable_instant(record: Any) -> Instant:
    instant = Instant.from_dict(record)
    # the view renders a timestamp; refuse times it could never render
    instant.to_timestamp()
    return instant


def _time_to_event(response: Any) -> dict[str, Any]:
    return {"type": "set_time", "instant": _renderable_instant(response).to_dict()}


class CounterApp(App):
    """Counter with render and time effects."""

    def initial_model(self) -> CounterModel:
        return CounterModel()

    def update(self, event: Any, model: CounterModel) -> Sequence[EffectRequest]:
        kind = event.get("type") if isinstance(event, dict) else None
        match kind:
            case "increment":
                model.count += 1
            case "decrement":
                model.count -= 1
            case "reset":
                model.count = 0
            case "get_time":
                return [
                    EffectRequest("time", {"type": "now"}, on_response=_time_to_event)
                ]
            case "set_time":
                model.updated_at = _renderable_instant(event.get("instant"))
            case _:
                raise UnknownEventError(event)
        return [RENDER]

    def view(self, model: CounterModel) -> dict[str, Any]:
        updated_at = (
            model.updated_at.to_timestamp().isoformat()
            if model.updated_at is not None
            else None
        )
        return {"count": model.count, "updated_at": updated_at}


def make_engine() -> BridgeEngine:
    """Engine factory for ``COREBRIDGE_ENGINE=corebridge.adapters.apps.counter:make_engine``."""
    return BridgeEngine(CounterApp())
