"""Fixtures for Engine contract tests."""

from collections.abc import Iterable

import pytest

from corebridge.adapters.apps.counter import make_engine
from corebridge.interfaces.engine import Engine


@pytest.fixture(params=["counter"])
def engine(request: pytest.FixtureRequest) -> Iterable[Engine]:
    """Yield a fresh Engine for the requested implementation.

    Supported params:
      - `"counter"` → `BridgeEngine` running the counter demo app

    Each invocation yields a brand-new engine for isolation. The contract tests
    drive it with the counter app's events, so every implementation listed here
    must understand them.
    """
    match request.param:
        case "counter":
            yield make_engine()
        case _:
            raise ValueError(f"unknown engine type: {request.param}")
