"""Global pytest fixtures for COREBRIDGE."""

from __future__ import annotations

import json

import pytest

from corebridge.adapters.apps.counter import make_engine
from corebridge.adapters.engine import BridgeEngine
from corebridge.bootstrap import build_boundary
from corebridge.entrypoints import ffi
from corebridge.service_layer.boundary import MessageBoundary


@pytest.fixture
def fresh_boundary(monkeypatch: pytest.MonkeyPatch) -> MessageBoundary:
    """Swap the process-wide boundary for a new, uninitialized one.

    The entry points in `corebridge.entrypoints.ffi` keep their engine for the
    life of the process; tests get their own so they start from Uninitialized.
    """
    boundary = build_boundary()
    monkeypatch.setattr(ffi, "_BOUNDARY", boundary)
    monkeypatch.delenv("COREBRIDGE_ENGINE", raising=False)
    return boundary


@pytest.fixture
def counter_engine() -> BridgeEngine:
    """A reference engine running the counter demo app."""
    return make_engine()


@pytest.fixture
def encode():
    """Encode a value as the compact JSON the reference engine expects."""

    def _encode(value) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    return _encode
