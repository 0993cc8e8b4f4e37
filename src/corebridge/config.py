"""Configuration utilities for COREBRIDGE.

This module centralizes small helpers and constants related to application configuration.
"""

import os
import re

ENGINE_ENV_VAR = "COREBRIDGE_ENGINE"  # pragma: no mutate

_ENGINE_SPEC_RE = re.compile(
    r"^(?P<module>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*):(?P<attr>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)$"
)


class EngineNotConfiguredError(Exception):
    """Raised when the COREBRIDGE_ENGINE environment variable is not set."""


class InvalidEngineSpecError(ValueError):
    """Raised when an engine spec is not of the form ``package.module:factory``."""

    def __init__(self, spec: str) -> None:
        super().__init__(
            f"Invalid engine spec {spec!r}; expected 'package.module:factory'."
        )
        self.spec = spec


def get_engine_spec() -> str:
    """Get the engine factory spec from the environment.

    Returns:
        The value of the `COREBRIDGE_ENGINE` environment variable.

    Raises:
        EngineNotConfiguredError: If `COREBRIDGE_ENGINE` is not set.
    """
    if not (spec := os.environ.get(ENGINE_ENV_VAR, "").strip()):
        raise EngineNotConfiguredError
    return spec


def parse_engine_spec(spec: str) -> tuple[str, str]:
    """Split an engine spec into module path and attribute path.

    Args:
        spec: A string such as ``"corebridge.adapters.apps.counter:make_engine"``.

    Returns:
        A ``(module, attribute)`` pair.

    Raises:
        InvalidEngineSpecError: If the spec is malformed.
    """
    if not (match := _ENGINE_SPEC_RE.match(spec.strip())):
        raise InvalidEngineSpecError(spec)
    return match["module"], match["attr"]
