"""Service layer for COREBRIDGE.

Holds the engine handle and the result-based boundary API that the
entrypoints wrap.

Dependency rule: may import `corebridge.interfaces` and `corebridge.domain`,
but not `corebridge.adapters` or `corebridge.entrypoints`.
"""

from .boundary import EngineAlreadyInitializedError, EngineCell, MessageBoundary

__all__ = ["EngineAlreadyInitializedError", "EngineCell", "MessageBoundary"]
