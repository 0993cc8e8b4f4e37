"""Ports (interfaces) for COREBRIDGE.

Framework-free contracts the service layer depends on: the engine behind the
boundary, the codec used by engines, and the application state machine
driven by the reference engine.

Dependency rule: may import `corebridge.domain`; never import adapters,
bootstrap, or entrypoints.
"""
