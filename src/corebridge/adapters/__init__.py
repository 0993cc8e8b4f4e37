"""Adapters (infrastructure) for COREBRIDGE.

Provide concrete implementations of the ports in `corebridge.interfaces`: a
JSON codec, a reference in-memory engine that drives an `App`, and a small
demo application.

Dependency rule: may import `corebridge.domain` and `corebridge.interfaces`;
neither of them may import this package.
"""
