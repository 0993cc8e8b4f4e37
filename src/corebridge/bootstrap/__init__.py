"""Bootstrap (composition root) for COREBRIDGE.

Assembles the boundary at runtime: resolves the configured engine factory and
wires it into the lazily-initialized engine cell behind the message boundary.

Import rules:
- Entry points import *this* package to obtain a boundary.
- This package may import: `corebridge.adapters`, `corebridge.service_layer`,
  `corebridge.interfaces`, `corebridge.domain`, and `corebridge.config`.
- Inner layers must not import `corebridge.bootstrap`.
"""

from .bootstrap import build_boundary, build_codec, build_engine, load_engine_factory

__all__ = ["build_boundary", "build_codec", "build_engine", "load_engine_factory"]
