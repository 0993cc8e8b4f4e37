"""Bootstrap the engine behind the message boundary."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from functools import reduce

from corebridge import config
from corebridge.adapters.codecs import JsonCodec
from corebridge.interfaces.codec import Codec
from corebridge.interfaces.engine import Engine
from corebridge.service_layer.boundary import EngineCell, MessageBoundary

logger = logging.getLogger(__name__)


def load_engine_factory(spec: str) -> Callable[[], Engine]:
    """Import the engine factory named by ``spec`` (``package.module:factory``).

    Raises:
        InvalidEngineSpecError: If the spec is malformed.
        ImportError: If the module cannot be imported.
        AttributeError: If the factory does not exist in the module.
        TypeError: If the named object is not callable.
    """
    module_name, attr_path = config.parse_engine_spec(spec)
    module = importlib.import_module(module_name)
    factory = reduce(getattr, attr_path.split("."), module)
    if not callable(factory):
        raise TypeError(f"{spec} does not name a callable engine factory")
    return factory


def build_engine() -> Engine:
    """Build the engine configured through ``COREBRIDGE_ENGINE``."""
    spec = config.get_engine_spec()
    logger.debug("Loading engine factory %s", spec)
    return load_engine_factory(spec)()


def build_codec() -> Codec:
    """Build the codec hosts use for payloads sent to the reference engine."""
    return JsonCodec()


def build_boundary(factory: Callable[[], Engine] = build_engine) -> MessageBoundary:
    """Build a message boundary whose engine is constructed lazily by ``factory``."""
    return MessageBoundary(EngineCell(factory))
