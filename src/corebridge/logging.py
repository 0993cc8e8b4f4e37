"""Logging for the COREBRIDGE CLI and host entry points.

Console records go through Rich on stderr. The optional flight recorder keeps
recent records in memory and writes them to a file once something goes wrong,
so a host developer gets the trail of boundary calls leading up to an abort.

Boundary aborts carry the failing operation and the cause's type as record
attributes (see `abort_context`). `RecordTagFilter` turns them, or the name of
a third-party logger, into a short tag rendered by both outputs::

    [handle_response:UnknownRequestError] Boundary handle_response aborted ...
    [pandas] some third-party message
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

from corebridge.config import ENGINE_ENV_VAR

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "corebridge"

ABORT_OPERATION = "boundary_operation"
ABORT_CAUSE = "boundary_cause"

CONSOLE_FORMAT = "%(tag)s%(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(tag)s%(message)s"
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s "
    "%(name)s:%(lineno)d: %(tag)s%(message)s"
)

# distributions whose versions are worth having in a bug report
DIAGNOSTIC_DISTS = ("pandas", "click", "click-extra", "rich")


def abort_context(operation: str, cause: BaseException) -> dict[str, str]:
    """Return the ``extra`` mapping for a boundary abort record."""
    return {ABORT_OPERATION: operation, ABORT_CAUSE: type(cause).__name__}


class RecordTagFilter(logging.Filter):
    """Set ``record.tag`` to a short bracketed origin marker.

    - Boundary abort records: ``"[<operation>:<cause type>] "``.
    - Records from loggers outside the project: ``"[<top-level package>] "``.
    - Other project records: ``""``.

    Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        operation = getattr(record, ABORT_OPERATION, None)
        package = record.name.partition(".")[0]
        if operation is not None:
            record.tag = f"[{operation}:{getattr(record, ABORT_CAUSE, '?')}] "
        elif package != PROJECT_PREFIX:
            record.tag = f"[{package}] "
        else:
            record.tag = ""
        return True


def config_console_handler(
    level: int = logging.WARNING, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Return a Rich handler writing to stderr, so stdout stays free for results.

    Args:
        level: Minimum console level; debug mode forces DEBUG.
        debug_mode: Show timestamps, logger names and source locations.
        color: Allow colored output (mirrors click-extra's ``--color/--no-color``).
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    handler.setFormatter(
        logging.Formatter(DEBUG_CONSOLE_FORMAT if debug_mode else CONSOLE_FORMAT)
    )
    handler.addFilter(RecordTagFilter())
    return handler


class FlightRecorder(MemoryHandler):
    """Buffer records in memory and dump them to ``path`` on trouble.

    Up to ``capacity`` records are kept. When a record at ``flush_level`` or
    above arrives (a boundary abort logs at CRITICAL), the buffer is written to
    ``path``, which is truncated on the first write of the run and only created
    if something is actually written.

    Args:
        path: Destination file.
        capacity: Number of records to buffer.
        flush_level: Level that triggers a dump.
        flush_on_close: Also dump whatever is buffered when the handler closes.
    """

    def __init__(
        self,
        path: Path,
        capacity: int = 2000,
        flush_level: int = logging.WARNING,
        flush_on_close: bool = False,
    ) -> None:
        target = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
        target.setLevel(logging.DEBUG)
        target.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
        target.addFilter(RecordTagFilter())
        super().__init__(
            capacity,
            flushLevel=flush_level,
            target=target,
            flushOnClose=flush_on_close,
        )
        self.path = Path(path)

    def describe(self) -> str:
        """One-line summary of the recorder's settings."""
        return (
            f"path={self.path}, capacity={self.capacity}, "
            f"flush_on_close={self.flushOnClose}"
        )


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:  # pragma: no cover
        return "<not installed>"


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    logger_levels: dict[str, int],
    engine_initialized: bool,
) -> None:
    """Log a one-line startup summary at INFO, then diagnostics at DEBUG.

    The diagnostics cover the interpreter, the library versions in
    `DIAGNOSTIC_DISTS`, the configured engine and whether it has been built
    yet, the active handlers (with the settings of any `FlightRecorder`) and
    per-logger level overrides.
    """
    recorders = [h for h in handlers if isinstance(h, FlightRecorder)]
    logger.info(
        "COREBRIDGE %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if recorders else "OFF",
    )

    logger.debug(
        "Python: %s on %s %s", sys.version.split()[0], platform.system(), platform.release()
    )
    logger.debug("PID: %s, CWD: %s", os.getpid(), Path.cwd())
    logger.debug(
        "Libraries: %s",
        ", ".join(f"{dist} {_dist_version(dist)}" for dist in DIAGNOSTIC_DISTS),
    )
    logger.debug(
        "Engine: %s (%s)",
        os.environ.get(ENGINE_ENV_VAR) or "<unset>",
        "constructed" if engine_initialized else "not constructed",
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    for recorder in recorders:
        logger.debug("Flight recorder: %s", recorder.describe())
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
