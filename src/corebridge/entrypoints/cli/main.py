"""COREBRIDGE CLI entry point.

Defines the top-level ``corebridge`` command (via Click-Extra) and registers
subcommands exposed by the project.

Currently available commands
- ``corebridge replay`` — drive the boundary entry points from a JSON-lines script.
- ``corebridge time`` — convert between Instant records and ISO-8601 timestamps.

Notes
- The CLI version is sourced from `corebridge.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Log output goes to stderr; command results go to stdout.

Examples
    $ corebridge --version
    $ corebridge -v replay --engine corebridge.adapters.apps.counter:make_engine session.jsonl
    $ corebridge time format 1000000000 10
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from corebridge import __version__
from corebridge.entrypoints import ffi
from corebridge.logging import FlightRecorder, config_console_handler, log_startup

from .helpers import parse_log_level
from .replay import replay
from .time_cmds import time_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """COREBRIDGE command-line interface.

    COREBRIDGE is the message boundary between an opaque application engine and
    the native hosts embedding it. This CLI acts as a diagnostic host: it feeds
    scripted events and responses through the same entry points a real host
    uses and converts Instant values to and from calendar timestamps.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("corebridge", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="COREBRIDGE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="COREBRIDGE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "(tunable via COREBRIDGE_FLIGHT_RECORDER_CAPACITY) at DEBUG granularity "
        "(unaffected by -v/-q) and writes them to --log-path when a WARNING, ERROR "
        "or boundary abort occurs, or on clean exit if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR; console output is unaffected."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). This changes the "
        "logger's own level, so it applies to BOTH console and flight-recorder. "
        "Repeatable (e.g. -L corebridge.adapters=DEBUG -L markdown_it=ERROR) or "
        "via COREBRIDGE_LOGGER_LEVELS (comma/space list)."
    ),
    envvar="COREBRIDGE_LOGGER_LEVELS",
    show_envvar=True,
)
@clickx.pass_context
def corebridge(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """COREBRIDGE command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console handler
    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            FlightRecorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        logger_levels=logger_levels,
        engine_initialized=ffi.is_initialized(),
    )

    ctx.call_on_close(logging.shutdown)


corebridge.add_command(replay)
corebridge.add_command(time_group)
