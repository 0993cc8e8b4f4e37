"""``corebridge replay`` — drive the host entry points from a script.

Reads a JSON-lines script and sends each message through the same
``process_event`` / ``handle_response`` / ``view`` entry points a native host
calls. Payloads are encoded as compact UTF-8 JSON, so the engine under test
must speak JSON (the reference `BridgeEngine` does by default).

Script format (one JSON object per line; blank lines and ``#`` comments skipped)::

    {"event": {"type": "increment"}}
    {"response": {"id": 0, "body": {"seconds": 1000000000, "nanos": 10}}}
    {"view": null}

Output: one line per message on stdout holding the raw bytes returned by the
entry point, decoded as UTF-8.

Failure modes
- No engine configured, or a spec that cannot be imported → ``ClickException``.
- A malformed script line → ``ClickException`` naming the line.
- A boundary abort → the abort is reported and the command exits non-zero;
  results already printed stay on stdout.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

import click

from corebridge import config
from corebridge.bootstrap import build_codec, load_engine_factory
from corebridge.entrypoints import ffi
from corebridge.service_layer.boundary import EngineAlreadyInitializedError

from .helpers import error, success, warn

if TYPE_CHECKING:
    from corebridge.interfaces.codec import Codec

MISSING_ENGINE_MSG = (
    f"No engine configured.\n\n"
    f"Pass --engine or set {config.ENGINE_ENV_VAR}, e.g.:\n"
    f"  export {config.ENGINE_ENV_VAR}='corebridge.adapters.apps.counter:make_engine'"
)

OPERATIONS = ("event", "response", "view")


def _install_engine(spec: str) -> None:
    try:
        factory = load_engine_factory(spec)
    except config.InvalidEngineSpecError as e:
        raise click.ClickException(str(e)) from e
    except (ImportError, AttributeError, TypeError) as e:
        raise click.ClickException(f"Cannot load engine factory {spec!r}: {e}") from e
    try:
        ffi.install_engine_factory(factory)
    except EngineAlreadyInitializedError as e:
        raise click.ClickException(str(e)) from e


def _parse_line(lineno: int, line: str) -> tuple[str, Any]:
    try:
        message = json.loads(line)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Line {lineno}: not valid JSON ({e.msg}).") from e
    if not isinstance(message, dict) or len(message) != 1:
        raise click.ClickException(
            f"Line {lineno}: expected an object with exactly one of {', '.join(OPERATIONS)}."
        )
    ((operation, payload),) = message.items()
    if operation not in OPERATIONS:
        raise click.ClickException(f"Line {lineno}: unknown operation {operation!r}.")
    if operation == "response" and not (
        isinstance(payload, dict) and isinstance(payload.get("id"), int)
    ):
        raise click.ClickException(
            f"Line {lineno}: a response needs an integer 'id' and a 'body'."
        )
    return operation, payload


def _send(operation: str, payload: Any, codec: Codec) -> bytes:
    match operation:
        case "event":
            return ffi.process_event(codec.encode(payload))
        case "response":
            return ffi.handle_response(payload["id"], codec.encode(payload.get("body")))
        case _:
            return ffi.view()


@click.command()
@click.argument("script", type=click.File("r", encoding="utf-8"))
@click.option(
    "--engine",
    "engine_spec",
    envvar=config.ENGINE_ENV_VAR,
    show_envvar=True,
    help="Engine factory as 'package.module:factory'.",
)
def replay(script: TextIO, engine_spec: str | None) -> None:
    """Send the messages in SCRIPT through the boundary (use - for stdin)."""
    if not engine_spec:
        raise click.ClickException(MISSING_ENGINE_MSG)
    _install_engine(engine_spec)

    codec = build_codec()
    sent = 0
    for lineno, raw in enumerate(script, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        operation, payload = _parse_line(lineno, line)
        try:
            result = _send(operation, payload, codec)
        except ffi.BoundaryPanic as e:
            error(f"Line {lineno}: {e}")
            raise click.exceptions.Exit(1) from e
        click.echo(result.decode("utf-8", errors="backslashreplace"))
        sent += 1

    if not sent:
        warn("Script contained no messages.")
        return
    success(f"Replayed {sent} message(s).")
