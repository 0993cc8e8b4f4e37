"""Fixtures for end-to-end CLI logging tests.

Provides a test-only ``log-demo`` command that logs one message per level on a
project logger and a third-party logger, plus fixtures to register it on the
top-level `corebridge` group and to run the CLI inside an isolated directory.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from corebridge.entrypoints.cli.main import corebridge

# pylint: disable=redefined-outer-name

DEMO_COMMAND = "log-demo"


@click.command()
def log_demo():
    """Log DEBUG..CRITICAL on 'corebridge.demo' and DEBUG..WARNING on 'some.thirdparty'."""
    logger = logging.getLogger("corebridge.demo")
    third_party = logging.getLogger("some.thirdparty")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party.debug("This is a debug-level third-party test message.")
    third_party.info("This is an info-level third-party test message.")
    third_party.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _unregister(group: click.Group, name: str) -> None:
    """Drop ``name`` from the group, including Click-Extra's help sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for section in getattr(group, "_sections", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Expose ``corebridge log-demo`` for the duration of a test."""
    corebridge.add_command(log_demo, name=DEMO_COMMAND)
    try:
        yield DEMO_COMMAND
    finally:
        _unregister(corebridge, DEMO_COMMAND)


@pytest.fixture
def runner():
    """A Click test runner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside a throwaway working directory."""
    with runner.isolated_filesystem() as path:
        yield path
