"""Validated point-in-time value carried inside boundary messages.

An `Instant` is a UTC timestamp split into whole seconds since the Unix epoch
(1970-01-01T00:00:00Z) and the nanoseconds elapsed since the last whole
second. The nanosecond component is validated at construction, so an
`Instant` that exists is always well-formed.

The external calendar representation is `pandas.Timestamp` in UTC, which
keeps nanosecond precision (stdlib ``datetime`` stops at microseconds).

Wire shape (when embedded in a payload)::

    {"seconds": <u64>, "nanos": <u32, < 1_000_000_000>}
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from .errors import InvalidInstant, InvalidTime

__all__ = ["Instant", "NANOS_PER_SEC"]

NANOS_PER_SEC = 1_000_000_000
U64_LIMIT = 2**64


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


@dataclass(frozen=True, slots=True, order=True)
class Instant:
    """A point in time (UTC) as whole seconds plus sub-second nanoseconds.

    Args:
        seconds: Seconds since the Unix epoch, in ``[0, 2**64)``.
        nanos: Nanoseconds since the last whole second, in ``[0, 1_000_000_000)``.

    Raises:
        InvalidInstant: If ``nanos`` is out of range or ``seconds`` does not
            fit an unsigned 64-bit integer.
        TypeError: If either field is not an ``int``.
    """

    seconds: int
    nanos: int

    def __post_init__(self) -> None:
        _require_int("seconds", self.seconds)
        _require_int("nanos", self.nanos)
        if not 0 <= self.nanos < NANOS_PER_SEC:
            raise InvalidInstant(
                f"nanos must be in [0, {NANOS_PER_SEC}), got {self.nanos}"
            )
        if not 0 <= self.seconds < U64_LIMIT:
            raise InvalidInstant(
                f"seconds must fit an unsigned 64-bit integer, got {self.seconds}"
            )

    @classmethod
    def new(cls, seconds: int, nanos: int) -> Instant:
        """Create a new `Instant`; same validation as the constructor."""
        return cls(seconds, nanos)

    # ------------------------------------------------------------------ #
    # Wire shape
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, int]:
        """Return the wire record for this instant."""
        return {"seconds": self.seconds, "nanos": self.nanos}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Instant:
        """Build an `Instant` from its wire record.

        Raises:
            InvalidInstant: If a field is missing, is not an integer, or is
                out of range.
        """
        try:
            seconds, nanos = data["seconds"], data["nanos"]
        except (KeyError, TypeError) as e:
            raise InvalidInstant(f"malformed instant record: {data!r}") from e
        try:
            return cls(seconds, nanos)
        except TypeError as e:
            raise InvalidInstant(f"malformed instant record: {data!r}") from e

    # ------------------------------------------------------------------ #
    # External calendar time
    # ------------------------------------------------------------------ #

    def to_timestamp(self) -> pd.Timestamp:
        """Convert to a UTC `pandas.Timestamp`.

        Raises:
            InvalidInstant: If the instant lies beyond the range a
                nanosecond-precision timestamp can hold.
        """
        total_nanos = self.seconds * NANOS_PER_SEC + self.nanos
        if total_nanos > pd.Timestamp.max.value:
            raise InvalidInstant(
                f"{self!r} is out of range for a nanosecond timestamp"
            )
        return pd.Timestamp(total_nanos, unit="ns").tz_localize("UTC")

    @classmethod
    def from_timestamp(cls, value: pd.Timestamp | datetime) -> Instant:
        """Convert a calendar time to an `Instant`.

        Naive values are taken to be UTC; aware values are converted to UTC.

        Raises:
            InvalidTime: If the value is ``NaT``, lies before the Unix epoch,
                or has whole seconds that do not fit an unsigned 64-bit integer.
            TypeError: If ``value`` is not a datetime-like object.
        """
        if value is pd.NaT:
            raise InvalidTime("NaT is not representable as an Instant")
        if not isinstance(value, datetime):
            raise TypeError(f"expected a datetime-like value, got {type(value).__name__}")
        if value.tzinfo is None or value.utcoffset() is None:
            value = value.replace(tzinfo=timezone.utc)
        utc = value.astimezone(timezone.utc)

        seconds = calendar.timegm(utc.timetuple())
        if not 0 <= seconds < U64_LIMIT:
            raise InvalidTime(f"{value!s} is not representable as an Instant")
        # pandas keeps the sub-microsecond part separately
        nanos = utc.microsecond * 1_000 + getattr(utc, "nanosecond", 0)
        return cls(seconds, nanos)
