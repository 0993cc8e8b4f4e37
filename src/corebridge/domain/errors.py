"""Domain-layer error definitions."""

# ============================================================================
#                           Time value errors
# ============================================================================


class TimeError(Exception):
    """Base class for errors raised by time value types."""


class InvalidInstant(TimeError):
    """Raised when an Instant cannot be built or cannot be converted out.

    Covers a nanosecond component outside ``[0, 1_000_000_000)``, seconds
    outside the unsigned 64-bit range, and an instant that overflows the
    external calendar time range.
    """


class InvalidTime(TimeError):
    """Raised when an external calendar time cannot be converted to an Instant.

    Note:
        The overflow guarded here is structurally the same condition as the
        outbound overflow reported by `InvalidInstant`. Both kinds are kept
        so callers matching on either one keep working.
    """
