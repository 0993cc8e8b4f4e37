"""Domain layer for COREBRIDGE.

Pure value types shared by messages crossing the boundary. No I/O, no
framework imports.
"""

from .errors import InvalidInstant, InvalidTime, TimeError
from .instant import NANOS_PER_SEC, Instant

__all__ = ["Instant", "NANOS_PER_SEC", "TimeError", "InvalidInstant", "InvalidTime"]
