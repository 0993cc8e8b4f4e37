"""COREBRIDGE

The message boundary between an opaque application engine and the native
hosts embedding it. Hosts pass opaque byte messages in through three entry
points and get encoded effect batches or view snapshots back. Also provides
the validated ``Instant`` value type carried inside those messages.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
