"""Codecs for boundary messages."""

import dataclasses
import json
from typing import Any

from corebridge.domain.instant import Instant
from corebridge.interfaces.codec import Codec
from corebridge.interfaces.engine import DecodeError, EncodeError

# pylint: disable=too-few-public-methods


def _default(value: Any) -> Any:
    if isinstance(value, Instant):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


class JsonCodec(Codec):
    """Compact UTF-8 JSON codec.

    `Instant` values are written in their wire shape and other dataclasses as
    plain objects. Decoding returns plain JSON values; turning them back into
    domain types is up to the application.
    """

    def encode(self, value: Any) -> bytes:
        try:
            text = json.dumps(
                value, default=_default, separators=(",", ":"), allow_nan=False
            )
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Cannot encode {type(value).__name__}: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Malformed message: {e}") from e
