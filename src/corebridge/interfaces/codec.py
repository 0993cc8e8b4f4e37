"""Interface for message codecs."""

import abc
from typing import Any

# pylint: disable=too-few-public-methods


class Codec(abc.ABC):
    """Contract for turning Python values into message bytes and back."""

    @abc.abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize a value.

        Raises:
            EncodeError: If the value cannot be serialized.
        """

    @abc.abstractmethod
    def decode(self, data: bytes) -> Any:
        """Deserialize a message.

        Raises:
            DecodeError: If the bytes are not a valid message.
        """
