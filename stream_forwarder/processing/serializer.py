from typing import Any, Callable, Optional
import json
from stream_forwarder.processing.models import ChangeRecord
from stream_forwarder.utils.exceptions import ConfigurationError, SerializationError


class BodySerializer:
    """
    Turns a change record into the message body published to every destination.

    Without a transform the whole raw record is encoded as JSON. A custom
    transform receives the raw record; a ``str`` result is published as-is,
    ``bytes`` are decoded as UTF-8 and anything else is JSON encoded.

    A failing transform raises SerializationError. There is no fallback to the
    default encoding, destinations must never disagree on what a record means.
    """

    def __init__(self, transform: Optional[Callable[[Any], Any]] = None):
        if transform is not None and not callable(transform):
            raise ConfigurationError("Body serializer must be a function")
        self.transform = transform

    def serialize(self, record: ChangeRecord) -> str:
        """
        Serialize a record to its message body.

        Args:
            record (ChangeRecord): The record to serialize.

        Returns:
            str: The message body.

        Raises:
            SerializationError: If the transform or the encoding fails.
        """
        try:
            if self.transform is None:
                return self._encode(record.raw)
            return self._encode(self.transform(record.raw))
        except Exception as e:
            raise SerializationError(
                f"Failed to serialize record {record.describe()}: {e}"
            ) from e

    @staticmethod
    def _encode(payload: Any) -> str:
        if isinstance(payload, str):
            return payload
        if isinstance(payload, bytes):
            return payload.decode("utf-8")
        # DynamoDB images may carry Decimal, datetime or bytes values
        return json.dumps(payload, default=str)
