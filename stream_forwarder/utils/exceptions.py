from typing import Any, Optional


class StreamForwarderError(Exception):
    """Base exception for all stream forwarder related errors."""

    pass


class ConfigurationError(StreamForwarderError):
    """Raised when the handler or a destination is configured incorrectly."""

    pass


class UnsupportedTypeError(StreamForwarderError):
    """Raised when an unsupported type is requested from a factory."""

    pass


class SerializationError(StreamForwarderError):
    """Raised when a change record cannot be turned into a message body."""

    pass


class FilterError(StreamForwarderError):
    """Raised when a message filter fails for a (record, destination) pair."""

    pass


class LoggingTransformError(StreamForwarderError):
    """Raised when the log payload transformer fails for a record."""

    pass


class StreamError(StreamForwarderError):
    """Raised when there is an issue with a stream operation."""

    pass


class DeliveryError(StreamError):
    """Raised when a message cannot be published to a destination."""

    def __init__(self, message: str, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class BatchProcessingError(StreamForwarderError):
    """
    Raised when a batch could not be forwarded in full.

    The invoking runtime treats this as a failed invocation and redelivers
    the whole batch.
    """

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result
