from typing import Any, ClassVar, Dict, List, Type
from stream_forwarder.utils.logger import logger
from stream_forwarder.utils.exceptions import UnsupportedTypeError
from stream_forwarder.streams.base import Stream


class StreamFactory:
    """
    Registry of the transports a forwarder can publish through.

    The key is the STREAM_TYPE setting, matched case-insensitively. The
    streams package registers SQS on import.
    """

    REGISTRY: ClassVar[Dict[str, Type[Stream]]] = {}

    @classmethod
    def register_stream(cls, name: str, stream_class: Type[Stream]) -> None:
        if not (isinstance(stream_class, type) and issubclass(stream_class, Stream)):
            raise UnsupportedTypeError(
                f"Cannot register {stream_class!r} as '{name}': not a Stream"
            )
        cls.REGISTRY[name.strip().lower()] = stream_class

    @classmethod
    def supported_types(cls) -> List[str]:
        return sorted(cls.REGISTRY)

    @classmethod
    def create(cls, stream_type: str, **settings: Any) -> Stream:
        """
        Build the stream registered under ``stream_type``.

        Args:
            stream_type: Registered name, e.g. "sqs".
            **settings: Passed to the stream constructor unchanged.

        Raises:
            UnsupportedTypeError: If nothing is registered under that name.
        """
        stream_class = cls.REGISTRY.get(stream_type.strip().lower())
        if stream_class is None:
            message = (
                f"Unsupported stream type: {stream_type}. "
                f"Supported types: {cls.supported_types()}"
            )
            logger.error(message)
            raise UnsupportedTypeError(message)

        logger.info(f"Publishing through {stream_class.__name__} ({stream_type})")
        return stream_class(**settings)
