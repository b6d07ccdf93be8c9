import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from stream_forwarder.filters.base import MessageFilter
from stream_forwarder.filters.event_names import EventNameFilter
from stream_forwarder.filters.factory import FilterFactory
from stream_forwarder.utils.exceptions import ConfigurationError
from stream_forwarder.utils.logger import LoggerLike, logger as default_logger


@dataclass(frozen=True)
class DestinationConfig:
    """
    One configured queue target.

    The endpoint is the queue URL handed to the stream on publish, and
    event_names is the canonical set of change kinds it accepts.
    """

    endpoint: str
    event_names: FrozenSet[str] = field(default_factory=lambda: EventNameFilter.SUPPORTED)

    def __post_init__(self) -> None:
        if not isinstance(self.endpoint, str) or not self.endpoint.strip():
            raise ConfigurationError("Destination endpoint is a required parameter")
        object.__setattr__(self, "endpoint", self.endpoint.strip())
        object.__setattr__(
            self, "event_names", EventNameFilter.normalize(self.event_names)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DestinationConfig":
        """
        Create a DestinationConfig from a plain mapping.

        Accepts ``endpoint`` (or ``sqs_endpoint``/``sqsEndpoint``/``queue_url``)
        and ``event_names`` (or ``eventNames``).

        Raises:
            ConfigurationError: If the mapping has no endpoint or an invalid
                event name.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Destination must be a mapping, got {type(data).__name__}"
            )

        endpoint = None
        for key in ("endpoint", "sqs_endpoint", "sqsEndpoint", "queue_url"):
            if data.get(key):
                endpoint = data[key]
                break

        event_names = data.get("event_names", data.get("eventNames"))
        return cls(endpoint=endpoint, event_names=event_names)  # type: ignore[arg-type]

    def accepts(self, event_name: Any) -> bool:
        return EventNameFilter.accepts(self.event_names, event_name)


DestinationInput = Union[DestinationConfig, Mapping[str, Any], str]


def _check_callable(value: Optional[Callable], name: str) -> None:
    if value is not None and not callable(value):
        raise ConfigurationError(f"{name} must be a function")


def _check_logger(logger: Any) -> None:
    for method_name in ("info", "error"):
        method = getattr(logger, method_name, None)
        if not callable(method):
            raise ConfigurationError(f"Logger must expose an {method_name}() method")
        try:
            signature = inspect.signature(method)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures are taken as is
            continue
        try:
            signature.bind("message")
        except TypeError as e:
            raise ConfigurationError(
                f"Logger {method_name}() must accept a single message argument: {e}"
            ) from e


@dataclass(frozen=True)
class HandlerConfig:
    """
    Aggregate, read-only configuration shared by every batch invocation.

    Attributes:
        destinations: Ordered, non-empty destinations.
        body_serializer: Optional ``(record) -> payload`` transform.
        message_filter: Filter evaluated per (record, destination) pair.
        log_payload_transformer: Optional ``(record) -> loggable`` used only
            when logging record receipt.
        logger: Receives progress and error events. Only ``info(message)``
            and ``error(message)`` are called, always with one preformatted
            string, which is the ``logging.Logger`` call shape. A logger
            whose methods cannot take a lone message argument, such as an
            ``error(error_info, message)`` pair, is rejected.
    """

    destinations: Tuple[DestinationConfig, ...]
    body_serializer: Optional[Callable[[Any], Any]] = None
    message_filter: MessageFilter = field(default_factory=FilterFactory.create)
    log_payload_transformer: Optional[Callable[[Any], Any]] = None
    logger: LoggerLike = field(default=default_logger)

    def __post_init__(self) -> None:
        if not self.destinations:
            raise ConfigurationError("At least one destination is required")
        for destination in self.destinations:
            if not isinstance(destination, DestinationConfig):
                raise ConfigurationError(
                    f"Invalid destination: {destination!r}"
                )
        _check_callable(self.body_serializer, "Body serializer")
        _check_callable(self.log_payload_transformer, "Log payload transformer")
        if not isinstance(self.message_filter, MessageFilter):
            raise ConfigurationError("Message filter must be a MessageFilter")
        _check_logger(self.logger)

    @property
    def endpoints(self) -> Tuple[str, ...]:
        return tuple(d.endpoint for d in self.destinations)

    @classmethod
    def build(
        cls,
        destinations: Iterable[DestinationInput],
        body_serializer: Optional[Callable[[Any], Any]] = None,
        message_filter: Any = None,
        log_payload_transformer: Optional[Callable[[Any], Any]] = None,
        logger: Optional[LoggerLike] = None,
    ) -> "HandlerConfig":
        """
        Build and validate a HandlerConfig from loosely typed input.

        Args:
            destinations: DestinationConfig instances, mappings or bare
                endpoint strings.
            body_serializer: Optional body transform.
            message_filter: None, a function, a MessageFilter or a list of those.
            log_payload_transformer: Optional log rendering transform.
            logger: Optional logger, defaults to the application logger.

        Returns:
            HandlerConfig: The validated configuration.

        Raises:
            ConfigurationError: On any invalid value.
        """
        if destinations is None or isinstance(destinations, (str, Mapping)):
            raise ConfigurationError("Destinations must be a list")

        resolved = []
        for destination in destinations:
            if isinstance(destination, DestinationConfig):
                resolved.append(destination)
            elif isinstance(destination, str):
                resolved.append(DestinationConfig(endpoint=destination))
            else:
                resolved.append(DestinationConfig.from_dict(destination))

        return cls(
            destinations=tuple(resolved),
            body_serializer=body_serializer,
            message_filter=FilterFactory.create(message_filter),
            log_payload_transformer=log_payload_transformer,
            logger=logger or default_logger,
        )
