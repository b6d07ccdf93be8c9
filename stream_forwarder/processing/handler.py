from typing import Any, Callable, Iterable, Mapping, NoReturn, Optional

from stream_forwarder.config.destinations import DestinationInput, HandlerConfig
from stream_forwarder.processing.dispatcher import BatchDispatcher
from stream_forwarder.processing.models import BatchResult
from stream_forwarder.streams.base import Stream
from stream_forwarder.utils.exceptions import BatchProcessingError, ConfigurationError
from stream_forwarder.utils.logger import LoggerLike


class DynamoStreamHandler:
    """
    Lambda handler forwarding DynamoDB stream batches to SQS queues.

    The configuration is validated when the handler is built, an invalid
    destination list never produces a usable handler. Instances are callable
    with the ``(event, context)`` signature of a Lambda function.

    Any unrecovered failure fails the whole invocation so that the event
    source mapping redelivers the entire batch (at-least-once).
    """

    def __init__(
        self,
        stream: Stream,
        config: Optional[HandlerConfig] = None,
        destinations: Optional[Iterable[DestinationInput]] = None,
        sqs_endpoint: Optional[str] = None,
        event_names: Optional[Iterable[str]] = None,
        body_serializer: Optional[Callable[[Any], Any]] = None,
        message_filter: Any = None,
        log_payload_transformer: Optional[Callable[[Any], Any]] = None,
        logger: Optional[LoggerLike] = None,
        max_workers: int = 10,
    ) -> None:
        """
        Initialize the handler.

        Either pass a ready HandlerConfig, a destinations list, or the single
        destination shorthand ``sqs_endpoint``/``event_names``.

        Args:
            stream: Transport used to publish messages.
            config: A validated HandlerConfig; other configuration arguments
                must then be omitted.
            destinations: Destinations as DestinationConfig, mappings or
                endpoint strings.
            sqs_endpoint: Single destination endpoint.
            event_names: Accepted event names of the single destination.
            body_serializer: Optional ``(record) -> payload`` transform.
            message_filter: Optional ``(payload, endpoint) -> bool`` predicate.
            log_payload_transformer: Optional ``(record) -> loggable`` transform.
            logger: Optional logger, defaults to the application logger.
            max_workers: Upper bound of concurrent publish calls per batch.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if config is None:
            if destinations is None and sqs_endpoint is not None:
                destinations = [{"endpoint": sqs_endpoint, "event_names": event_names}]
            elif event_names is not None:
                raise ConfigurationError(
                    "event_names only applies together with sqs_endpoint"
                )
            config = HandlerConfig.build(
                destinations=destinations,  # type: ignore[arg-type]
                body_serializer=body_serializer,
                message_filter=message_filter,
                log_payload_transformer=log_payload_transformer,
                logger=logger,
            )
        elif destinations is not None or sqs_endpoint is not None:
            raise ConfigurationError("Pass either config or destinations, not both")

        if not isinstance(stream, Stream):
            raise ConfigurationError("A Stream implementation is required")

        self.config = config
        self.logger = config.logger
        self.dispatcher = BatchDispatcher(stream, max_workers=max_workers)

        self._log_configuration()

    def _log_configuration(self) -> None:
        for destination in self.config.destinations:
            event_names = sorted(destination.event_names)
            self.logger.info(
                f"Creating dynamo-to-sqs: SQS Endpoint {destination.endpoint} "
                f"| Event Names: {','.join(event_names)}"
            )
            if not event_names:
                self.logger.info(
                    f"Destination {destination.endpoint} accepts no event names "
                    f"and will not receive any record"
                )

    def handle(self, event: Mapping[str, Any], context: Any = None) -> str:
        """
        Forward one stream batch.

        Args:
            event: The Lambda event, ``{"Records": [...]}``.
            context: The Lambda context object.

        Returns:
            str: "Successfully processed N records."

        Raises:
            BatchProcessingError: If the event is malformed or any record could
                not be serialized or delivered.
        """
        records = event.get("Records") if isinstance(event, Mapping) else None
        if not isinstance(records, list):
            error = BatchProcessingError(
                "Event has no Records list", result=BatchResult(processed=0)
            )
            self._fail(error, context)

        result = self.dispatcher.process_batch(records, self.config)

        if result.succeeded:
            return result.message

        cause = result.error
        error = BatchProcessingError(
            f"{result.message} First error: {cause}", result=result
        )
        error.__cause__ = cause
        self._fail(error, context)

    __call__ = handle

    def _fail(self, error: BatchProcessingError, context: Any) -> NoReturn:
        self.logger.error(f"Failed processing records: {error}")
        fail = getattr(context, "fail", None)
        if callable(fail):
            fail(error)
        raise error

