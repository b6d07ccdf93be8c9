from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Mapping, Tuple
import json

from stream_forwarder.config.destinations import DestinationConfig, HandlerConfig
from stream_forwarder.processing.models import BatchResult, ChangeRecord
from stream_forwarder.processing.router import DestinationRouter
from stream_forwarder.processing.serializer import BodySerializer
from stream_forwarder.streams.base import Stream
from stream_forwarder.utils.exceptions import (
    DeliveryError,
    FilterError,
    LoggingTransformError,
    SerializationError,
)
from stream_forwarder.utils.logger import LoggerLike


Delivery = Tuple[ChangeRecord, DestinationConfig]


class BatchDispatcher:
    """
    Forwards one batch of change records to every admitted destination.

    Each record is serialized once and the same body is published to all the
    destinations that admit it. Publishes for the whole batch run concurrently on
    a bounded thread pool; the dispatcher waits for all of them before reporting.

    The dispatcher holds no per-batch state, one instance can serve concurrent
    invocations as long as the stream is thread-safe.
    """

    def __init__(self, stream: Stream, max_workers: int = 10) -> None:
        """
        Initialize the dispatcher.

        Args:
            stream: Transport used for every publish call.
            max_workers: Upper bound of concurrent publish calls per batch.
        """
        self.stream = stream
        self.max_workers = max_workers

    def process_batch(
        self, records: Iterable[Mapping[str, Any]], config: HandlerConfig
    ) -> BatchResult:
        """
        Serialize, route, filter and publish every record of a batch.

        Serialization and delivery failures are collected, never raised, so one
        bad record or one unreachable queue does not stop the others.

        Args:
            records: The raw stream records of the batch.
            config: The validated handler configuration.

        Returns:
            BatchResult: Counters and every unrecovered failure.
        """
        records = list(records)
        log = config.logger
        router = DestinationRouter(config.destinations)
        serializer = BodySerializer(config.body_serializer)
        result = BatchResult(processed=len(records))

        futures: Dict[Future, Delivery] = {}

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="publish"
        ) as executor:
            for raw in records:
                if not isinstance(raw, Mapping):
                    error = SerializationError(
                        f"Stream record must be a mapping, got {type(raw).__name__}"
                    )
                    log.error(str(error))
                    result.errors.append(error)
                    continue

                record = ChangeRecord.from_event(raw)
                self._log_receipt(record, config)

                try:
                    body = serializer.serialize(record)
                except SerializationError as e:
                    log.error(f"Failed serializing record {record.describe()}: {e}")
                    result.errors.append(e)
                    continue

                admitted = router.route(record)

                for destination in router.destinations:
                    if destination not in admitted:
                        log.info(
                            f"Event not forwarded to {destination.endpoint}: "
                            f"Event Name {record.event_name or raw.get('eventName')}"
                        )
                        result.skipped += 1
                        continue
                    if not self._should_send(body, record, destination, config):
                        result.filtered += 1
                        continue
                    future = executor.submit(
                        self.stream.publish, destination.endpoint, body
                    )
                    futures[future] = (record, destination)

            result.errors.extend(self._collect(futures, result, log))

        log.info(
            f"Batch done: processed={result.processed} delivered={result.delivered} "
            f"skipped={result.skipped} filtered={result.filtered} failed={result.failed}"
        )
        return result

    def _collect(
        self,
        futures: Dict[Future, Delivery],
        result: BatchResult,
        log: LoggerLike,
    ) -> List[Exception]:
        """Wait for every publish and turn failures into DeliveryErrors."""
        errors: List[Exception] = []
        for future in as_completed(futures):
            record, destination = futures[future]
            try:
                future.result()
            except Exception as e:
                message = (
                    f"Failed delivering record {record.describe()} "
                    f"to {destination.endpoint}: {e}"
                )
                log.error(message)
                if isinstance(e, DeliveryError):
                    errors.append(e)
                    continue
                error = DeliveryError(message, endpoint=destination.endpoint)
                error.__cause__ = e
                errors.append(error)
            else:
                result.delivered += 1
        return errors

    def _should_send(
        self,
        body: str,
        record: ChangeRecord,
        destination: DestinationConfig,
        config: HandlerConfig,
    ) -> bool:
        """Evaluate the message filter, a raising filter counts as a rejection."""
        try:
            send = config.message_filter.should_send(body, destination.endpoint)
        except Exception as e:
            error = FilterError(
                f"Message filter failed for record {record.describe()} "
                f"and {destination.endpoint}: {e!r}"
            )
            config.logger.error(str(error))
            return False

        if not send:
            config.logger.info(
                f"Message not forwarded to {destination.endpoint}: "
                f"rejected by message filter for record {record.describe()}"
            )
        return bool(send)

    def _log_receipt(self, record: ChangeRecord, config: HandlerConfig) -> None:
        """Log one record, rendering the raw record if the transformer fails."""
        if config.log_payload_transformer is not None:
            try:
                payload = config.log_payload_transformer(record.raw)
                rendered = json.dumps(payload, default=str)
            except Exception as e:
                error = LoggingTransformError(
                    f"Log payload transformer failed for record {record.describe()}: {e!r}"
                )
                config.logger.error(str(error))
            else:
                config.logger.info(f"DynamoDB Record: {rendered}")
                return

        config.logger.info(f"DynamoDB Record: {json.dumps(record.raw, default=str)}")
