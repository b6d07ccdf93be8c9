"""Forward DynamoDB stream batches to one or more SQS queues."""

from stream_forwarder.config.destinations import DestinationConfig, HandlerConfig
from stream_forwarder.processing.dispatcher import BatchDispatcher
from stream_forwarder.processing.handler import DynamoStreamHandler
from stream_forwarder.processing.models import BatchResult, ChangeRecord

__all__ = [
    "BatchDispatcher",
    "BatchResult",
    "ChangeRecord",
    "DestinationConfig",
    "DynamoStreamHandler",
    "HandlerConfig",
]
