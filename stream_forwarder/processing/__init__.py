from stream_forwarder.processing.dispatcher import BatchDispatcher
from stream_forwarder.processing.handler import DynamoStreamHandler
from stream_forwarder.processing.models import BatchResult, ChangeRecord
from stream_forwarder.processing.router import DestinationRouter
from stream_forwarder.processing.serializer import BodySerializer

__all__ = [
    "BatchDispatcher",
    "BatchResult",
    "BodySerializer",
    "ChangeRecord",
    "DestinationRouter",
    "DynamoStreamHandler",
]
