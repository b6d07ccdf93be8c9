from stream_forwarder.streams.base import Stream
from stream_forwarder.streams.factory import StreamFactory
from stream_forwarder.streams.sqs import SQS

# Register the SQS stream with the factory
StreamFactory.register_stream('sqs', SQS)

__all__ = [
    'Stream',
    'StreamFactory',
    'SQS'
]
