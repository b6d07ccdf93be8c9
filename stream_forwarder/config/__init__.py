from stream_forwarder.config.destinations import DestinationConfig, HandlerConfig
from stream_forwarder.config.loader import AppConfig

__all__ = [
    "AppConfig",
    "DestinationConfig",
    "HandlerConfig",
]
