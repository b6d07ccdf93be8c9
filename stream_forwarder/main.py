from typing import Any, Mapping, Optional
from dotenv import load_dotenv

from stream_forwarder.utils.logger import Logger
from stream_forwarder.streams.factory import StreamFactory
from stream_forwarder.processing.handler import DynamoStreamHandler
from stream_forwarder.config.loader import AppConfig
from stream_forwarder.utils.exceptions import ConfigurationError

_handler: Optional[DynamoStreamHandler] = None


def build_handler() -> DynamoStreamHandler:
    """
    Build a DynamoStreamHandler from the process environment.

    Loads a .env file when present, applies LOG_LEVEL, creates the configured
    stream and gives every queue in SQS_QUEUE_URLS the same EVENT_NAMES.

    Returns:
        DynamoStreamHandler: The configured handler.

    Raises:
        ConfigurationError: If no queue is configured or a setting is invalid.
    """
    load_dotenv()

    app_config = AppConfig.load()
    Logger.update_level(app_config.log_level)
    logger = Logger.get_logger()

    if not app_config.endpoints:
        raise ConfigurationError("SQS_QUEUE_URLS or SQS_QUEUE_URL is required")

    event_names = list(app_config.event_names) if app_config.event_names else None
    destinations = [
        {"endpoint": endpoint, "event_names": event_names}
        for endpoint in app_config.endpoints
    ]

    stream = StreamFactory.create(app_config.stream_type)

    return DynamoStreamHandler(
        stream=stream,
        destinations=destinations,
        logger=logger,
        max_workers=app_config.max_workers,
    )


def lambda_handler(event: Mapping[str, Any], context: Any) -> str:
    """
    AWS Lambda entry point.

    The handler is built on the first invocation and reused by the following
    ones for as long as the execution environment stays warm.
    """
    global _handler
    if _handler is None:
        _handler = build_handler()
    return _handler(event, context)
