from dataclasses import dataclass
import os
from typing import List, Optional, Tuple

from stream_forwarder.utils.exceptions import ConfigurationError
from stream_forwarder.utils.logger import logger


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class AppConfig(object):
    """
    Application-wide configuration.

    This class represents the process configuration of the forwarder: logging
    level, which stream transport to use, the queues to forward to and the size of
    the publish worker pool.
    """

    log_level: str
    stream_type: str
    endpoints: Tuple[str, ...]
    event_names: Optional[Tuple[str, ...]]
    max_workers: int

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Create an AppConfig instance from environment variables.

        SQS_QUEUE_URLS holds a comma separated list of queue URLs; SQS_QUEUE_URL
        is accepted for a single queue. EVENT_NAMES, when set, applies to every
        queue.

        Returns:
            AppConfig: Configured instance with values from environment variables
                      or defaults if the environment variables are not set.

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed.
        """
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        stream_type = os.getenv("STREAM_TYPE", "sqs").lower()

        endpoints = _split_csv(os.getenv("SQS_QUEUE_URLS"))
        if not endpoints:
            endpoints = _split_csv(os.getenv("SQS_QUEUE_URL"))

        event_names = _split_csv(os.getenv("EVENT_NAMES"))

        raw_workers = os.getenv("MAX_WORKERS", "10")
        try:
            max_workers = int(raw_workers)
        except ValueError as e:
            raise ConfigurationError(
                f"MAX_WORKERS must be an integer, got {raw_workers!r}"
            ) from e
        if max_workers < 1:
            raise ConfigurationError("MAX_WORKERS must be at least 1")

        logger.info(
            f"Config: log_level={log_level}, stream_type={stream_type}, "
            f"endpoints={endpoints}, max_workers={max_workers}"
        )

        return cls(
            log_level=log_level,
            stream_type=stream_type,
            endpoints=tuple(endpoints),
            event_names=tuple(event_names) if event_names else None,
            max_workers=max_workers,
        )
