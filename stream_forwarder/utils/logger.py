import logging
import os
import sys
from typing import Optional, Protocol

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class LoggerLike(Protocol):
    """
    What the forwarder needs from an injected logger.

    Both methods receive one preformatted message string, which is how a
    ``logging.Logger`` is called without extra arguments. HandlerConfig refuses
    a logger whose methods cannot be called that way.
    """

    def info(self, message: str, /) -> None: ...

    def error(self, message: str, /) -> None: ...


class Logger:
    """
    Process-wide console logger of the forwarder.

    A warm Lambda execution environment serves many invocations, so the
    handler is attached once per process and later configuration only moves
    the level.
    """

    _instance: Optional["Logger"] = None

    def __init__(self, level: str = "INFO", name: Optional[str] = None) -> None:
        self.name = name or os.getenv("APP_NAME", "stream-forwarder")
        self.logger = logging.getLogger(self.name)

        # The Lambda runtime puts its own handler on the root logger
        self.logger.propagate = False
        self.logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)

        self.set_level(level)

    @staticmethod
    def resolve_level(level: str) -> int:
        """Map a LOG_LEVEL name to a logging level, unknown names give INFO."""
        resolved = logging.getLevelName(str(level).strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    def set_level(self, level: str) -> None:
        self.logger.setLevel(self.resolve_level(level))

    @classmethod
    def get_logger(cls, level: str = "INFO") -> logging.Logger:
        """
        Return the shared logger, configuring it on first use.

        Args:
            level: Level applied only when the logger does not exist yet.
        """
        if cls._instance is None:
            cls._instance = cls(level=level)
        return cls._instance.logger

    @classmethod
    def update_level(cls, level: str) -> None:
        if cls._instance is None:
            cls.get_logger(level=level)
            return
        cls._instance.set_level(level)


logger = Logger.get_logger(os.getenv("LOG_LEVEL", "INFO"))
