from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional, Protocol, Tuple


# Serialized message body as it will be published
Message = str

FilterCallable = Callable[[Message, str], bool]


class FilterLike(Protocol):
    """Protocol for objects with filter method compatibility.

    Anything exposing ``should_send`` behaves like a filter, which makes
    MessageFilter implementations and test mocks interchangeable.
    """

    def should_send(self, message: Message, endpoint: str) -> bool:
        """Decide whether a message goes to the given endpoint."""
        ...


class MessageFilter(ABC):
    """Abstract base class for all message filters.

    A message filter is a predicate evaluated once per (record, destination)
    pair, after the event name check passed and before the publish call.
    Implementations must not rely on side effects.
    """

    @abstractmethod
    def should_send(self, message: Message, endpoint: str) -> bool:
        """Decide whether a message should be published.

        Args:
            message: The serialized message body.
            endpoint: The logical identifier of the destination.

        Returns:
            True to publish, False to skip this destination.
        """
        pass


class AcceptAllFilter(MessageFilter):
    """Default filter, every message is sent."""

    def should_send(self, message: Message, endpoint: str) -> bool:
        return True


class CallableFilter(MessageFilter):
    """Adapts a plain ``(message, endpoint) -> bool`` function."""

    def __init__(self, func: FilterCallable):
        self.func = func

    def should_send(self, message: Message, endpoint: str) -> bool:
        return bool(self.func(message, endpoint))

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"CallableFilter({name})"


class FilterChain(MessageFilter):
    """A chain of filters that must all agree before a message is sent.

    Filters are evaluated in the order given and evaluation stops at the first
    filter that rejects the message. The chain is fixed once built, it is
    shared by every concurrent batch of a handler.
    """

    def __init__(self, filters: Optional[Iterable[FilterLike]] = None):
        """Initialize a new filter chain.

        Args:
            filters: Filters to evaluate in sequence. If None, the chain is
                empty and every message passes.
        """
        self.filters: Tuple[FilterLike, ...] = tuple(filters or ())

    def should_send(self, message: Message, endpoint: str) -> bool:
        for message_filter in self.filters:
            if not message_filter.should_send(message, endpoint):
                return False
        return True
