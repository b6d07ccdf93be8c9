from typing import Any, Iterable

from stream_forwarder.filters.base import (
    AcceptAllFilter,
    CallableFilter,
    FilterChain,
    FilterLike,
    MessageFilter,
)
from stream_forwarder.utils.exceptions import ConfigurationError


class FilterFactory:
    """Factory for creating message filter components.

    Callers may configure a filter as a MessageFilter instance, any object with a
    ``should_send`` method, a plain function or a list of those. The factory turns
    every accepted form into a single MessageFilter and rejects anything else at
    construction time.
    """

    @staticmethod
    def create_filter_chain(filters: Iterable[FilterLike]) -> FilterChain:
        """Create a new filter chain with the provided filters.

        Args:
            filters: Filters to include in the chain, evaluated in order.

        Returns:
            A configured FilterChain containing the provided filters.
        """
        return FilterChain(filters)

    @classmethod
    def create(cls, message_filter: Any = None) -> MessageFilter:
        """Create a MessageFilter from a configuration value.

        Args:
            message_filter: None, a filter object, a callable or a list of those.

        Returns:
            MessageFilter: The filter to evaluate for every delivery.

        Raises:
            ConfigurationError: If the value cannot be used as a filter.
        """
        if message_filter is None:
            return AcceptAllFilter()

        if isinstance(message_filter, MessageFilter):
            return message_filter

        if isinstance(message_filter, (list, tuple)):
            return cls.create_filter_chain([cls.create(f) for f in message_filter])

        if callable(getattr(message_filter, "should_send", None)):
            return cls.create_filter_chain([message_filter])

        if callable(message_filter):
            return CallableFilter(message_filter)

        raise ConfigurationError(
            f"Message filter must be a function, got {type(message_filter).__name__}"
        )
