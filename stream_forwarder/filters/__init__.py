"""Filter module deciding which change records reach which destination.

Two independent checks run for every (record, destination) pair:
- EventNameFilter: is the record's change kind accepted by the destination
- MessageFilter: does the optional user predicate accept the serialized body

Key components:
- EventNameFilter: Normalization and validation of accepted event names
- MessageFilter: Abstract base class for all message filters
- FilterChain: All-must-pass composition of several filters
- FilterFactory: Builds a MessageFilter from configuration values
"""

from stream_forwarder.filters.base import (
    AcceptAllFilter,
    CallableFilter,
    FilterChain,
    FilterLike,
    Message,
    MessageFilter,
)
from stream_forwarder.filters.event_names import DEFAULT_EVENT_NAMES, EventNameFilter
from stream_forwarder.filters.factory import FilterFactory

__all__ = [
    "AcceptAllFilter",
    "CallableFilter",
    "DEFAULT_EVENT_NAMES",
    "EventNameFilter",
    "FilterChain",
    "FilterFactory",
    "FilterLike",
    "Message",
    "MessageFilter",
]
