from typing import List, Sequence, Tuple

from stream_forwarder.config.destinations import DestinationConfig
from stream_forwarder.processing.models import ChangeRecord


class DestinationRouter:
    """
    Decides which destinations receive a record.

    A destination admits a record when the record's canonical event name is
    in its accepted set. Destinations are evaluated independently and the
    configured order is kept in the result.
    """

    def __init__(self, destinations: Sequence[DestinationConfig]):
        self.destinations: Tuple[DestinationConfig, ...] = tuple(destinations)

    def route(self, record: ChangeRecord) -> List[DestinationConfig]:
        return [
            destination
            for destination in self.destinations
            if destination.accepts(record.event_name)
        ]
