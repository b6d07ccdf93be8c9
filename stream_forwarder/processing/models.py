from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from stream_forwarder.filters.event_names import EventNameFilter


@dataclass(frozen=True)
class ChangeRecord:
    """
    One entry of a DynamoDB stream batch.

    ``raw`` is the record exactly as received; ``event_name`` is its canonical
    (uppercased) change kind.
    """

    event_name: str
    raw: Mapping[str, Any]

    @classmethod
    def from_event(cls, record: Mapping[str, Any]) -> "ChangeRecord":
        return cls(
            event_name=EventNameFilter.canonical(record.get("eventName")),
            raw=record,
        )

    @property
    def event_id(self) -> Optional[str]:
        return self.raw.get("eventID")

    def describe(self) -> str:
        """Short identification used in log lines."""
        return f"{self.event_id or 'unknown'} ({self.event_name or 'no eventName'})"


@dataclass
class BatchResult:
    """
    Outcome of forwarding one batch.

    ``errors`` holds every unrecovered failure (serialization and delivery) in
    the order they were collected. The batch succeeded when it is empty.
    """

    processed: int
    delivered: int = 0
    skipped: int = 0
    filtered: int = 0
    errors: List[Exception] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def error(self) -> Optional[Exception]:
        """The first failure, or None for a successful batch."""
        return self.errors[0] if self.errors else None

    @property
    def message(self) -> str:
        if self.succeeded:
            return f"Successfully processed {self.processed} records."
        return (
            f"Failed processing records: {self.failed} failure(s) "
            f"in {self.processed} records."
        )
