from typing import Any, FrozenSet, Iterable, Optional

from stream_forwarder.utils.exceptions import ConfigurationError


INSERT = "INSERT"
MODIFY = "MODIFY"
REMOVE = "REMOVE"

DEFAULT_EVENT_NAMES: FrozenSet[str] = frozenset({INSERT, REMOVE, MODIFY})


class EventNameFilter:
    """
    Normalizes and checks DynamoDB stream event names.

    Destinations declare which change kinds they accept. The declaration is
    validated once, at construction time, so an unknown kind never reaches
    the delivery path.
    """

    SUPPORTED: FrozenSet[str] = DEFAULT_EVENT_NAMES

    @classmethod
    def normalize(cls, event_names: Optional[Iterable[str]]) -> FrozenSet[str]:
        """
        Build the canonical set of accepted event names.

        Args:
            event_names: Requested event names, any case. None selects every
                supported event name.

        Returns:
            FrozenSet[str]: Uppercased event names.

        Raises:
            ConfigurationError: If an entry is not a string or is not one of
                INSERT, REMOVE or MODIFY.
        """
        if event_names is None:
            return cls.SUPPORTED

        if isinstance(event_names, str):
            raise ConfigurationError(
                f"Event names must be a list of strings, got {event_names!r}"
            )

        normalized = set()
        invalid = []
        for name in event_names:
            if not isinstance(name, str):
                invalid.append(name)
                continue
            canonical = name.strip().upper()
            if canonical in cls.SUPPORTED:
                normalized.add(canonical)
            else:
                invalid.append(name)

        if invalid:
            raise ConfigurationError(
                f"Event names must be in {sorted(cls.SUPPORTED)}, got invalid: {invalid}"
            )

        return frozenset(normalized)

    @staticmethod
    def canonical(event_name: Any) -> str:
        """Uppercase an incoming record's event name, '' when it is missing."""
        if not isinstance(event_name, str):
            return ""
        return event_name.strip().upper()

    @classmethod
    def accepts(cls, accepted: FrozenSet[str], event_name: Any) -> bool:
        return cls.canonical(event_name) in accepted
