from stream_forwarder.config.destinations import DestinationConfig
from stream_forwarder.processing.models import ChangeRecord
from stream_forwarder.processing.router import DestinationRouter


def make_record(event_name):
    return ChangeRecord.from_event({"eventID": "1", "eventName": event_name})


class TestDestinationRouter:
    """Test cases for DestinationRouter"""

    def test_default_destination_receives_modify(self):
        destination = DestinationConfig(endpoint="https://queue/a")
        router = DestinationRouter([destination])

        assert router.route(make_record("MODIFY")) == [destination]

    def test_lowercase_event_name_routed(self):
        destination = DestinationConfig(endpoint="https://queue/a")
        router = DestinationRouter([destination])

        assert router.route(make_record("modify")) == [destination]

    def test_routes_per_destination(self):
        """Test that each destination decides independently."""
        inserts = DestinationConfig(endpoint="https://queue/a", event_names=["INSERT"])
        removes = DestinationConfig(endpoint="https://queue/b", event_names=["REMOVE"])
        router = DestinationRouter([inserts, removes])

        assert router.route(make_record("INSERT")) == [inserts]
        assert router.route(make_record("REMOVE")) == [removes]
        assert router.route(make_record("MODIFY")) == []

    def test_record_can_reach_no_destination(self):
        destination = DestinationConfig(
            endpoint="https://queue/a", event_names=["INSERT"]
        )
        router = DestinationRouter([destination])

        assert router.route(make_record("REMOVE")) == []

    def test_record_without_event_name_routed_nowhere(self):
        router = DestinationRouter([DestinationConfig(endpoint="https://queue/a")])

        assert router.route(make_record(None)) == []

    def test_keeps_configured_order(self):
        destinations = [
            DestinationConfig(endpoint=f"https://queue/{name}") for name in "cab"
        ]
        router = DestinationRouter(destinations)

        assert router.route(make_record("INSERT")) == destinations
