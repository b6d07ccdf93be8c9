from stream_forwarder.processing.models import BatchResult, ChangeRecord
from stream_forwarder.utils.exceptions import DeliveryError, SerializationError


class TestChangeRecord:
    """Test cases for ChangeRecord"""

    def test_from_event(self):
        raw = {
            "eventID": "c81e728d",
            "eventName": "modify",
            "dynamodb": {
                "Keys": {"id": {"N": "101"}},
                "NewImage": {"id": {"N": "101"}, "state": {"S": "booked"}},
                "OldImage": {"id": {"N": "101"}, "state": {"S": "open"}},
            },
        }

        record = ChangeRecord.from_event(raw)

        assert record.event_name == "MODIFY"
        assert record.raw is raw
        assert record.event_id == "c81e728d"
        assert record.describe() == "c81e728d (MODIFY)"

    def test_missing_fields(self):
        record = ChangeRecord.from_event({})

        assert record.event_name == ""
        assert record.describe() == "unknown (no eventName)"


class TestBatchResult:
    """Test cases for BatchResult"""

    def test_success(self):
        result = BatchResult(processed=4, delivered=3, skipped=1)

        assert result.succeeded
        assert result.error is None
        assert result.failed == 0
        assert result.message == "Successfully processed 4 records."

    def test_failure_keeps_every_error(self):
        first = SerializationError("bad record")
        second = DeliveryError("queue down", endpoint="https://queue/a")

        result = BatchResult(processed=2, errors=[first, second])

        assert not result.succeeded
        assert result.error is first
        assert result.failed == 2
        assert "2 failure(s) in 2 records" in result.message
