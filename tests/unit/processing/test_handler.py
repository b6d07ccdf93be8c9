import pytest
from unittest.mock import MagicMock
from stream_forwarder.config.destinations import HandlerConfig
from stream_forwarder.processing.handler import DynamoStreamHandler
from stream_forwarder.streams.base import Stream
from stream_forwarder.utils.exceptions import (
    BatchProcessingError,
    ConfigurationError,
    DeliveryError,
)

QUEUE_A = "https://sqs.eu-west-1.amazonaws.com/123456789012/a"
QUEUE_B = "https://sqs.eu-west-1.amazonaws.com/123456789012/b"


def make_event(*event_names):
    return {
        "Records": [
            {"eventID": str(i), "eventName": name, "dynamodb": {}}
            for i, name in enumerate(event_names)
        ]
    }


class TestDynamoStreamHandler:
    """Test cases for DynamoStreamHandler"""

    @pytest.fixture
    def mock_stream(self):
        return MagicMock(spec=Stream)

    @pytest.fixture
    def mock_logger(self):
        return MagicMock()

    @pytest.fixture
    def mock_context(self):
        return MagicMock()

    def test_single_endpoint_shorthand(self, mock_stream, mock_logger):
        handler = DynamoStreamHandler(
            mock_stream,
            sqs_endpoint=QUEUE_A,
            event_names=["insert"],
            logger=mock_logger,
        )

        assert handler.config.endpoints == (QUEUE_A,)
        assert handler.config.destinations[0].event_names == frozenset({"INSERT"})

    def test_logs_initialization_summary(self, mock_stream, mock_logger):
        DynamoStreamHandler(
            mock_stream,
            destinations=[QUEUE_A, {"endpoint": QUEUE_B, "eventNames": ["REMOVE"]}],
            logger=mock_logger,
        )

        mock_logger.info.assert_any_call(
            f"Creating dynamo-to-sqs: SQS Endpoint {QUEUE_A} "
            f"| Event Names: INSERT,MODIFY,REMOVE"
        )
        mock_logger.info.assert_any_call(
            f"Creating dynamo-to-sqs: SQS Endpoint {QUEUE_B} | Event Names: REMOVE"
        )

    def test_warns_about_destination_without_event_names(
        self, mock_stream, mock_logger
    ):
        DynamoStreamHandler(
            mock_stream,
            destinations=[{"endpoint": QUEUE_A, "eventNames": []}],
            logger=mock_logger,
        )

        logged = [c.args[0] for c in mock_logger.info.call_args_list]
        assert any("accepts no event names" in msg for msg in logged)

    def test_accepts_prebuilt_config(self, mock_stream, mock_logger):
        config = HandlerConfig.build(destinations=[QUEUE_A], logger=mock_logger)

        handler = DynamoStreamHandler(mock_stream, config=config)

        assert handler.config is config

    def test_config_and_destinations_are_exclusive(self, mock_stream, mock_logger):
        config = HandlerConfig.build(destinations=[QUEUE_A], logger=mock_logger)

        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(mock_stream, config=config, destinations=[QUEUE_B])

    def test_no_destination_fails(self, mock_stream):
        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(mock_stream)

    def test_zero_destinations_fail(self, mock_stream):
        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(mock_stream, destinations=[])

    def test_invalid_event_name_fails(self, mock_stream):
        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(
                mock_stream, sqs_endpoint=QUEUE_A, event_names=["UPSERT"]
            )

    def test_event_names_without_endpoint_fails(self, mock_stream):
        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(
                mock_stream, destinations=[QUEUE_A], event_names=["INSERT"]
            )

    def test_stream_required(self):
        with pytest.raises(ConfigurationError):
            DynamoStreamHandler(object(), sqs_endpoint=QUEUE_A)

    def test_success_returns_count(self, mock_stream, mock_logger, mock_context):
        """Test that a fully delivered batch returns the processed count."""
        handler = DynamoStreamHandler(
            mock_stream, sqs_endpoint=QUEUE_A, logger=mock_logger
        )

        result = handler(make_event("INSERT", "MODIFY", "REMOVE"), mock_context)

        assert result == "Successfully processed 3 records."
        assert mock_stream.publish.call_count == 3
        mock_context.fail.assert_not_called()

    def test_unrenderable_log_payload_does_not_fail_invocation(
        self, mock_stream, mock_logger, mock_context
    ):
        handler = DynamoStreamHandler(
            mock_stream,
            sqs_endpoint=QUEUE_A,
            log_payload_transformer=lambda raw: {("id",): raw["eventID"]},
            logger=mock_logger,
        )

        result = handler(make_event("INSERT"), mock_context)

        assert result == "Successfully processed 1 records."
        mock_stream.publish.assert_called_once()
        mock_context.fail.assert_not_called()

    def test_only_matching_destination_receives(self, mock_stream, mock_logger):
        handler = DynamoStreamHandler(
            mock_stream,
            destinations=[
                {"endpoint": QUEUE_A, "eventNames": ["INSERT"]},
                {"endpoint": QUEUE_B, "eventNames": ["REMOVE"]},
            ],
            logger=mock_logger,
        )

        handler.handle(make_event("INSERT"))

        mock_stream.publish.assert_called_once()
        assert mock_stream.publish.call_args[0][0] == QUEUE_A

    def test_delivery_failure_reported_to_runtime(
        self, mock_stream, mock_logger, mock_context
    ):
        """Test that a failed delivery fails the invocation and calls context.fail."""
        cause = DeliveryError("throttled", endpoint=QUEUE_A)
        mock_stream.publish.side_effect = cause
        handler = DynamoStreamHandler(
            mock_stream, sqs_endpoint=QUEUE_A, logger=mock_logger
        )

        with pytest.raises(BatchProcessingError) as exc_info:
            handler(make_event("INSERT", "INSERT"), mock_context)

        error = exc_info.value
        assert error.__cause__ is cause
        assert error.result.processed == 2
        assert error.result.failed == 2
        mock_context.fail.assert_called_once_with(error)
        logged = [c.args[0] for c in mock_logger.error.call_args_list]
        assert any(msg.startswith("Failed processing records") for msg in logged)

    def test_failure_without_fail_channel_still_raises(self, mock_stream, mock_logger):
        mock_stream.publish.side_effect = DeliveryError("down", endpoint=QUEUE_A)
        handler = DynamoStreamHandler(
            mock_stream, sqs_endpoint=QUEUE_A, logger=mock_logger
        )

        with pytest.raises(BatchProcessingError):
            handler(make_event("INSERT"), object())

    @pytest.mark.parametrize("event", [{}, {"Records": None}, "not an event"])
    def test_malformed_event(self, mock_stream, mock_logger, event):
        handler = DynamoStreamHandler(
            mock_stream, sqs_endpoint=QUEUE_A, logger=mock_logger
        )

        with pytest.raises(BatchProcessingError) as exc_info:
            handler(event, None)

        assert "Event has no Records list" in str(exc_info.value)
        mock_stream.publish.assert_not_called()

    def test_handler_reusable_across_batches(self, mock_stream, mock_logger):
        handler = DynamoStreamHandler(
            mock_stream, sqs_endpoint=QUEUE_A, logger=mock_logger
        )

        assert handler(make_event("INSERT"), None) == "Successfully processed 1 records."
        assert handler(make_event("INSERT", "REMOVE"), None) == (
            "Successfully processed 2 records."
        )
        assert mock_stream.publish.call_count == 3
