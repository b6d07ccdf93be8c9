from typing import Any, Optional
import os
from threading import Lock
import boto3
from boto3.session import Session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from stream_forwarder.streams.base import Stream
from stream_forwarder.utils.logger import logger
from stream_forwarder.utils.exceptions import DeliveryError


class SQS(Stream):
    """
    AWS SQS implementation of the Stream interface.

    Every publish is a single ``SendMessage`` call against the queue URL given as
    the endpoint, so one SQS instance serves any number of destinations. The
    boto3 client is created lazily and shared by all worker threads; boto3
    clients are safe to use across threads.

    Message size is left to SQS, which checks each body against the target
    queue's own MaximumMessageSize.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        connect_timeout: float = 3,
        read_timeout: float = 5,
        max_attempts: int = 3,
        client: Any = None,
    ):
        """
        Initialize the SQS stream.

        All connection settings are optional: inside AWS Lambda the region and
        credentials come from the execution environment.

        Args:
            region: The AWS region. Defaults to AWS_REGION environment variable.
            endpoint_url: The AWS endpoint URL, e.g. a localstack URL. Defaults to
                AWS_ENDPOINT_URL environment variable.
            aws_access_key_id: The AWS access key ID. Defaults to AWS_ACCESS_KEY_ID
                environment variable.
            aws_secret_access_key: The AWS secret access key. Defaults to
                AWS_SECRET_ACCESS_KEY environment variable.
            connect_timeout: Socket connect timeout in seconds.
            read_timeout: Socket read timeout in seconds.
            max_attempts: botocore retry budget per request.
            client: A preconfigured boto3 SQS client to use instead.
        """
        self.region = region or os.getenv("AWS_REGION")
        self.endpoint_url = endpoint_url or os.getenv("AWS_ENDPOINT_URL")
        self.aws_access_key_id = aws_access_key_id or os.getenv("AWS_ACCESS_KEY_ID")
        self.aws_secret_access_key = aws_secret_access_key or os.getenv(
            "AWS_SECRET_ACCESS_KEY"
        )
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_attempts = max_attempts

        self._client = client
        self._client_lock = Lock()
        self._session: Optional[Session] = None

    def _create_session(self) -> Session:
        """
        Create a boto3 session with the configured credentials.

        Returns:
            Session: The configured boto3 session.
        """
        if self._session is None:
            self._session = boto3.session.Session(
                region_name=self.region,
                aws_access_key_id=self.aws_access_key_id,
                aws_secret_access_key=self.aws_secret_access_key,
            )
        return self._session

    def _get_client(self) -> Any:
        """
        Get or create the boto3 SQS client using connection pooling.

        Returns:
            Any: The configured boto3 SQS client.
        """
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    session = self._create_session()

                    config = Config(
                        connect_timeout=self.connect_timeout,
                        read_timeout=self.read_timeout,
                        retries={"max_attempts": self.max_attempts},
                        tcp_keepalive=True,
                    )

                    self._client = session.client(
                        "sqs", endpoint_url=self.endpoint_url, config=config
                    )

                    logger.debug(
                        f"Setup SQS client: {self.endpoint_url} - {self.region}"
                    )

        return self._client

    def publish(self, endpoint: str, body: str) -> None:
        """
        Send one message body to the queue at ``endpoint``.

        Args:
            endpoint: The SQS queue URL.
            body: The serialized message body.

        Raises:
            DeliveryError: If SendMessage fails, including a body larger than
                the queue accepts.
        """
        client = self._get_client()

        try:
            response = client.send_message(QueueUrl=endpoint, MessageBody=body)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"SQS send_message to {endpoint} failed: {str(e)}")
            raise DeliveryError(
                f"Failed to send message to SQS queue {endpoint}: {str(e)}",
                endpoint=endpoint,
            ) from e

        logger.debug(
            f"Sent message {response.get('MessageId', 'unknown')} to {endpoint}"
        )
