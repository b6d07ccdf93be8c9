from abc import ABC, abstractmethod


class Stream(ABC):
    """
    Base abstract class for all stream implementations.

    A stream publishes already serialized message bodies to a destination named
    by its endpoint (e.g. an AWS SQS queue URL). Implementations are shared by
    every concurrent publish of a batch, so ``publish`` must be thread-safe.
    """

    @abstractmethod
    def publish(self, endpoint: str, body: str) -> None:
        """
        Publish one message body to one destination.

        Args:
            endpoint (str): The destination identifier.
            body (str): The serialized message body.

        Raises:
            DeliveryError: If the destination rejects the message or cannot
                be reached.
        """
        pass
