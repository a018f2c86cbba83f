"""
Base Notifier Module.

Defines the interface for subscriber notification channels.
"""

from abc import ABC, abstractmethod


class BaseNotifier(ABC):
    """
    Base class for notification channels.

    Each delivery method (SMTP, logs, ...) implements this interface.
    """

    # Channel identifier
    service_name: str = ""

    @abstractmethod
    async def send(self, email: str, message: str) -> None:
        """
        Deliver a message to a subscriber.

        Args:
            email: Subscriber email
            message: Message text

        Raises:
            Exception: Any delivery failure
        """
        pass
