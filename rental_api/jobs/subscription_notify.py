"""
Subscription Notification Module.

Fire-and-forget notification sent after a subscription is created.
"""

from loguru import logger

from rental_api.notifications import BaseNotifier

notify_log = logger.bind(module="Notify")


def build_message(house_id: int) -> str:
    """Build the notification text for a house."""
    return f"New flats are available in house {house_id}. Check them out now!"


async def notify_subscriber(notifier: BaseNotifier, house_id: int, email: str) -> bool:
    """
    Notify a new subscriber about a house.

    Runs detached from the request; delivery failures are logged and never
    raised.

    Args:
        notifier: Notification channel
        house_id: House ID
        email: Subscriber email

    Returns:
        True if sent successfully
    """
    try:
        await notifier.send(email, build_message(house_id))
        return True
    except Exception as e:
        notify_log.error(f"Failed to send email to {email} for house {house_id}: {e!r}")
        return False
