"""Background jobs."""

from rental_api.jobs.subscription_notify import build_message, notify_subscriber

__all__ = [
    "build_message",
    "notify_subscriber",
]
