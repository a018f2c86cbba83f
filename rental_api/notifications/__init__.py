"""
Notification Channels Module.

Delivers subscriber notifications.
"""

from rental_api.notifications.base import BaseNotifier
from rental_api.notifications.smtp import LogNotifier, SmtpNotifier, get_notifier

__all__ = [
    "BaseNotifier",
    "SmtpNotifier",
    "LogNotifier",
    "get_notifier",
]
