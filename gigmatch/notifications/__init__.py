"""Notification payloads, publishing and inbox storage."""
from .dispatcher import notify, notify_matching_freelancers
from .publisher import FanoutPublisher, Publisher, StorePublisher, WebhookPublisher
from .store import NotificationStore
from .templates import NotificationPayload, NotificationType

__all__ = [
    "NotificationPayload",
    "NotificationType",
    "NotificationStore",
    "Publisher",
    "WebhookPublisher",
    "StorePublisher",
    "FanoutPublisher",
    "notify",
    "notify_matching_freelancers",
]
