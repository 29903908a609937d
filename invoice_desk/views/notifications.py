"""
User notifications.
Collects the messages shown to the user after loads and saves, and logs them.
"""

import logging
from enum import Enum

from invoice_desk.schemas.base import BaseSchema


logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseSchema):
    """One message shown to the user."""

    title: str
    description: str
    level: NotificationLevel


class Notifier:
    """Records notifications in the order they were raised."""

    def __init__(self):
        self.history: list[Notification] = []

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None

    def success(self, description: str) -> Notification:
        return self._push("Success", description, NotificationLevel.SUCCESS)

    def error(self, description: str, title: str = "Error") -> Notification:
        return self._push(title, description, NotificationLevel.ERROR)

    def validation_error(self, description: str) -> Notification:
        return self.error(description, title="Validation Error")

    def _push(self, title: str, description: str, level: NotificationLevel) -> Notification:
        notification = Notification(title=title, description=description, level=level)
        self.history.append(notification)
        logger.debug(f"{level.value}: {title} - {description}")
        return notification
