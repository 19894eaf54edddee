"""Notification dispatcher: persists an in-app notification and pushes it.

The notification record is the durable part; the push is best-effort and only
attempted when the recipient has registered device tokens. Persistence and
push failures are logged independently and never reach the caller.
"""

import structlog
from protean.utils.globals import current_domain

from rawsy.identity.user import User
from rawsy.notifications.channel.push_port import PushTransport
from rawsy.notifications.notification.helpers import stringify_data
from rawsy.notifications.notification.notification import Notification

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Delivers one notification to one user."""

    def __init__(self, push: PushTransport) -> None:
        self.push = push

    def dispatch(self, user: User | None, notification_type, title: str, body: str, data=None) -> Notification | None:
        if user is None:
            return None

        payload = stringify_data(data)
        notification = None

        try:
            notification = Notification.create(
                user_id=user.id,
                notification_type=notification_type,
                title=title,
                message=body,
                data=payload,
            )
            current_domain.repository_for(Notification).add(notification)
        except Exception as exc:
            notification = None
            logger.error(
                "Failed to persist notification",
                user_id=user.id,
                notification_type=str(notification_type),
                error=str(exc),
            )

        if user.device_tokens:
            try:
                self.push.send_multicast(list(user.device_tokens), title, body, payload)
            except Exception as exc:
                logger.error(
                    "Push delivery failed",
                    user_id=user.id,
                    notification_type=str(notification_type),
                    error=str(exc),
                )

        return notification
