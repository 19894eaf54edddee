"""Repository for the Notification aggregate."""

from rawsy.domain import rawsy
from rawsy.notifications.notification.notification import Notification


@rawsy.repository(part_of=Notification)
class NotificationRepository:
    def for_user(self, user_id: str, unread_only: bool = False) -> list[Notification]:
        """A user's notifications, newest first."""
        query = self.query.filter(user_id=user_id)
        if unread_only:
            query = query.filter(read=False)
        return query.order_by("-created_at").all().items
