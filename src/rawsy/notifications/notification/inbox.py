"""Read side of the notification feed."""

from protean.utils.globals import current_domain

from rawsy.notifications.notification.notification import Notification
from rawsy.shared.auth import Actor
from rawsy.shared.exceptions import persistence_errors


class NotificationInbox:
    def list_for(self, actor: Actor, unread_only: bool = False) -> list[Notification]:
        """The actor's notifications, newest first."""
        with persistence_errors(Notification):
            return current_domain.repository_for(Notification).for_user(actor.user_id, unread_only)
