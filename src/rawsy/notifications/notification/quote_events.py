"""Inbound cross-domain event handler: Notifications reacts to Negotiation events.

Every quote event is addressed to the counterparty of the actor: the supplier
when the buyer acted and the other way round. When an admin acted on behalf of
the negotiation, both parties are told.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from rawsy.domain import rawsy
from rawsy.identity.user import User
from rawsy.negotiation.quote.events import (
    QuoteBuyerAccepted,
    QuoteCancelled,
    QuoteConverted,
    QuoteCountered,
    QuoteRejected,
    QuoteRequested,
)
from rawsy.notifications.channel import get_push_transport
from rawsy.notifications.notification.dispatch import NotificationDispatcher
from rawsy.notifications.notification.notification import Notification, NotificationType
from rawsy.notifications.templates import get_template

logger = structlog.get_logger(__name__)

QuoteEvent = QuoteRequested | QuoteCountered | QuoteBuyerAccepted | QuoteRejected | QuoteCancelled | QuoteConverted

_EVENT_TYPES: dict[type, NotificationType] = {
    QuoteRequested: NotificationType.QUOTE_REQUESTED,
    QuoteCountered: NotificationType.QUOTE_COUNTERED,
    QuoteBuyerAccepted: NotificationType.QUOTE_BUYER_ACCEPTED,
    QuoteRejected: NotificationType.QUOTE_REJECTED,
    QuoteCancelled: NotificationType.QUOTE_CANCELLED,
    QuoteConverted: NotificationType.QUOTE_CONVERTED,
}

# Fields copied from the event into the notification payload when present
_PAYLOAD_FIELDS = ("quote_id", "product_id", "status", "counter_price", "agreed_price", "total")


def counterparties(event: QuoteEvent) -> list[str]:
    """User ids to notify about ``event``."""
    if event.actor_id == event.buyer_id:
        return [event.supplier_id]
    if event.actor_id == event.supplier_id:
        return [event.buyer_id]
    return [event.buyer_id, event.supplier_id]


def notify_counterparties(event: QuoteEvent) -> None:
    notification_type = _EVENT_TYPES.get(type(event))
    if notification_type is None:
        logger.warning("No notification mapped for quote event", event_type=type(event).__name__)
        return

    content = get_template(notification_type.value).render(event.payload)
    data = {"type": notification_type.value}
    for field in _PAYLOAD_FIELDS:
        value = getattr(event, field, None)
        if value is not None:
            data[field] = value

    dispatcher = NotificationDispatcher(get_push_transport())
    users = current_domain.repository_for(User)
    for user_id in counterparties(event):
        try:
            user = users.get(user_id)
        except ObjectNotFoundError:
            logger.warning(
                "Quote notification recipient not found",
                quote_id=event.quote_id,
                user_id=user_id,
            )
            continue

        dispatcher.dispatch(user, notification_type.value, content["title"], content["body"], data)


@rawsy.event_handler(part_of=Notification, stream_category="rawsy::quote")
class QuoteEventsHandler:
    """Reacts to Negotiation quote events to notify the other party."""

    @handle(QuoteRequested)
    def on_quote_requested(self, event: QuoteRequested) -> None:
        self._notify(event)

    @handle(QuoteCountered)
    def on_quote_countered(self, event: QuoteCountered) -> None:
        self._notify(event)

    @handle(QuoteBuyerAccepted)
    def on_quote_buyer_accepted(self, event: QuoteBuyerAccepted) -> None:
        self._notify(event)

    @handle(QuoteRejected)
    def on_quote_rejected(self, event: QuoteRejected) -> None:
        self._notify(event)

    @handle(QuoteCancelled)
    def on_quote_cancelled(self, event: QuoteCancelled) -> None:
        self._notify(event)

    @handle(QuoteConverted)
    def on_quote_converted(self, event: QuoteConverted) -> None:
        self._notify(event)

    def _notify(self, event: QuoteEvent) -> None:
        try:
            notify_counterparties(event)
        except Exception as exc:
            logger.error(
                "Quote notification failed",
                quote_id=event.quote_id,
                event_type=type(event).__name__,
                error=str(exc),
            )
