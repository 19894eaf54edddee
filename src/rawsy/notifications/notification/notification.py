"""Notification aggregate: an in-app record of an event addressed to one user.

Created only by the dispatcher and the wishlist fan-out. Read-state toggling is
owned by the client-facing profile service; this core never mutates a
notification after creating it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Dict, Identifier, String, Text

from rawsy.domain import rawsy


def utcnow() -> datetime:
    return datetime.now(UTC)


class NotificationType(Enum):
    ORDER_PLACED = "order_placed"
    ORDER_CONFIRMED = "order_confirmed"
    ORDER_REJECTED = "order_rejected"
    ORDER_CANCELLED = "order_cancelled"
    ORDER_IN_TRANSIT = "order_in_transit"
    ORDER_DELIVERED = "order_delivered"
    PAYMENT_COMPLETED = "payment_completed"
    QUOTE_REQUESTED = "quote_requested"
    QUOTE_COUNTERED = "quote_countered"
    QUOTE_BUYER_ACCEPTED = "quote_buyer_accepted"
    QUOTE_REJECTED = "quote_rejected"
    QUOTE_CANCELLED = "quote_cancelled"
    QUOTE_CONVERTED = "quote_converted"
    DISCOUNT_STARTED = "discount_started"
    BACK_IN_STOCK = "back_in_stock"
    PRICE_DROP = "price_drop"
    TICKET_CREATED = "ticket_created"
    TICKET_RESOLVED = "ticket_resolved"
    TICKET_REPLIED = "ticket_replied"
    MESSAGE = "message"


@rawsy.aggregate(limit=None)
class Notification:
    user_id: Identifier(required=True)
    type: String(required=True, choices=NotificationType)
    title: String(required=True, max_length=500)
    message: Text(required=True)
    data: Dict()
    read: Boolean(default=False)
    created_at: DateTime(default=utcnow)

    @classmethod
    def create(cls, user_id, notification_type, title, message, data=None):
        if isinstance(notification_type, Enum):
            notification_type = notification_type.value
        return cls(
            user_id=str(user_id),
            type=notification_type,
            title=title,
            message=message,
            data=data or {},
        )
