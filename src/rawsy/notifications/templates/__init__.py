"""Template registry — maps NotificationType to template classes.

Each template renders a deterministic title and body from event context data.
"""

from rawsy.notifications.notification.notification import NotificationType
from rawsy.notifications.templates.quotes import (
    QuoteBuyerAcceptedTemplate,
    QuoteCancelledTemplate,
    QuoteConvertedTemplate,
    QuoteCounteredTemplate,
    QuoteRejectedTemplate,
    QuoteRequestedTemplate,
)
from rawsy.notifications.templates.wishlist import (
    BackInStockTemplate,
    DiscountStartedTemplate,
    PriceDropTemplate,
)

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.PRICE_DROP.value: PriceDropTemplate,
    NotificationType.BACK_IN_STOCK.value: BackInStockTemplate,
    NotificationType.DISCOUNT_STARTED.value: DiscountStartedTemplate,
    NotificationType.QUOTE_REQUESTED.value: QuoteRequestedTemplate,
    NotificationType.QUOTE_COUNTERED.value: QuoteCounteredTemplate,
    NotificationType.QUOTE_BUYER_ACCEPTED.value: QuoteBuyerAcceptedTemplate,
    NotificationType.QUOTE_REJECTED.value: QuoteRejectedTemplate,
    NotificationType.QUOTE_CANCELLED.value: QuoteCancelledTemplate,
    NotificationType.QUOTE_CONVERTED.value: QuoteConvertedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
