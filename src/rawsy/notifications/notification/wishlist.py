"""Wishlist fan-out: notifies every user watching a product about a change.

Each watcher gets a persisted notification whether or not they have device
tokens. Push goes out as a single multicast to the union of all watchers'
tokens. A failure for one watcher never stops the others.
"""

import structlog
from protean.utils.globals import current_domain

from rawsy.catalogue.product.events import ProductBackInStock, ProductDiscountStarted, ProductPriceDropped
from rawsy.identity.user import User
from rawsy.notifications.channel.push_port import PushTransport
from rawsy.notifications.notification.helpers import stringify_data
from rawsy.notifications.notification.notification import Notification, NotificationType
from rawsy.notifications.templates import get_template

logger = structlog.get_logger(__name__)

ProductChange = ProductPriceDropped | ProductBackInStock | ProductDiscountStarted


def _type_for(change: ProductChange) -> NotificationType:
    if isinstance(change, ProductPriceDropped):
        return NotificationType.PRICE_DROP
    if isinstance(change, ProductBackInStock):
        return NotificationType.BACK_IN_STOCK
    if isinstance(change, ProductDiscountStarted):
        return NotificationType.DISCOUNT_STARTED
    raise ValueError(f"No wishlist notification for {type(change).__name__}")


def _context_for(product_name: str, change: ProductChange) -> dict:
    context = {"product_name": product_name}
    if isinstance(change, ProductPriceDropped):
        context.update(old_price=change.old_price, new_price=change.new_price)
    elif isinstance(change, ProductBackInStock):
        context.update(stock=change.stock)
    elif isinstance(change, ProductDiscountStarted):
        context.update(percentage=change.percentage, final_price=change.final_price)
    return context


def _union_tokens(watchers: list[User]) -> list[str]:
    seen = set()
    tokens = []
    for watcher in watchers:
        for token in watcher.device_tokens:
            if token not in seen:
                seen.add(token)
                tokens.append(token)
    return tokens


class WishlistFanout:
    def __init__(self, push: PushTransport) -> None:
        self.push = push

    def notify_watchers(self, product, change: ProductChange) -> int:
        """Notify watchers of ``product``; returns the number of notifications persisted."""
        product_id = str(product.id)
        watchers = current_domain.repository_for(User).watching(product_id)
        if not watchers:
            return 0

        notification_type = _type_for(change)
        context = _context_for(product.name or "A product", change)
        content = get_template(notification_type.value).render(context)
        title, body = content["title"], content["body"]
        data = stringify_data({"product_id": product_id, "type": notification_type.value, **context})
        data.pop("product_name", None)

        notifications = current_domain.repository_for(Notification)
        persisted = 0
        for watcher in watchers:
            try:
                notifications.add(
                    Notification.create(
                        user_id=watcher.id,
                        notification_type=notification_type,
                        title=title,
                        message=body,
                        data=data,
                    )
                )
                persisted += 1
            except Exception as exc:
                logger.error(
                    "Failed to persist wishlist notification",
                    user_id=watcher.id,
                    product_id=product_id,
                    error=str(exc),
                )

        tokens = _union_tokens(watchers)
        if tokens:
            try:
                self.push.send_multicast(tokens, title, body, data)
            except Exception as exc:
                logger.error(
                    "Wishlist push failed",
                    product_id=product_id,
                    token_count=len(tokens),
                    error=str(exc),
                )

        logger.info(
            "Wishlist watchers notified",
            product_id=product_id,
            notification_type=notification_type.value,
            watchers=len(watchers),
            persisted=persisted,
            tokens=len(tokens),
        )
        return persisted
