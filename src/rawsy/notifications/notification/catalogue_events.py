"""Inbound cross-domain event handler: Notifications reacts to Catalogue events.

Price drops, restocks and new discounts are fanned out to every user who has
the product on their wishlist. Failures are logged and never propagate to the
product write that raised the event.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from rawsy.catalogue.product.events import ProductBackInStock, ProductDiscountStarted, ProductPriceDropped
from rawsy.catalogue.product.product import Product
from rawsy.domain import rawsy
from rawsy.notifications.channel import get_push_transport
from rawsy.notifications.notification.notification import Notification
from rawsy.notifications.notification.wishlist import ProductChange, WishlistFanout

logger = structlog.get_logger(__name__)


@rawsy.event_handler(part_of=Notification, stream_category="rawsy::product")
class CatalogueEventsHandler:
    """Reacts to Catalogue product change events to notify wishlist watchers."""

    @handle(ProductPriceDropped)
    def on_price_dropped(self, event: ProductPriceDropped) -> None:
        self._fan_out(event)

    @handle(ProductBackInStock)
    def on_back_in_stock(self, event: ProductBackInStock) -> None:
        self._fan_out(event)

    @handle(ProductDiscountStarted)
    def on_discount_started(self, event: ProductDiscountStarted) -> None:
        self._fan_out(event)

    def _fan_out(self, event: ProductChange) -> None:
        event_type = type(event).__name__
        try:
            product = current_domain.repository_for(Product).get(event.product_id)
        except ObjectNotFoundError:
            logger.info(
                "Product no longer exists, skipping wishlist fan-out",
                product_id=event.product_id,
                event_type=event_type,
            )
            return

        try:
            WishlistFanout(get_push_transport()).notify_watchers(product, event)
        except Exception as exc:
            logger.error(
                "Wishlist fan-out failed",
                product_id=event.product_id,
                event_type=event_type,
                error=str(exc),
            )
