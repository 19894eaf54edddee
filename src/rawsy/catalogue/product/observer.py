"""Product mutation observer: turns a product update into change events.

It compares the state captured immediately before an update with the state
after it and raises on the product:

- ``ProductPriceDropped`` when both prices are numbers and the new one is lower;
- ``ProductBackInStock`` when stock was 0 or unknown and is now positive.

Both may fire for one update. The events dispatch only once the product write
commits. Errors here are logged and never reach the caller of the update.
"""

from collections.abc import Mapping
from numbers import Number

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger(__name__)


class ProductState(BaseModel):
    """Price and stock of a product at one instant."""

    model_config = ConfigDict(frozen=True)

    product_id: str | None = None
    name: str | None = None
    price: float | None = None
    stock: int | None = None

    @property
    def id(self) -> str | None:
        return self.product_id


def _terms(value) -> dict:
    """Raw price and stock terms; mappings are read as-is, never coerced."""
    if value is None:
        return {}
    if not isinstance(value, ProductState | Mapping) and hasattr(value, "state"):
        value = value.state()
    if isinstance(value, ProductState):
        return value.model_dump()

    terms = dict(value)
    if "product_id" not in terms and "id" in terms:
        terms["product_id"] = terms["id"]
    return terms


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def detect_changes(before, after) -> list:
    """Compare two product states and return the change events they imply."""
    from rawsy.catalogue.product.events import ProductBackInStock, ProductPriceDropped

    before = _terms(before)
    after = _terms(after)

    product_id = after.get("product_id") or before.get("product_id")
    name = after.get("name") or before.get("name")
    old_price, new_price = before.get("price"), after.get("price")
    old_stock, new_stock = before.get("stock"), after.get("stock")
    changes = []

    if _is_number(old_price) and _is_number(new_price) and new_price < old_price:
        changes.append(
            ProductPriceDropped(
                product_id=product_id,
                product_name=name,
                old_price=old_price,
                new_price=new_price,
            )
        )

    stock_was_empty = old_stock is None or (_is_number(old_stock) and old_stock == 0)
    if stock_was_empty and _is_number(new_stock) and new_stock > 0:
        changes.append(ProductBackInStock(product_id=product_id, product_name=name, stock=new_stock))

    return changes


class ProductMutationObserver:
    """Raises product change events on the aggregate before it is persisted."""

    def on_product_updated(self, before, product) -> list:
        """Detect change events and raise them on ``product``; never raises."""
        try:
            changes = detect_changes(before, product)
        except Exception as exc:
            logger.warning("Product change detection failed (non-fatal)", error=str(exc))
            return []

        if not changes:
            return []

        try:
            for change in changes:
                product.raise_(change)
        except Exception as exc:
            logger.warning(
                "Wishlist notification failed (non-fatal)",
                product_id=changes[0].product_id,
                error=str(exc),
            )
            return []

        logger.info(
            "Product changes detected",
            product_id=changes[0].product_id,
            changes=[type(change).__name__ for change in changes],
        )
        return changes
