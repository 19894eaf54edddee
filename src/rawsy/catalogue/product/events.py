"""Domain events for the Product aggregate.

Raised by the product mutation observer (price drop, back in stock) and by the
Product aggregate (discount started). Consumed by the Notifications context to
fan out wishlist notifications.
"""

from protean.fields import Float, Identifier, String

from rawsy.domain import rawsy


@rawsy.event(part_of="Product")
class ProductPriceDropped:
    """The unit price of a product went down."""

    product_id = Identifier()
    product_name = String(max_length=255)
    old_price = Float(required=True)
    new_price = Float(required=True)


@rawsy.event(part_of="Product")
class ProductBackInStock:
    """A product that was out of stock (or had no stock figure) now has stock."""

    product_id = Identifier()
    product_name = String(max_length=255)
    stock = Float(required=True)


@rawsy.event(part_of="Product")
class ProductDiscountStarted:
    """A supplier activated a percentage discount on a product."""

    product_id = Identifier()
    product_name = String(max_length=255)
    percentage = Float(required=True)
    final_price = Float(required=True)
