"""Wishlist templates — sent to every user watching a product."""

from rawsy.notifications.notification.helpers import format_amount
from rawsy.notifications.notification.notification import NotificationType


class PriceDropTemplate:
    notification_type = NotificationType.PRICE_DROP.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "A product")
        old = format_amount(context.get("old_price"))
        new = format_amount(context.get("new_price"))
        return {
            "title": f"Price drop: {name}",
            "body": f"{name} price dropped from {old} to {new}",
        }


class BackInStockTemplate:
    notification_type = NotificationType.BACK_IN_STOCK.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "A product")
        return {
            "title": f"Back in stock: {name}",
            "body": f"{name} is back in stock",
        }


class DiscountStartedTemplate:
    notification_type = NotificationType.DISCOUNT_STARTED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "A product")
        percentage = format_amount(context.get("percentage"))
        return {
            "title": f"Discount: {name}",
            "body": f"{name} is now {percentage}% off",
        }
