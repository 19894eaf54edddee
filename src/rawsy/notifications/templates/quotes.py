"""Quote templates — sent to the counterparty of a quote transition."""

from rawsy.notifications.notification.helpers import format_amount
from rawsy.notifications.notification.notification import NotificationType


class QuoteRequestedTemplate:
    notification_type = NotificationType.QUOTE_REQUESTED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "your product")
        quantity = format_amount(context.get("quantity"))
        unit = context.get("unit") or "units"
        return {
            "title": "New quote request",
            "body": f"A buyer requested a quote for {quantity} {unit} of {name}",
        }


class QuoteCounteredTemplate:
    notification_type = NotificationType.QUOTE_COUNTERED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "a product")
        price = format_amount(context.get("counter_price"))
        return {
            "title": "Quote countered",
            "body": f"The supplier countered your quote for {name} at {price} per unit",
        }


class QuoteBuyerAcceptedTemplate:
    notification_type = NotificationType.QUOTE_BUYER_ACCEPTED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "a product")
        price = format_amount(context.get("agreed_price"))
        return {
            "title": "Quote accepted",
            "body": f"The buyer accepted your offer for {name} at {price} per unit",
        }


class QuoteRejectedTemplate:
    notification_type = NotificationType.QUOTE_REJECTED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "a product")
        return {
            "title": "Quote rejected",
            "body": f"The quote for {name} was rejected",
        }


class QuoteCancelledTemplate:
    notification_type = NotificationType.QUOTE_CANCELLED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "a product")
        return {
            "title": "Quote cancelled",
            "body": f"The quote for {name} was cancelled",
        }


class QuoteConvertedTemplate:
    notification_type = NotificationType.QUOTE_CONVERTED.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("product_name", "a product")
        total = format_amount(context.get("total"))
        return {
            "title": "Quote converted to order",
            "body": f"The quote for {name} was converted to an order totalling {total}",
        }
