"""Application services of every bounded context, grouped for the API layer."""

from rawsy.catalogue.product.management import CatalogueService
from rawsy.identity.management import IdentityService
from rawsy.negotiation.quote.negotiation import NegotiationService
from rawsy.notifications.notification.inbox import NotificationInbox


class Marketplace:
    """Stateless entry points; persistence and event dispatch belong to the active domain."""

    def __init__(self) -> None:
        self.identity = IdentityService()
        self.catalogue = CatalogueService()
        self.negotiation = NegotiationService()
        self.inbox = NotificationInbox()
