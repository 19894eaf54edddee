"""Repository for the Quote aggregate."""

from rawsy.domain import rawsy
from rawsy.negotiation.quote.quote import Quote


@rawsy.repository(part_of=Quote)
class QuoteRepository:
    def requested_by(self, buyer_id: str) -> list[Quote]:
        """Quotes a buyer has requested, newest first."""
        return self.query.filter(buyer_id=buyer_id).order_by("-created_at").all().items

    def received_by(self, supplier_id: str) -> list[Quote]:
        """Quotes addressed to a supplier, newest first."""
        return self.query.filter(supplier_id=supplier_id).order_by("-created_at").all().items
