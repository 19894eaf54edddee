"""Quote negotiation: request and transition operations.

Transitions are persisted with a versioned write: the stored quote must still
be at the version the transition was computed from. When two parties act on the
same quote concurrently, exactly one write wins and the other caller gets
``ConflictError`` and must reload before retrying.

Notifications are a side effect: quote events are dispatched to the
Notifications context only after the write committed, and a failing
notification never fails the operation.
"""

from collections.abc import Mapping

import structlog
from protean.utils.globals import current_domain
from pydantic import BaseModel

from rawsy.catalogue.product.product import Product
from rawsy.negotiation.quote.quote import Quote
from rawsy.shared.auth import Actor, Capability, can, require
from rawsy.shared.exceptions import ConflictError, ForbiddenError, persistence_errors

logger = structlog.get_logger(__name__)


class TransitionPayload(BaseModel):
    counter_price: float | None = None
    supplier_message: str | None = None


def _as_payload(payload) -> TransitionPayload:
    if payload is None:
        return TransitionPayload()
    if isinstance(payload, TransitionPayload):
        return payload
    if isinstance(payload, Mapping):
        return TransitionPayload(
            counter_price=payload.get("counter_price"),
            supplier_message=payload.get("supplier_message"),
        )
    raise TypeError(f"Unsupported transition payload: {type(payload).__name__}")


class NegotiationService:
    @property
    def quotes(self):
        return current_domain.repository_for(Quote)

    def _load(self, quote_id: str) -> Quote:
        with persistence_errors(Quote, quote_id):
            return self.quotes.get(quote_id)

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_quote(self, actor: Actor, product_id: str, quantity: int, notes: str | None = None) -> Quote:
        require(actor, Capability.REQUEST_QUOTE)
        with persistence_errors(Product, product_id):
            product = current_domain.repository_for(Product).get(product_id)

        quote = Quote.request(product, buyer_id=actor.user_id, quantity=quantity, notes=notes)
        with persistence_errors(Quote, quote.id):
            self.quotes.add(quote)

        logger.info(
            "Quote requested",
            quote_id=quote.id,
            product_id=quote.product_id,
            buyer_id=quote.buyer_id,
            supplier_id=quote.supplier_id,
            quantity=quote.quantity_requested,
        )
        return quote

    def transition(self, quote_id: str, actor: Actor, action, payload=None) -> Quote:
        require(actor, Capability.NEGOTIATE_QUOTE)
        quote = self._load(quote_id)

        parties = quote.parties_of(actor)
        if not parties:
            raise ForbiddenError({"_entity": ["You are not a party to this quote"]})

        payload = _as_payload(payload)
        loaded_status = quote.status

        party = quote.transition(
            action,
            actor_id=actor.user_id,
            parties=parties,
            counter_price=payload.counter_price,
            supplier_message=payload.supplier_message,
        )

        try:
            with persistence_errors(Quote, quote.id):
                self.quotes.add(quote)
        except ConflictError:
            logger.info(
                "Quote transition lost a race",
                quote_id=quote.id,
                from_status=loaded_status,
                to_status=quote.status,
                actor_id=actor.user_id,
            )
            raise

        logger.info(
            "Quote transitioned",
            quote_id=quote.id,
            from_status=loaded_status,
            to_status=quote.status,
            actor_id=actor.user_id,
            party=party.value,
        )
        return quote

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_quote(self, quote_id: str, actor: Actor) -> Quote:
        quote = self._load(quote_id)
        if actor.user_id not in (quote.buyer_id, quote.supplier_id) and not can(actor, Capability.VIEW_ALL):
            raise ForbiddenError({"_entity": ["You are not a party to this quote"]})
        return quote

    def list_requested(self, actor: Actor) -> list[Quote]:
        """Quotes the actor asked for as a buyer, newest first."""
        with persistence_errors(Quote):
            return self.quotes.requested_by(actor.user_id)

    def list_received(self, actor: Actor) -> list[Quote]:
        """Quotes addressed to the actor as a supplier, newest first."""
        with persistence_errors(Quote):
            return self.quotes.received_by(actor.user_id)
