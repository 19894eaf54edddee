"""Quote aggregate: one price/quantity negotiation between a buyer and a supplier.

The product's name, unit and price are copied into an immutable snapshot when
the quote is requested, so later product edits never change the terms under
negotiation.

State Machine:
    pending --supplier--> supplier_counter | rejected
    pending --buyer-----> buyer_cancel
    supplier_counter --buyer----> buyer_accept | rejected
    supplier_counter --supplier-> supplier_counter (re-counter) | rejected
    buyer_accept --supplier--> converted

    rejected, buyer_cancel and converted are terminal. supplier_accept is a
    recognised status with no transitions in or out.

Transitions are not idempotent: asking for the state a quote is already in
fails like any other disallowed transition (the supplier re-counter is the only
self-loop in the table).
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, List, String, ValueObject

from rawsy.domain import rawsy
from rawsy.shared.auth import Actor
from rawsy.shared.exceptions import InvalidTransition


def utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class QuoteStatus(Enum):
    PENDING = "pending"
    SUPPLIER_COUNTER = "supplier_counter"
    SUPPLIER_ACCEPT = "supplier_accept"
    BUYER_ACCEPT = "buyer_accept"
    REJECTED = "rejected"
    BUYER_CANCEL = "buyer_cancel"
    CONVERTED = "converted"


class QuoteAction(Enum):
    COUNTER = "counter"
    ACCEPT = "accept"
    REJECT = "reject"
    CANCEL = "cancel"
    CONVERT = "convert"


class Party(Enum):
    BUYER = "buyer"
    SUPPLIER = "supplier"


TERMINAL_STATUSES = frozenset({QuoteStatus.REJECTED, QuoteStatus.BUYER_CANCEL, QuoteStatus.CONVERTED})

_ACTION_TARGETS = {
    QuoteAction.COUNTER: QuoteStatus.SUPPLIER_COUNTER,
    QuoteAction.ACCEPT: QuoteStatus.BUYER_ACCEPT,
    QuoteAction.REJECT: QuoteStatus.REJECTED,
    QuoteAction.CANCEL: QuoteStatus.BUYER_CANCEL,
    QuoteAction.CONVERT: QuoteStatus.CONVERTED,
}


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS: dict[QuoteStatus, dict[Party, frozenset[QuoteStatus]]] = {
    QuoteStatus.PENDING: {
        Party.SUPPLIER: frozenset({QuoteStatus.SUPPLIER_COUNTER, QuoteStatus.REJECTED}),
        Party.BUYER: frozenset({QuoteStatus.BUYER_CANCEL}),
    },
    QuoteStatus.SUPPLIER_COUNTER: {
        Party.BUYER: frozenset({QuoteStatus.BUYER_ACCEPT, QuoteStatus.REJECTED}),
        Party.SUPPLIER: frozenset({QuoteStatus.SUPPLIER_COUNTER, QuoteStatus.REJECTED}),
    },
    QuoteStatus.SUPPLIER_ACCEPT: {},
    QuoteStatus.BUYER_ACCEPT: {
        Party.SUPPLIER: frozenset({QuoteStatus.CONVERTED}),
    },
    QuoteStatus.REJECTED: {},  # Terminal
    QuoteStatus.BUYER_CANCEL: {},  # Terminal
    QuoteStatus.CONVERTED: {},  # Terminal
}


def allowed_targets(status: QuoteStatus, party: Party) -> frozenset[QuoteStatus]:
    return _VALID_TRANSITIONS.get(status, {}).get(party, frozenset())


def resolve_target(action: "QuoteAction | QuoteStatus | str") -> QuoteStatus:
    """Map an action name (or a target status value) to the target status."""
    if isinstance(action, QuoteAction):
        return _ACTION_TARGETS[action]
    if isinstance(action, QuoteStatus):
        return action

    value = str(action).strip().lower()
    try:
        return _ACTION_TARGETS[QuoteAction(value)]
    except ValueError:
        pass
    try:
        return QuoteStatus(value)
    except ValueError:
        raise ValidationError({"action": [f"Unknown quote action '{action}'"]}) from None


def _action_name(action) -> str:
    return action.value if isinstance(action, Enum) else str(action)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@rawsy.value_object(part_of="Quote")
class ProductSnapshot:
    """Product terms frozen at the moment the quote was requested."""

    name: String(required=True, max_length=255)
    unit: String(required=True, max_length=20)
    price: Float(required=True)


@rawsy.value_object(part_of="Quote")
class QuoteTransition:
    """One entry of the quote's audit trail."""

    from_status: String(required=True, choices=QuoteStatus)
    to_status: String(required=True, choices=QuoteStatus)
    actor_id: Identifier(required=True)
    at: DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@rawsy.aggregate(limit=None)
class Quote:
    product_id: Identifier(required=True)
    product_snapshot: ValueObject(ProductSnapshot, required=True)
    buyer_id: Identifier(required=True)
    supplier_id: Identifier(required=True)
    quantity_requested: Integer(required=True, min_value=1)
    status: String(choices=QuoteStatus, default=QuoteStatus.PENDING.value)
    counter_price: Float()
    notes: String(max_length=2000)
    supplier_message: String(max_length=2000)

    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)
    countered_at: DateTime()
    accepted_at: DateTime()
    rejected_at: DateTime()
    cancelled_at: DateTime()
    converted_at: DateTime()

    history: List(content_type=ValueObject(QuoteTransition))

    @invariant.post
    def counter_price_is_set_once_countered(self):
        if (self.countered_at is not None) != (self.counter_price is not None):
            raise ValidationError(
                {"counter_price": ["Counter price is set exactly when the quote has been countered"]}
            )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def request(cls, product, buyer_id: str, quantity, notes: str | None = None) -> "Quote":
        """Open a negotiation on a negotiable product. Stock is not reserved."""
        from rawsy.negotiation.quote.events import QuoteRequested

        if not product.negotiable:
            raise ValidationError({"product_id": ["Product is not negotiable"]})
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})
        if str(buyer_id) == str(product.supplier_id):
            raise ValidationError({"buyer_id": ["You cannot request a quote on your own product"]})

        now = utcnow()
        quote = cls(
            product_id=str(product.id),
            product_snapshot=ProductSnapshot(name=product.name, unit=product.unit, price=product.price),
            buyer_id=str(buyer_id),
            supplier_id=str(product.supplier_id),
            quantity_requested=quantity,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        quote.raise_(
            QuoteRequested(
                **quote._event_fields(actor_id=quote.buyer_id),
                requested_price=quote.product_snapshot.price,
                notes=notes,
            )
        )
        return quote

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_terminal(self) -> bool:
        return QuoteStatus(self.status) in TERMINAL_STATUSES

    @property
    def agreed_price(self) -> float:
        return self.counter_price if self.counter_price is not None else self.product_snapshot.price

    def parties_of(self, actor: Actor) -> set[Party]:
        """Sides of the negotiation the actor may act for; admins may act for both."""
        parties = set()
        if actor.user_id == self.buyer_id:
            parties.add(Party.BUYER)
        if actor.user_id == self.supplier_id:
            parties.add(Party.SUPPLIER)
        if not parties and actor.is_admin:
            parties = {Party.BUYER, Party.SUPPLIER}
        return parties

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def transition(
        self,
        action,
        actor_id: str,
        parties: set[Party],
        counter_price: float | None = None,
        supplier_message: str | None = None,
    ) -> Party:
        """Apply ``action`` on behalf of one of ``parties``; returns the side that acted."""
        current = QuoteStatus(self.status)
        action_name = _action_name(action)

        if current in TERMINAL_STATUSES:
            raise InvalidTransition(
                current.value,
                action_name,
                reason=f"Quote is '{current.value}' and accepts no further transitions",
            )

        target = resolve_target(action)
        party = next(
            (p for p in (Party.SUPPLIER, Party.BUYER) if p in parties and target in allowed_targets(current, p)),
            None,
        )
        if party is None:
            raise InvalidTransition(current.value, action_name)

        if target == QuoteStatus.SUPPLIER_COUNTER:
            if isinstance(counter_price, bool) or not isinstance(counter_price, int | float) or counter_price <= 0:
                raise ValidationError({"counter_price": ["A counter offer needs a positive counter price"]})
            if supplier_message is not None and len(supplier_message) > 2000:
                raise ValidationError({"supplier_message": ["Message is too long"]})

        now = utcnow()
        with atomic_change(self):
            if target == QuoteStatus.SUPPLIER_COUNTER:
                self.counter_price = float(counter_price)
                if supplier_message is not None:
                    self.supplier_message = supplier_message
                self.countered_at = now
            elif target == QuoteStatus.BUYER_ACCEPT:
                self.accepted_at = now
            elif target == QuoteStatus.REJECTED:
                self.rejected_at = now
            elif target == QuoteStatus.BUYER_CANCEL:
                self.cancelled_at = now
            elif target == QuoteStatus.CONVERTED:
                self.converted_at = now

            self.status = target.value
            self.updated_at = now
            self.history = [
                *self.history,
                QuoteTransition(from_status=current.value, to_status=target.value, actor_id=str(actor_id), at=now),
            ]

        self.raise_(self._event_for(target, actor_id))
        return party

    # -------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------
    def _event_fields(self, actor_id: str) -> dict:
        return {
            "quote_id": self.id,
            "product_id": self.product_id,
            "product_name": self.product_snapshot.name,
            "buyer_id": self.buyer_id,
            "supplier_id": self.supplier_id,
            "actor_id": str(actor_id),
            "status": self.status,
            "quantity": self.quantity_requested,
            "unit": self.product_snapshot.unit,
        }

    def _event_for(self, target: QuoteStatus, actor_id: str):
        from rawsy.negotiation.quote.events import (
            QuoteBuyerAccepted,
            QuoteCancelled,
            QuoteConverted,
            QuoteCountered,
            QuoteRejected,
        )

        fields = self._event_fields(actor_id)
        if target == QuoteStatus.SUPPLIER_COUNTER:
            return QuoteCountered(**fields, counter_price=self.counter_price, supplier_message=self.supplier_message)
        if target == QuoteStatus.BUYER_ACCEPT:
            return QuoteBuyerAccepted(**fields, agreed_price=self.agreed_price)
        if target == QuoteStatus.REJECTED:
            return QuoteRejected(**fields)
        if target == QuoteStatus.BUYER_CANCEL:
            return QuoteCancelled(**fields)
        return QuoteConverted(
            **fields,
            agreed_price=self.agreed_price,
            total=round(self.agreed_price * self.quantity_requested, 2),
        )
