"""Domain events for the Quote aggregate.

Every quote event carries both parties and the initiating actor so consumers can
work out the counterparty without loading the quote.
"""

from protean.fields import Float, Identifier, Integer, String, Text

from rawsy.domain import rawsy


@rawsy.event(part_of="Quote")
class QuoteRequested:
    """A buyer asked a supplier for a quote."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)
    requested_price = Float(required=True)
    notes = Text()


@rawsy.event(part_of="Quote")
class QuoteCountered:
    """The supplier proposed a counter price."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)
    counter_price = Float(required=True)
    supplier_message = Text()


@rawsy.event(part_of="Quote")
class QuoteBuyerAccepted:
    """The buyer accepted the supplier's counter offer."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)
    agreed_price = Float(required=True)


@rawsy.event(part_of="Quote")
class QuoteRejected:
    """Either party rejected the negotiation."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)


@rawsy.event(part_of="Quote")
class QuoteCancelled:
    """The buyer withdrew a pending request."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)


@rawsy.event(part_of="Quote")
class QuoteConverted:
    """The supplier turned the accepted quote into an order."""

    quote_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    buyer_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True)
    quantity = Integer(required=True)
    unit = String(required=True)
    agreed_price = Float(required=True)
    total = Float(required=True)
