"""FastAPI endpoints for the Negotiation domain."""

from fastapi import APIRouter, Depends

from rawsy.negotiation.api.schemas import CreateQuoteRequest, QuoteResponse, TransitionQuoteRequest
from rawsy.negotiation.quote.negotiation import TransitionPayload
from rawsy.shared.api import current_actor, get_marketplace
from rawsy.shared.auth import Actor

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", status_code=201, response_model=QuoteResponse)
async def create_quote(
    body: CreateQuoteRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> QuoteResponse:
    quote = marketplace.negotiation.create_quote(actor, body.product_id, body.quantity, body.notes)
    return QuoteResponse.from_quote(quote)


@router.get("/mine", response_model=list[QuoteResponse])
async def my_quotes(
    actor: Actor = Depends(current_actor), marketplace=Depends(get_marketplace)
) -> list[QuoteResponse]:
    return [QuoteResponse.from_quote(q) for q in marketplace.negotiation.list_requested(actor)]


@router.get("/received", response_model=list[QuoteResponse])
async def received_quotes(
    actor: Actor = Depends(current_actor), marketplace=Depends(get_marketplace)
) -> list[QuoteResponse]:
    return [QuoteResponse.from_quote(q) for q in marketplace.negotiation.list_received(actor)]


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> QuoteResponse:
    return QuoteResponse.from_quote(marketplace.negotiation.get_quote(quote_id, actor))


@router.post("/{quote_id}/transitions", response_model=QuoteResponse)
async def transition_quote(
    quote_id: str,
    body: TransitionQuoteRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> QuoteResponse:
    payload = TransitionPayload(counter_price=body.counter_price, supplier_message=body.supplier_message)
    quote = marketplace.negotiation.transition(quote_id, actor, body.action, payload)
    return QuoteResponse.from_quote(quote)
