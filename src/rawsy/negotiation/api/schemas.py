"""Pydantic request/response schemas for the Negotiation API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateQuoteRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "5a0f7c1e-2b8e-4a55-9d0b-7d1f3c9e2a10",
                    "quantity": 10,
                    "notes": "Delivery to Kano within two weeks",
                }
            ]
        }
    }

    product_id: str
    quantity: int
    notes: str | None = Field(None, max_length=2000)


class TransitionQuoteRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"action": "counter", "counter_price": 45.0, "supplier_message": "Best I can do for 10 tons"},
                {"action": "accept"},
            ]
        }
    }

    action: str = Field(..., description="counter, accept, reject, cancel or convert")
    counter_price: float | None = None
    supplier_message: str | None = None


# --- Response Schemas ---


class ProductSnapshotResponse(BaseModel):
    name: str
    unit: str
    price: float


class QuoteTransitionResponse(BaseModel):
    from_status: str
    to_status: str
    actor_id: str
    at: datetime


class QuoteResponse(BaseModel):
    id: str
    product_id: str
    product_snapshot: ProductSnapshotResponse
    buyer_id: str
    supplier_id: str
    quantity_requested: int
    status: str
    counter_price: float | None = None
    notes: str | None = None
    supplier_message: str | None = None
    created_at: datetime
    updated_at: datetime
    countered_at: datetime | None = None
    accepted_at: datetime | None = None
    rejected_at: datetime | None = None
    cancelled_at: datetime | None = None
    converted_at: datetime | None = None
    history: list[QuoteTransitionResponse]
    version: int

    @classmethod
    def from_quote(cls, quote) -> QuoteResponse:
        return cls.model_validate({**quote.to_dict(), "version": quote._version})
