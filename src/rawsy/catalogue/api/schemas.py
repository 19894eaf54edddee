"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Yellow Maize",
                    "description": "Dried, sorted yellow maize from Kaduna.",
                    "category": "grains",
                    "price": 320.0,
                    "unit": "ton",
                    "stock": 40,
                    "negotiable": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    category: str = Field(..., max_length=100)
    price: float
    unit: str = Field(..., max_length=20)
    stock: int
    negotiable: bool = False
    image: str | None = None


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 295.0,
                    "stock": 55,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    price: float | None = None
    unit: str | None = Field(None, max_length=20)
    stock: int | None = None
    negotiable: bool | None = None


class StartDiscountRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"percentage": 15, "expires_at": "2030-01-31T23:59:59Z"}]}}

    percentage: float
    expires_at: datetime | None = None


class RateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"score": 4}]}}

    score: int


# --- Response Schemas ---


class DiscountResponse(BaseModel):
    percentage: float
    active: bool
    expires_at: datetime | None = None


class RatingResponse(BaseModel):
    average: float
    count: int


class ProductResponse(BaseModel):
    id: str
    supplier_id: str
    name: str
    description: str | None = None
    category: str
    price: float
    final_price: float
    unit: str
    stock: int
    negotiable: bool
    discount: DiscountResponse | None = None
    rating: RatingResponse | None = None
    image: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls.model_validate({**product.to_dict(), "final_price": product.final_price})


class SearchResponse(BaseModel):
    page: int
    total: int
    pages: int
    products: list[ProductResponse]


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
