"""Product search and ranking queries."""

import math

from pydantic import BaseModel, Field

from rawsy.catalogue.product.product import Product


class SearchCriteria(BaseModel):
    q: str | None = None
    category: str | None = None
    negotiable: bool | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    in_stock: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)


class SearchResult(BaseModel):
    page: int
    total: int
    pages: int
    products: list  # of Product


def _matches(product: Product, criteria: SearchCriteria) -> bool:
    if not product.is_active:
        return False
    if criteria.q and criteria.q.lower() not in product.name.lower():
        return False
    if criteria.category and product.category != criteria.category:
        return False
    if criteria.negotiable and not product.negotiable:
        return False
    if criteria.min_price is not None and product.price < criteria.min_price:
        return False
    if criteria.max_price is not None and product.price > criteria.max_price:
        return False
    if criteria.in_stock and product.stock <= 0:
        return False
    return True


def search_products(products: list[Product], criteria: SearchCriteria) -> SearchResult:
    """Filter active products, order by newest first and paginate."""
    matched = sorted(
        (p for p in products if _matches(p, criteria)),
        key=lambda p: p.created_at,
        reverse=True,
    )
    start = (criteria.page - 1) * criteria.limit
    return SearchResult(
        page=criteria.page,
        total=len(matched),
        pages=math.ceil(len(matched) / criteria.limit),
        products=matched[start : start + criteria.limit],
    )


def top_rated(products: list[Product], limit: int = 10) -> list[Product]:
    products = [p for p in products if p.is_active]
    return sorted(products, key=lambda p: (p.rating.average, p.rating.count), reverse=True)[:limit]
