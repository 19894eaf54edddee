"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends, Query

from rawsy.catalogue.api.schemas import (
    CreateProductRequest,
    ProductResponse,
    RateProductRequest,
    SearchResponse,
    StartDiscountRequest,
    StatusResponse,
    UpdateProductRequest,
)
from rawsy.catalogue.product.search import SearchCriteria
from rawsy.shared.api import current_actor, get_marketplace
from rawsy.shared.auth import Actor
from rawsy.shared.exceptions import validation_errors

router = APIRouter(prefix="/products", tags=["products"])


# --- Reads ---
# Static paths are declared before /{product_id} so they are matched first


@router.get("", response_model=list[ProductResponse])
async def list_products(marketplace=Depends(get_marketplace)) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in marketplace.catalogue.list_products()]


@router.get("/search", response_model=SearchResponse)
async def search_products(
    q: str | None = None,
    category: str | None = None,
    negotiable: bool | None = None,
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    in_stock: bool = Query(False, alias="inStock"),
    page: int = 1,
    limit: int = 12,
    marketplace=Depends(get_marketplace),
) -> SearchResponse:
    with validation_errors():
        criteria = SearchCriteria(
            q=q,
            category=category,
            negotiable=negotiable,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            page=page,
            limit=limit,
        )
    result = marketplace.catalogue.search(criteria)
    return SearchResponse(
        page=result.page,
        total=result.total,
        pages=result.pages,
        products=[ProductResponse.from_product(p) for p in result.products],
    )


@router.get("/top-rated", response_model=list[ProductResponse])
async def top_rated_products(
    limit: int = Query(10, ge=1, le=100), marketplace=Depends(get_marketplace)
) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in marketplace.catalogue.top_rated(limit)]


@router.get("/mine", response_model=list[ProductResponse])
async def my_products(
    actor: Actor = Depends(current_actor), marketplace=Depends(get_marketplace)
) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in marketplace.catalogue.list_supplier_products(actor)]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, marketplace=Depends(get_marketplace)) -> ProductResponse:
    return ProductResponse.from_product(marketplace.catalogue.get_product(product_id))


# --- Writes ---


@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(
    body: CreateProductRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> ProductResponse:
    product = marketplace.catalogue.create_product(
        actor,
        name=body.name,
        category=body.category,
        price=body.price,
        unit=body.unit,
        stock=body.stock,
        description=body.description,
        negotiable=body.negotiable,
        image=body.image,
    )
    return ProductResponse.from_product(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> ProductResponse:
    product = marketplace.catalogue.update_product(actor, product_id, **body.model_dump(exclude_none=True))
    return ProductResponse.from_product(product)


@router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(
    product_id: str,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> StatusResponse:
    marketplace.catalogue.delete_product(actor, product_id)
    return StatusResponse()


@router.put("/{product_id}/discount", response_model=ProductResponse)
async def start_discount(
    product_id: str,
    body: StartDiscountRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> ProductResponse:
    product = marketplace.catalogue.start_discount(actor, product_id, body.percentage, body.expires_at)
    return ProductResponse.from_product(product)


@router.delete("/{product_id}/discount", response_model=ProductResponse)
async def end_discount(
    product_id: str,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> ProductResponse:
    return ProductResponse.from_product(marketplace.catalogue.end_discount(actor, product_id))


@router.post("/{product_id}/ratings", status_code=201, response_model=ProductResponse)
async def rate_product(
    product_id: str,
    body: RateProductRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> ProductResponse:
    return ProductResponse.from_product(marketplace.catalogue.rate_product(actor, product_id, body.score))
