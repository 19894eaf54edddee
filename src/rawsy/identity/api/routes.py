"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends

from rawsy.identity.api.schemas import DeviceTokenRequest, RegisterUserRequest, UserResponse
from rawsy.shared.api import current_actor, get_marketplace
from rawsy.shared.auth import Actor

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=201, response_model=UserResponse)
async def register_user(body: RegisterUserRequest, marketplace=Depends(get_marketplace)) -> UserResponse:
    user = marketplace.identity.register_user(
        name=body.name,
        role=body.role,
        email=body.email,
        company_name=body.company_name,
        phone=body.phone,
    )
    return UserResponse.from_user(user)


@router.get("/me", response_model=UserResponse)
async def get_me(actor: Actor = Depends(current_actor), marketplace=Depends(get_marketplace)) -> UserResponse:
    return UserResponse.from_user(marketplace.identity.get_user(actor.user_id))


# --- Wishlist ---


@router.put("/me/wishlist/{product_id}", response_model=UserResponse)
async def add_to_wishlist(
    product_id: str,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> UserResponse:
    # Fails with 404 for unknown products
    marketplace.catalogue.get_product(product_id)
    return UserResponse.from_user(marketplace.identity.add_to_wishlist(actor, product_id))


@router.delete("/me/wishlist/{product_id}", response_model=UserResponse)
async def remove_from_wishlist(
    product_id: str,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> UserResponse:
    return UserResponse.from_user(marketplace.identity.remove_from_wishlist(actor, product_id))


# --- Device tokens ---


@router.post("/me/device-tokens", status_code=201, response_model=UserResponse)
async def register_device_token(
    body: DeviceTokenRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> UserResponse:
    return UserResponse.from_user(marketplace.identity.register_device_token(actor, body.token))


@router.delete("/me/device-tokens", response_model=UserResponse)
async def unregister_device_token(
    body: DeviceTokenRequest,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> UserResponse:
    return UserResponse.from_user(marketplace.identity.unregister_device_token(actor, body.token))
