"""FastAPI dependencies shared by every context's router."""

from fastapi import Header, Request

from rawsy.shared.auth import Actor


def get_marketplace(request: Request):
    """The ``Marketplace`` the application was built around."""
    return request.app.state.marketplace


def current_actor(
    x_user_id: str = Header(..., description="Authenticated user id, set by the auth gateway"),
    x_user_role: str = Header(..., description="buyer, supplier or admin"),
) -> Actor:
    return Actor.of(x_user_id, x_user_role)
