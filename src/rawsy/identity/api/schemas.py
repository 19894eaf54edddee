"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Amina Yusuf",
                    "email": "amina@example.com",
                    "role": "buyer",
                    "company_name": "Yusuf Foods",
                    "phone": "+2348012345678",
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    email: str | None = Field(None, max_length=254)
    role: str = Field(..., max_length=20)
    company_name: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=20)


class DeviceTokenRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"token": "fcm-device-token-abc123"}]}}

    token: str = Field(..., max_length=4096)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    role: str
    company_name: str | None = None
    phone: str | None = None
    wishlist: list[str]
    device_token_count: int
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            company_name=user.company_name,
            phone=user.phone,
            wishlist=list(user.wishlist),
            device_token_count=len(user.device_tokens),
            created_at=user.created_at,
        )

