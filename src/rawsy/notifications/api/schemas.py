"""Pydantic response schemas for the Notifications API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "9c1d4e7a-0f3b-4a8e-bb61-2f7a9e1c0d55",
                    "type": "price_drop",
                    "title": "Price drop: Yellow Maize",
                    "message": "Yellow Maize price dropped from 320 to 295",
                    "data": {"product_id": "5a0f7c1e", "type": "price_drop", "old_price": "320", "new_price": "295"},
                    "read": False,
                    "created_at": "2026-10-19T09:30:00Z",
                }
            ]
        }
    }

    id: str
    type: str
    title: str
    message: str
    data: dict[str, str]
    read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification) -> NotificationResponse:
        return cls.model_validate(notification.to_dict())
