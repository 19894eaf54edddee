"""FastAPI endpoints for the Notifications domain."""

from fastapi import APIRouter, Depends

from rawsy.notifications.api.schemas import NotificationResponse
from rawsy.shared.api import current_actor, get_marketplace
from rawsy.shared.auth import Actor

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    unread: bool = False,
    actor: Actor = Depends(current_actor),
    marketplace=Depends(get_marketplace),
) -> list[NotificationResponse]:
    return [NotificationResponse.from_notification(n) for n in marketplace.inbox.list_for(actor, unread_only=unread)]
