"""
Identity provider webhook: keeps local accounts in step with sign-ups and
profile changes made at the provider.
"""
import hmac
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from chefdhundo.core import config
from chefdhundo.core.auth_dependency import get_db
from chefdhundo.core.logging_config import sanitize_log_data
from chefdhundo.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["Webhooks"])

HANDLED_EVENTS = ("user.created", "user.updated")


def _primary_email(data: dict) -> Optional[str]:
    addresses = data.get("email_addresses") or []
    primary_id = data.get("primary_email_address_id")
    for address in addresses:
        if address.get("id") == primary_id:
            return address.get("email_address")
    if addresses:
        return addresses[0].get("email_address")
    return None


def _display_name(data: dict) -> str:
    parts = [data.get("first_name") or "", data.get("last_name") or ""]
    name = " ".join(part for part in parts if part).strip()
    return name or "Unknown User"


@router.post("/identity")
async def identity_webhook(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    secret = config.IDENTITY_WEBHOOK_SECRET
    if not secret:
        logger.error("IDENTITY_WEBHOOK_SECRET not configured")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook not configured")

    if not authorization or not hmac.compare_digest(authorization, f"Bearer {secret}"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        event = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON payload")

    event_type = event.get("type")
    data = event.get("data") or {}
    logger.info(f"Identity webhook received: {event_type}")
    logger.debug(f"Identity webhook payload: {sanitize_log_data(data)}")

    if event_type not in HANDLED_EVENTS:
        return {"success": True, "message": f"Ignored event type: {event_type}"}

    external_id = data.get("id")
    email = _primary_email(data)
    if not external_id or not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing user id or email address")

    try:
        user = user_service.upsert_user(
            db,
            external_id=external_id,
            email=email,
            name=_display_name(data),
            photo=data.get("image_url"),
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to upsert user from webhook: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to sync user")

    return {"success": True, "message": "User synced", "data": {"id": user.id, "external_id": user.external_id}}
