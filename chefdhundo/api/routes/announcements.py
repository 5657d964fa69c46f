import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from chefdhundo.core.auth_dependency import get_db, require_admin
from chefdhundo.db.models.user import User
from chefdhundo.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementUpdate,
    AnnouncementResponse,
    AnnouncementEnvelope,
    AnnouncementListEnvelope,
)
from chefdhundo.services import announcement_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/announcements", tags=["Announcements"])


def get_announcement_or_404(db: Session, announcement_id: int):
    announcement = announcement_service.get_announcement(db, announcement_id)
    if not announcement:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found"
        )
    return announcement


@router.get("", response_model=AnnouncementListEnvelope)
def list_announcements(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    active: bool = Query(False, description="Only announcements live right now"),
    db: Session = Depends(get_db)
):
    announcements = announcement_service.list_announcements(db, status=status_filter, active_only=active)
    return AnnouncementListEnvelope(
        data=[AnnouncementResponse.model_validate(a) for a in announcements],
    )


@router.get("/current", response_model=AnnouncementEnvelope)
def current_announcement(db: Session = Depends(get_db)):
    """The single highest-priority live announcement, or null."""
    announcement = announcement_service.get_current_announcement(db)
    return AnnouncementEnvelope(
        data=AnnouncementResponse.model_validate(announcement) if announcement else None,
    )


@router.get("/{announcement_id}", response_model=AnnouncementEnvelope)
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    announcement = get_announcement_or_404(db, announcement_id)
    return AnnouncementEnvelope(data=AnnouncementResponse.model_validate(announcement))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AnnouncementEnvelope)
def create_announcement(
    payload: AnnouncementCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        announcement = announcement_service.create_announcement(db, payload.model_dump())
        return AnnouncementEnvelope(
            data=AnnouncementResponse.model_validate(announcement),
            message="Announcement created successfully",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create announcement: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create announcement"
        )


@router.put("/{announcement_id}", response_model=AnnouncementEnvelope)
def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        announcement = get_announcement_or_404(db, announcement_id)
        updates = payload.model_dump(exclude_unset=True)
        if not updates:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update"
            )

        announcement = announcement_service.update_announcement(db, announcement, updates)
        return AnnouncementEnvelope(
            data=AnnouncementResponse.model_validate(announcement),
            message="Announcement updated successfully",
        )
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update announcement: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update announcement"
        )


@router.delete("/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    announcement = get_announcement_or_404(db, announcement_id)
    announcement_service.delete_announcement(db, announcement)
    return {"success": True, "message": "Announcement deleted successfully"}
