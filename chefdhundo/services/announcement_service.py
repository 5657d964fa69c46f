"""
Announcement queries and admin mutations.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from chefdhundo.core.announcements import to_naive_utc
from chefdhundo.db.models.announcement import Announcement

logger = logging.getLogger(__name__)


def _ordered(query):
    return query.order_by(
        Announcement.priority.desc(),
        Announcement.created_at.desc(),
        Announcement.id.desc(),
    )


def _currently_active(query, now: datetime):
    return query.filter(
        Announcement.status == "active",
        Announcement.start_date <= now,
        or_(Announcement.end_date.is_(None), Announcement.end_date >= now),
    )


def list_announcements(
    db: Session,
    status: Optional[str] = None,
    active_only: bool = False,
    now: Optional[datetime] = None,
) -> List[Announcement]:
    """Announcements ordered by priority, then newest first."""
    query = db.query(Announcement)
    if status:
        query = query.filter(Announcement.status == status)
    if active_only:
        query = _currently_active(query, now or datetime.utcnow())
    return _ordered(query).all()


def get_current_announcement(db: Session, now: Optional[datetime] = None) -> Optional[Announcement]:
    """The single highest-priority announcement live at ``now``."""
    return _ordered(_currently_active(db.query(Announcement), now or datetime.utcnow())).first()


def get_announcement(db: Session, announcement_id: int) -> Optional[Announcement]:
    return db.query(Announcement).filter(Announcement.id == announcement_id).first()


def _normalize_dates(data: Dict[str, Any]) -> Dict[str, Any]:
    # Stored as naive UTC
    for key in ("start_date", "end_date"):
        if data.get(key) is not None:
            data[key] = to_naive_utc(data[key])
    return data


def create_announcement(db: Session, data: Dict[str, Any]) -> Announcement:
    data = _normalize_dates(dict(data))
    if data.get("start_date") is None:
        data["start_date"] = datetime.utcnow()

    if data.get("end_date") and data["end_date"] < data["start_date"]:
        raise ValueError("end_date must be after start_date")

    announcement = Announcement(**data)
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    logger.info(f"Announcement created: id={announcement.id}, status={announcement.status}")
    return announcement


def update_announcement(db: Session, announcement: Announcement, updates: Dict[str, Any]) -> Announcement:
    updates = _normalize_dates(dict(updates))
    start_date = to_naive_utc(updates.get("start_date") or announcement.start_date)
    end_date = to_naive_utc(updates.get("end_date", announcement.end_date))
    if end_date and start_date and end_date < start_date:
        raise ValueError("end_date must be after start_date")

    for field, value in updates.items():
        setattr(announcement, field, value)
    db.commit()
    db.refresh(announcement)
    logger.info(f"Announcement updated: id={announcement.id}, fields={sorted(updates)}")
    return announcement


def delete_announcement(db: Session, announcement: Announcement) -> None:
    announcement_id = announcement.id
    db.delete(announcement)
    db.commit()
    logger.info(f"Announcement deleted: id={announcement_id}")
