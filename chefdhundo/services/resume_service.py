"""
Resume queries and mutations.

Listing supports free-text search, experience buckets and a profession
filter with page/limit pagination. Creating and deleting a resume keep the
owner's ``chef`` flag in step within the same transaction.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import or_, and_
from sqlalchemy.orm import Session

from chefdhundo.core.config import RESUME_BUCKET
from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume
from chefdhundo.services.storage_service import LocalStorage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 12
MAX_PAGE_LIMIT = 100

UPLOAD_URL_EXPIRES_IN = 60 * 24 * 60 * 60  # 60 days
DOWNLOAD_URL_EXPIRES_IN = 3600

SEARCH_COLUMNS = (
    Resume.name,
    Resume.email,
    Resume.city,
    Resume.phone,
    Resume.profession,
    Resume.work_type,
)

# bucket -> (exclusive lower bound, inclusive upper bound)
EXPERIENCE_BUCKETS = {
    "fresher": (None, 2),
    "medium": (2, 6),
    "high": (6, 10),
    "pro": (10, None),
}


def experience_filter(experience: Optional[str]):
    """SQL condition for an experience bucket, or None for all/unknown."""
    bounds = EXPERIENCE_BUCKETS.get((experience or "").strip().lower())
    if bounds is None:
        return None

    lower, upper = bounds
    conditions = []
    if lower is not None:
        conditions.append(Resume.experience_years > lower)
    if upper is not None:
        conditions.append(Resume.experience_years <= upper)
    return and_(*conditions)


def compute_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_more": page < total_pages,
    }


def clamp_limit(limit: Optional[int]) -> int:
    if not limit or limit < 1:
        return DEFAULT_PAGE_LIMIT
    return min(limit, MAX_PAGE_LIMIT)


def _ordered(query):
    return query.order_by(Resume.created_at.desc(), Resume.id.desc())


def list_resumes_paginated(
    db: Session,
    page: int = 1,
    limit: int = DEFAULT_PAGE_LIMIT,
    search: Optional[str] = None,
    experience: Optional[str] = None,
    profession: Optional[str] = None,
) -> Tuple[List[Resume], Dict[str, Any]]:
    """
    One page of resumes matching the filters, newest first.

    Returns:
        Tuple of (resumes, pagination dict)
    """
    page = max(page or 1, 1)
    limit = clamp_limit(limit)
    query = db.query(Resume)

    search = (search or "").strip()
    if search:
        term = f"%{search}%"
        query = query.filter(or_(*[column.ilike(term) for column in SEARCH_COLUMNS]))

    bucket = experience_filter(experience)
    if bucket is not None:
        query = query.filter(bucket)

    profession = (profession or "").strip()
    if profession and profession.lower() != "all":
        query = query.filter(
            or_(
                Resume.profession == profession,
                Resume.work_type == profession,
                Resume.job_role == profession,
            )
        )

    total = query.count()
    resumes = _ordered(query).offset((page - 1) * limit).limit(limit).all()

    logger.debug(
        f"Resumes listed: page={page}, limit={limit}, total={total}, "
        f"search={search!r}, experience={experience}, profession={profession}"
    )
    return resumes, compute_pagination(page, limit, total)


def list_all_resumes(db: Session) -> List[Resume]:
    return _ordered(db.query(Resume)).all()


def list_user_resumes(db: Session, user_id: int) -> List[Resume]:
    return _ordered(db.query(Resume).filter(Resume.user_id == user_id)).all()


def search_resumes(
    db: Session,
    location: Optional[str] = None,
    profession: Optional[str] = None,
    min_experience: Optional[int] = None,
    cuisines: Optional[List[str]] = None,
) -> List[Resume]:
    """Structured search used by the employer search form."""
    query = db.query(Resume)

    if location:
        term = f"%{location.strip()}%"
        query = query.filter(
            or_(
                Resume.city.ilike(term),
                Resume.user_location.ilike(term),
                Resume.preferred_location.ilike(term),
            )
        )

    if profession:
        term = f"%{profession.strip()}%"
        query = query.filter(or_(Resume.profession.ilike(term), Resume.job_role.ilike(term)))

    if min_experience is not None:
        query = query.filter(Resume.experience_years >= min_experience)

    cuisines = [c.strip() for c in (cuisines or []) if c.strip()]
    if cuisines:
        query = query.filter(or_(*[Resume.cuisines.ilike(f"%{c}%") for c in cuisines]))

    return _ordered(query).all()


def get_resume(db: Session, resume_id: int) -> Optional[Resume]:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def create_resume(db: Session, data: Dict[str, Any]) -> Resume:
    """
    Insert a resume and mark its owner as a chef.

    Raises:
        ValueError: If the owner does not exist
    """
    owner = db.query(User).filter(User.id == data["user_id"]).first()
    if owner is None:
        raise ValueError("User not found")

    resume = Resume(**data)
    db.add(resume)
    owner.chef = "yes"
    db.commit()
    db.refresh(resume)

    logger.info(f"Resume created: resume_id={resume.id}, user_id={owner.id}")
    return resume


def update_resume(db: Session, resume: Resume, updates: Dict[str, Any]) -> Resume:
    for field, value in updates.items():
        setattr(resume, field, value)
    db.commit()
    db.refresh(resume)
    logger.info(f"Resume updated: resume_id={resume.id}, fields={sorted(updates)}")
    return resume


def set_verified(db: Session, resume: Resume, verified: bool) -> Resume:
    resume.verified = verified
    db.commit()
    db.refresh(resume)
    logger.info(f"Resume verification updated: resume_id={resume.id}, verified={verified}")
    return resume


def delete_resume(db: Session, resume: Resume, storage: Optional[LocalStorage] = None) -> User:
    """
    Delete a resume and, when it was the owner's last one, reset the owner's
    chef flag to ``no``. Both changes commit together.

    Returns:
        The owning user after the change
    """
    owner = db.query(User).filter(User.id == resume.user_id).first()
    resume_id = resume.id
    had_file = bool(resume.resume_file)

    try:
        db.delete(resume)
        db.flush()
        remaining = db.query(Resume).filter(Resume.user_id == owner.id).count()
        if remaining == 0:
            owner.chef = "no"
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(owner)
    logger.info(f"Resume deleted: resume_id={resume_id}, user_id={owner.id}, chef={owner.chef}")

    if storage is not None and had_file:
        try:
            storage.remove(RESUME_BUCKET, [resume_file_path(owner.id, resume_id)])
        except StorageError as e:
            logger.warning(f"Could not remove stored file for resume_id={resume_id}: {e}")

    return owner


def resume_file_path(user_id: int, resume_id: int) -> str:
    return f"{user_id}/{resume_id}.pdf"


def attach_resume_file(db: Session, resume: Resume, storage: LocalStorage, content: bytes) -> Tuple[str, str]:
    """
    Store a resume PDF, replacing any previous upload, and save a 60-day
    signed URL on the resume.

    Returns:
        Tuple of (signed url, object path)
    """
    path = resume_file_path(resume.user_id, resume.id)
    storage.upload(RESUME_BUCKET, path, content, upsert=True)
    url = storage.create_signed_url(RESUME_BUCKET, path, UPLOAD_URL_EXPIRES_IN)

    resume.resume_file = url
    db.commit()
    db.refresh(resume)

    logger.info(f"Resume file stored: resume_id={resume.id}, path={path}")
    return url, path


def detach_resume_file(db: Session, resume: Resume, storage: LocalStorage) -> None:
    """Clear the file reference; storage removal failures are only logged."""
    path = resume_file_path(resume.user_id, resume.id)
    try:
        storage.remove(RESUME_BUCKET, [path])
    except StorageError as e:
        logger.warning(f"Could not remove stored file {path}: {e}")

    resume.resume_file = None
    db.commit()
    db.refresh(resume)
    logger.info(f"Resume file removed: resume_id={resume.id}")


def create_download_url(resume: Resume, storage: LocalStorage) -> Optional[str]:
    """Short-lived signed URL for a resume's stored PDF, or None when absent."""
    if not resume.resume_file:
        return None
    path = resume_file_path(resume.user_id, resume.id)
    if not storage.exists(RESUME_BUCKET, path):
        return None
    return storage.create_signed_url(RESUME_BUCKET, path, DOWNLOAD_URL_EXPIRES_IN)
