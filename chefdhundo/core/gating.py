"""
Role-based access rules.

Two independent axes live on every user:
- role (basic | pro | admin) gates paid features such as contact visibility
- chef (yes | no) marks whether the user is a candidate with a resume
"""
import logging
from typing import Optional
from fastapi import HTTPException, status
from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume

logger = logging.getLogger(__name__)


def get_user_role(user: Optional[User]) -> str:
    """Viewer role; anonymous viewers are treated as basic."""
    if user is None:
        return "basic"
    return user.role or "basic"


def is_premium(user: Optional[User]) -> bool:
    """Check if user can see paid content (pro or admin)."""
    return get_user_role(user) in ["pro", "admin"]


def is_admin(user: Optional[User]) -> bool:
    return get_user_role(user) == "admin"


def is_owner(user: Optional[User], resume: Resume) -> bool:
    return user is not None and resume.user_id == user.id


def enforce_owner_or_admin(user: User, resume: Resume) -> None:
    """Raise 403 unless the user owns the resume or is an admin."""
    if is_owner(user, resume) or is_admin(user):
        return

    logger.warning(f"Resume access denied: user_id={user.id}, resume_id={resume.id}")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Forbidden - You do not own this resume",
    )


def enforce_file_access(user: User, resume: Resume) -> None:
    """Resume files are visible to their owner and to pro/admin users."""
    if is_owner(user, resume) or is_premium(user):
        return

    logger.warning(f"Resume file access denied: user_id={user.id}, resume_id={resume.id}, role={user.role}")
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Unauthorized - Upgrade to Pro to view resumes",
    )
