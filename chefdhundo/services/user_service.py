"""
User account operations: sign-in upsert, profile edits, admin mutations.
"""
import csv
import io
import logging
from typing import Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from chefdhundo.core.config import RESUME_BUCKET
from chefdhundo.db.models.user import User, ROLES, CHEF_STATUSES
from chefdhundo.db.models.resume import Resume
from chefdhundo.db.models.payment import Payment
from chefdhundo.db.models.subscription import Subscription
from chefdhundo.services.storage_service import LocalStorage, StorageError

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["name", "email", "role", "chef", "created_at"]


def get_user_by_external_id(db: Session, external_id: str) -> Optional[User]:
    return db.query(User).filter(User.external_id == external_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def upsert_user(
    db: Session,
    external_id: str,
    email: str,
    name: Optional[str] = None,
    photo: Optional[str] = None,
) -> User:
    """
    Create or update the account for an identity-provider user.

    Lookup is by external id first. When none matches but an account with the
    same email exists, that account is reconciled onto the new external id
    instead of inserting a duplicate.

    Raises:
        ValueError: If the email belongs to a different linked account
    """
    email = email.strip()
    user = get_user_by_external_id(db, external_id)

    if user is None:
        user = get_user_by_email(db, email)
        if user is not None:
            logger.info(f"Reconciling user_id={user.id} onto external_id={external_id}")
            user.external_id = external_id

    if user is None:
        user = User(
            external_id=external_id,
            email=email,
            name=name or "Unknown User",
            photo=photo,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User created: user_id={user.id}, external_id={external_id}")
        return user

    if user.email.lower() != email.lower():
        owner = get_user_by_email(db, email)
        if owner is not None and owner.id != user.id:
            db.rollback()
            raise ValueError("Email already in use by another account")
        user.email = email

    if name:
        user.name = name
    if photo is not None:
        user.photo = photo

    db.commit()
    db.refresh(user)
    logger.info(f"User synced: user_id={user.id}, external_id={external_id}")
    return user


def update_profile(db: Session, user: User, name: Optional[str] = None, photo: Optional[str] = None) -> User:
    if name is not None:
        user.name = name
    if photo is not None:
        user.photo = photo
    db.commit()
    db.refresh(user)
    return user


def set_user_role(db: Session, user_id: int, role: str) -> Optional[User]:
    """Change a user's role. Returns None when the user does not exist."""
    if role not in ROLES:
        raise ValueError("Invalid role. Must be basic, pro, or admin")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return None

    user.role = role
    db.commit()
    db.refresh(user)
    logger.info(f"Role updated: user_id={user_id}, role={role}")
    return user


def set_chef_status(db: Session, user_id: int, chef: str) -> Optional[User]:
    """Change a user's chef flag. Returns None when the user does not exist."""
    if chef not in CHEF_STATUSES:
        raise ValueError("Invalid chef status. Must be yes or no")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return None

    user.chef = chef
    db.commit()
    db.refresh(user)
    logger.info(f"Chef status updated: user_id={user_id}, chef={chef}")
    return user


def delete_user(db: Session, user_id: int, storage: Optional[LocalStorage] = None) -> bool:
    """
    Hard-delete a user with their subscriptions, payments and resumes.

    Database rows go in one transaction. Stored resume files are removed
    afterwards; a storage failure is logged and does not undo the delete.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return False

    resumes = db.query(Resume).filter(Resume.user_id == user_id).all()
    file_paths = [f"{user_id}/{resume.id}.pdf" for resume in resumes if resume.resume_file]

    try:
        db.query(Subscription).filter(Subscription.user_id == user_id).delete(synchronize_session=False)
        db.query(Payment).filter(Payment.user_id == user_id).delete(synchronize_session=False)
        for resume in resumes:
            db.delete(resume)
        db.flush()
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User deleted: user_id={user_id}, resumes={len(resumes)}")

    if storage is not None and file_paths:
        try:
            storage.remove(RESUME_BUCKET, file_paths)
        except StorageError as e:
            logger.warning(f"Could not remove stored files for deleted user_id={user_id}: {e}")

    return True


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def list_chefs(db: Session) -> List[User]:
    return (
        db.query(User)
        .filter(User.chef == "yes")
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )


def export_users_csv(users: Iterable[User]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for user in users:
        writer.writerow([
            user.name,
            user.email,
            user.role,
            user.chef,
            user.created_at.isoformat() if user.created_at else "",
        ])
    return buffer.getvalue()


def get_admin_stats(db: Session, top_n: int = 5) -> dict:
    """Counts for the admin dashboard."""
    role_rows = db.query(User.role, func.count(User.id)).group_by(User.role).all()
    users_by_role = {role: 0 for role in ROLES}
    users_by_role.update({role: count for role, count in role_rows})

    profession_rows = (
        db.query(Resume.profession, func.count(Resume.id))
        .filter(Resume.profession.isnot(None), Resume.profession != "")
        .group_by(Resume.profession)
        .order_by(func.count(Resume.id).desc(), Resume.profession)
        .limit(top_n)
        .all()
    )

    latest = (
        db.query(Resume)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .limit(10)
        .all()
    )

    return {
        "total_users": sum(users_by_role.values()),
        "users_by_role": users_by_role,
        "total_chefs": db.query(User).filter(User.chef == "yes").count(),
        "total_resumes": db.query(Resume).count(),
        "verified_resumes": db.query(Resume).filter(Resume.verified.is_(True)).count(),
        "top_professions": [
            {"profession": profession, "count": count}
            for profession, count in profession_rows
        ],
        "latest_resumes": latest,
    }
