"""
Admin back-office endpoints. Every route requires the admin role.
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from chefdhundo.core.auth_dependency import get_db, require_admin
from chefdhundo.db.models.user import User
from chefdhundo.schemas.admin import RoleUpdateRequest, ChefStatusUpdateRequest, AdminStatsEnvelope
from chefdhundo.schemas.resume import ResumeResponse, ResumeEnvelope, ResumeVerificationUpdate
from chefdhundo.schemas.user import UserResponse, UserEnvelope, UserListEnvelope
from chefdhundo.services import resume_service, user_service
from chefdhundo.services.storage_service import LocalStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# ✅ USERS
@router.get("/users", response_model=UserListEnvelope)
def list_users(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    users = user_service.list_users(db)
    return UserListEnvelope(
        data=[UserResponse.model_validate(u) for u in users],
        message=f"Found {len(users)} users",
    )


@router.get("/users/export")
def export_users(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """All users as CSV."""
    content = user_service.export_users_csv(user_service.list_users(db))
    filename = f"users-{datetime.utcnow().strftime('%Y%m%d')}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/users/role", response_model=UserEnvelope)
def update_user_role(
    payload: RoleUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        user = user_service.set_user_role(db, payload.target_user_id, payload.new_role)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        logger.info(f"Admin {admin.id} set role of user_id={user.id} to {user.role}")
        return UserEnvelope(data=UserResponse.model_validate(user), message=f"User role updated to {user.role}")

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update user role: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user role"
        )


@router.patch("/users/chef-status", response_model=UserEnvelope)
def update_chef_status(
    payload: ChefStatusUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        user = user_service.set_chef_status(db, payload.user_id, payload.chef)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        logger.info(f"Admin {admin.id} set chef status of user_id={user.id} to {user.chef}")
        return UserEnvelope(data=UserResponse.model_validate(user), message=f"Chef status updated to {user.chef}")

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update chef status: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update chef status"
        )


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """Delete a user with their resumes, payments, subscriptions and files."""
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account"
        )

    try:
        deleted = user_service.delete_user(db, user_id, storage)
    except Exception as e:
        logger.error(f"Failed to delete user_id={user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user"
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info(f"Admin {admin.id} deleted user_id={user_id}")
    return {"success": True, "message": "User deleted successfully"}


# ✅ RESUMES
@router.patch("/resumes/{resume_id}/verification", response_model=ResumeEnvelope)
def update_resume_verification(
    resume_id: int,
    payload: ResumeVerificationUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    resume = resume_service.get_resume(db, resume_id)
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")

    resume = resume_service.set_verified(db, resume, payload.verified)
    return ResumeEnvelope(
        data=ResumeResponse.model_validate(resume),
        message="Resume verified" if resume.verified else "Resume unverified",
    )


# ✅ DASHBOARD
@router.get("/stats", response_model=AdminStatsEnvelope)
def get_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    stats = user_service.get_admin_stats(db)
    stats["latest_resumes"] = [ResumeResponse.model_validate(r) for r in stats["latest_resumes"]]
    return AdminStatsEnvelope(data=stats)
