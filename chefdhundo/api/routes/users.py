import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chefdhundo.core.auth_dependency import get_db, get_current_claims, get_current_user_obj, require_admin
from chefdhundo.db.models.user import User
from chefdhundo.schemas.user import (
    UserResponse,
    UserEnvelope,
    UserListEnvelope,
    UserSync,
    UserProfileUpdate,
)
from chefdhundo.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/me", response_model=UserEnvelope)
def get_me(user: User = Depends(get_current_user_obj)):
    return UserEnvelope(data=UserResponse.model_validate(user))


@router.put("/me", response_model=UserEnvelope)
def update_me(
    profile: UserProfileUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        user = user_service.update_profile(db, user, name=profile.name, photo=profile.photo)
        return UserEnvelope(data=UserResponse.model_validate(user), message="Profile updated")
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update profile: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )


@router.post("/sync", response_model=UserEnvelope)
def sync_me(
    payload: UserSync,
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db)
):
    """
    Create or refresh the caller's account after sign-in.

    Keyed by the token's identity; an existing account with the same email is
    linked instead of duplicated.
    """
    try:
        user = user_service.upsert_user(
            db,
            external_id=claims["sub"],
            email=payload.email,
            name=payload.name,
            photo=payload.photo,
        )
        return UserEnvelope(data=UserResponse.model_validate(user), message="User synced")

    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to sync user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sync user"
        )


@router.get("/chefs", response_model=UserListEnvelope)
def list_chefs(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    chefs = user_service.list_chefs(db)
    return UserListEnvelope(
        data=[UserResponse.model_validate(u) for u in chefs],
        message=f"Found {len(chefs)} chefs",
    )
