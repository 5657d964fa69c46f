"""
Resume endpoints.

Listing is public; contact details are masked unless the viewer is pro,
admin, or the resume's owner. Mutations require the owner or an admin.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response, UploadFile, File, Form
from sqlalchemy.orm import Session

from chefdhundo.core.auth_dependency import get_db, get_current_user_obj, get_optional_user
from chefdhundo.core.gating import get_user_role, is_admin, is_owner, is_premium, enforce_owner_or_admin, enforce_file_access
from chefdhundo.core.masking import mask_resume_contacts
from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume
from chefdhundo.schemas.resume import (
    ResumeCreate,
    ResumeUpdate,
    ResumeResponse,
    ResumeEnvelope,
    ResumeListResponse,
    PaginationInfo,
    FileUploadResponse,
    FileDownloadResponse,
)
from chefdhundo.services import resume_service
from chefdhundo.services.pdf_service import validate_resume_pdf, MAX_FILE_SIZE
from chefdhundo.services.storage_service import LocalStorage, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["Resumes"])

PUBLIC_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=300"


def present_resume(resume: Resume, viewer: Optional[User]) -> ResumeResponse:
    """
    Serialize a resume for the viewer.

    Contacts are masked and the stored file URL is withheld unless the viewer
    owns the resume or is pro/admin; others go through ``/download``.
    """
    payload = ResumeResponse.model_validate(resume)
    if is_owner(viewer, resume):
        return payload
    if not is_premium(viewer):
        payload = payload.model_copy(update={"resume_file": None})
    return mask_resume_contacts(payload, get_user_role(viewer))


def get_resume_or_404(db: Session, resume_id: int) -> Resume:
    resume = resume_service.get_resume(db, resume_id)
    if not resume:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Resume not found"
        )
    return resume


# ✅ LIST / PAGINATE
@router.get("", response_model=ResumeListResponse)
def list_resumes(
    response: Response,
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page (max 100)"),
    search: Optional[str] = Query(None, description="Search name, email, city, phone, profession, work type"),
    experience: Optional[str] = Query(None, description="fresher | medium | high | pro | all"),
    profession: Optional[str] = Query(None, description="Profession, work type or job role; 'all' for any"),
    user_id: Optional[int] = Query(None, description="Only resumes owned by this user"),
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    List resumes.

    With ``page`` or ``limit`` the filtered, paginated listing is returned.
    With ``user_id`` the owner's resumes are returned. Otherwise all resumes.
    """
    try:
        if viewer is None:
            response.headers["Cache-Control"] = PUBLIC_CACHE_CONTROL

        if user_id is not None:
            resumes = resume_service.list_user_resumes(db, user_id)
            return ResumeListResponse(
                data=[present_resume(r, viewer) for r in resumes],
                message=f"Found {len(resumes)} resumes",
            )

        if page is None and limit is None:
            resumes = resume_service.list_all_resumes(db)
            return ResumeListResponse(
                data=[present_resume(r, viewer) for r in resumes],
                message=f"Found {len(resumes)} resumes",
            )

        resumes, pagination = resume_service.list_resumes_paginated(
            db,
            page=page or 1,
            limit=limit or resume_service.DEFAULT_PAGE_LIMIT,
            search=search,
            experience=experience,
            profession=profession,
        )
        return ResumeListResponse(
            data=[present_resume(r, viewer) for r in resumes],
            pagination=PaginationInfo(**pagination),
            message=f"Found {pagination['total']} resumes",
        )

    except Exception as e:
        logger.error(f"Failed to list resumes: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch resumes"
        )


@router.get("/search", response_model=ResumeListResponse)
def search_resumes(
    location: Optional[str] = Query(None, description="City, locality or preferred location"),
    profession: Optional[str] = Query(None, description="Profession or job role"),
    experience: Optional[int] = Query(None, ge=0, description="Minimum years of experience"),
    cuisines: Optional[str] = Query(None, description="Comma-separated cuisines, any of"),
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    try:
        resumes = resume_service.search_resumes(
            db,
            location=location,
            profession=profession,
            min_experience=experience,
            cuisines=cuisines.split(",") if cuisines else None,
        )
        return ResumeListResponse(
            data=[present_resume(r, viewer) for r in resumes],
            message=f"Found {len(resumes)} resumes",
        )
    except Exception as e:
        logger.error(f"Failed to search resumes: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search resumes"
        )


# ✅ FILES
@router.post("/upload", response_model=FileUploadResponse)
async def upload_resume_file(
    file: Optional[UploadFile] = File(None),
    resume_id: Optional[int] = Form(None, alias="resumeId"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """
    Upload a PDF for a resume. Replaces any previous upload.

    Only the resume's owner may upload.
    """
    if file is None or resume_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing file or resumeId"
        )

    try:
        # One byte past the limit is enough for the size check to reject it
        content = await file.read(MAX_FILE_SIZE + 1)
        try:
            validate_resume_pdf(content, file.content_type)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        resume = get_resume_or_404(db, resume_id)
        if not is_owner(user, resume):
            logger.warning(f"Upload denied: user_id={user.id} does not own resume_id={resume_id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Unauthorized - You do not own this resume"
            )

        url, path = resume_service.attach_resume_file(db, resume, storage, content)
        return FileUploadResponse(url=url, path=path, message="Resume uploaded successfully")

    except HTTPException:
        raise
    except StorageError as e:
        db.rollback()
        logger.error(f"Storage error uploading resume_id={resume_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Upload failed: {e}"
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to upload resume file: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload resume"
        )


@router.get("/download", response_model=FileDownloadResponse)
def download_resume_file(
    resume_id: int = Query(..., alias="resumeId"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """Short-lived signed URL for a resume PDF. Owner, pro or admin only."""
    resume = get_resume_or_404(db, resume_id)
    enforce_file_access(user, resume)

    url = resume_service.create_download_url(resume, storage)
    if not url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No resume file uploaded"
        )

    return FileDownloadResponse(url=url, expires_in=resume_service.DOWNLOAD_URL_EXPIRES_IN)


# ✅ CRUD
@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResumeEnvelope)
def create_resume(
    resume_data: ResumeCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Create a resume. Non-admins may only create resumes for themselves.
    The owner is marked as a chef.
    """
    try:
        if resume_data.user_id != user.id and not is_admin(user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden - Cannot create a resume for another user"
            )

        resume = resume_service.create_resume(db, resume_data.model_dump())
        return ResumeEnvelope(data=present_resume(resume, user), message="Resume created successfully")

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resume"
        )


@router.get("/{resume_id}", response_model=ResumeEnvelope)
def get_resume(
    resume_id: int,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    resume = get_resume_or_404(db, resume_id)
    return ResumeEnvelope(data=present_resume(resume, viewer))


@router.put("/{resume_id}", response_model=ResumeEnvelope)
def update_resume(
    resume_id: int,
    resume_data: ResumeUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Update a resume. Only provided fields are changed.
    Only admins may change ``verified``.
    """
    try:
        resume = get_resume_or_404(db, resume_id)
        enforce_owner_or_admin(user, resume)

        updates = resume_data.model_dump(exclude_unset=True)
        if "verified" in updates and not is_admin(user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: Admin access required to change verification"
            )

        if not updates:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update"
            )

        resume = resume_service.update_resume(db, resume, updates)
        return ResumeEnvelope(data=present_resume(resume, user), message="Resume updated successfully")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update resume"
        )


@router.delete("/{resume_id}")
def delete_resume(
    resume_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    """Delete a resume; the owner's chef flag is reset in the same transaction."""
    try:
        resume = get_resume_or_404(db, resume_id)
        enforce_owner_or_admin(user, resume)

        owner = resume_service.delete_resume(db, resume, storage)
        return {
            "success": True,
            "message": "Resume deleted successfully",
            "data": {"user_id": owner.id, "chef": owner.chef},
        }

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete resume"
        )


@router.delete("/{resume_id}/file")
def delete_resume_file(
    resume_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    storage: LocalStorage = Depends(get_storage)
):
    resume = get_resume_or_404(db, resume_id)
    if not is_owner(user, resume):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden"
        )

    resume_service.detach_resume_file(db, resume, storage)
    return {"success": True, "message": "Resume file deleted"}
