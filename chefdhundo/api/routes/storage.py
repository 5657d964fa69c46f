"""
Serves stored objects to holders of a signed URL.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import FileResponse

from chefdhundo.core.security import verify_storage_token
from chefdhundo.services.storage_service import LocalStorage, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["Storage"])


@router.get("/{bucket}/{path:path}")
def read_object(
    bucket: str,
    path: str,
    token: str = Query(None, description="Signed URL token"),
    storage: LocalStorage = Depends(get_storage)
):
    if not verify_storage_token(token, bucket, path):
        logger.warning(f"Rejected storage read for {bucket}/{path}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired signature"
        )

    try:
        target = storage.object_path(bucket, path)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid object path")

    if not target.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found")

    return FileResponse(target, media_type="application/pdf", filename=target.name)
