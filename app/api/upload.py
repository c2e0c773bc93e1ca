from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.dtos import (
    DeleteMediaRequest,
    DeleteMediaResponse,
    MediaConfigResponse,
    UploadResponse,
)
from app.middleware.auth import require_admin
from app.services.media_service import MediaStorage, UploadService, get_media_storage

router = APIRouter(
    prefix="/upload", tags=["Upload"], dependencies=[Depends(require_admin)]
)


@router.post("", response_model=UploadResponse)
async def upload_files(
    files: List[UploadFile] = File(...),
    folder: Optional[str] = Form(None),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Upload one or more car images (JPEG, PNG or WebP)."""
    uploaded = await UploadService(storage).upload_files(files, folder)
    return UploadResponse(files=uploaded)


@router.delete("", response_model=DeleteMediaResponse)
def delete_files(
    payload: DeleteMediaRequest,
    storage: MediaStorage = Depends(get_media_storage),
):
    results = UploadService(storage).delete_files(payload.public_ids)
    return DeleteMediaResponse(results=results)


@router.get("", response_model=MediaConfigResponse)
def media_config(storage: MediaStorage = Depends(get_media_storage)):
    return MediaConfigResponse(
        is_configured=storage.enabled,
        bucket=storage.bucket_name,
        endpoint_url=storage.endpoint_url,
    )
