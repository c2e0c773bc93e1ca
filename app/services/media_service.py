"""Media storage for catalog images on an S3-compatible bucket."""

from __future__ import annotations

import logging
import mimetypes
import uuid
from functools import lru_cache
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError
from fastapi import HTTPException, UploadFile, status

from app.config import settings
from app.dtos import UploadedFile

LOG = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/quicktime": "mov",
}


class MediaStorage:
    """Thin wrapper over a boto3 S3 client."""

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.bucket_name = bucket
        self.region = region or "us-east-1"
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.enabled = bool(bucket)
        if not self.enabled:
            LOG.info("Media storage is disabled (no bucket configured)")
            return

        session_kwargs = {"region_name": self.region}
        if access_key_id and secret_access_key:
            session_kwargs["aws_access_key_id"] = access_key_id
            session_kwargs["aws_secret_access_key"] = secret_access_key
        self.session = boto3.Session(**session_kwargs)

        client_kwargs = {}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self.s3_client = self.session.client("s3", **client_kwargs)

        LOG.info(
            "Media storage initialized: bucket=%s, region=%s", self.bucket_name, self.region
        )

    @classmethod
    def from_settings(cls) -> "MediaStorage":
        return cls(
            bucket=settings.MEDIA_BUCKET,
            region=settings.MEDIA_REGION,
            endpoint_url=settings.MEDIA_ENDPOINT_URL,
            access_key_id=settings.MEDIA_ACCESS_KEY_ID,
            secret_access_key=settings.MEDIA_SECRET_ACCESS_KEY,
            public_base_url=settings.MEDIA_PUBLIC_BASE_URL,
        )

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def upload(
        self, data: bytes, filename: str, content_type: str, folder: str
    ) -> Dict[str, Any]:
        """Store one object and describe it; raises ClientError on failure."""
        extension = _EXTENSIONS.get(content_type) or (
            (mimetypes.guess_extension(content_type) or "").lstrip(".") or "bin"
        )
        key = f"{folder.strip('/')}/{uuid.uuid4().hex}.{extension}"
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
            Metadata={"original-filename": filename},
        )
        LOG.info("Uploaded %s to s3://%s/%s", filename, self.bucket_name, key)
        return {
            "url": self.public_url(key),
            "public_id": key,
            "format": extension,
            "size": len(data),
        }

    def delete_many(self, keys: List[str]) -> List[Dict[str, Any]]:
        results = []
        for key in keys:
            try:
                self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
                results.append({"publicId": key, "result": "ok"})
            except ClientError as e:
                LOG.error("Failed to delete %s from media storage: %s", key, e)
                results.append({"publicId": key, "result": "error", "error": str(e)})
        return results


@lru_cache
def get_media_storage() -> MediaStorage:
    """FastAPI dependency returning the process-wide storage client."""
    return MediaStorage.from_settings()


class UploadService:
    def __init__(self, storage: MediaStorage):
        self.storage = storage

    def _require_storage(self) -> None:
        if not self.storage.enabled:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Media storage is not configured",
            )

    async def read_checked(
        self,
        file: UploadFile,
        allowed_types: Optional[List[str]] = None,
        max_bytes: Optional[int] = None,
    ) -> bytes:
        """Read an upload after checking its content type and size."""
        allowed_types = allowed_types or settings.UPLOAD_ALLOWED_TYPES
        max_bytes = max_bytes or settings.UPLOAD_MAX_BYTES
        if file.content_type not in allowed_types:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Invalid file type: {file.content_type}. Allowed types: "
                    f"{', '.join(allowed_types)}"
                ),
            )
        data = await file.read()
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"File too large: {file.filename}. Maximum size: "
                    f"{max_bytes // (1024 * 1024)}MB"
                ),
            )
        return data

    def store(self, file: UploadFile, data: bytes, folder: str) -> UploadedFile:
        self._require_storage()
        try:
            stored = self.storage.upload(
                data, file.filename or "upload", file.content_type, folder
            )
        except ClientError as e:
            LOG.error("Upload of %s failed: %s", file.filename, e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to upload {file.filename}",
            )
        return UploadedFile(**stored)

    async def upload_files(
        self, files: List[UploadFile], folder: Optional[str] = None
    ) -> List[UploadedFile]:
        if not files:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="No files provided"
            )

        # Validate every file before anything is stored
        payloads = [(file, await self.read_checked(file)) for file in files]

        self._require_storage()
        target = folder or settings.MEDIA_DEFAULT_FOLDER
        return [self.store(file, data, target) for file, data in payloads]

    def delete_files(self, public_ids: List[str]) -> List[Dict[str, Any]]:
        self._require_storage()
        return self.storage.delete_many(public_ids)
