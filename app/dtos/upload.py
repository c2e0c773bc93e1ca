"""Media upload DTOs"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ApiModel


class UploadedFile(ApiModel):
    url: str
    public_id: str
    format: str
    size: int


class UploadResponse(ApiModel):
    message: str = "Files uploaded successfully"
    files: List[UploadedFile]


class DeleteMediaRequest(ApiModel):
    public_ids: List[str] = Field(..., min_length=1)


class DeleteMediaResponse(ApiModel):
    message: str = "Files deleted successfully"
    results: List[Dict[str, Any]]


class MediaConfigResponse(ApiModel):
    message: str = "Media storage configuration check"
    is_configured: bool
    bucket: Optional[str] = None
    endpoint_url: Optional[str] = None
