import logging
from typing import Any, Dict, List, Mapping, Optional

from fastapi import HTTPException, UploadFile, status
from pymongo.database import Database

from app.config import settings
from app.dtos import PageResponse, VideoTestimonialFeatureRequest, VideoTestimonialResponse
from app.models.entities.video_testimonial import VideoTestimonial
from app.repositories import VideoTestimonialRepository
from app.services.filters import build_video_testimonial_query
from app.services.media_service import MediaStorage, UploadService

logger = logging.getLogger(__name__)

THUMBNAIL_FOLDER = "thumbnails"


def _serialize(testimonial: VideoTestimonial) -> VideoTestimonialResponse:
    return VideoTestimonialResponse.model_validate(testimonial.model_dump())


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Video testimonial not found"
    )


class VideoTestimonialService:
    def __init__(self, db: Database, storage: Optional[MediaStorage] = None):
        self.db = db
        self.repo = VideoTestimonialRepository(db)
        self.storage = storage
        self.uploads = UploadService(storage)

    def list_testimonials(
        self, params: Mapping[str, str]
    ) -> PageResponse[VideoTestimonialResponse]:
        query = build_video_testimonial_query(params)
        testimonials, total = self.repo.paginate(query)
        return PageResponse[VideoTestimonialResponse].build(
            [_serialize(t) for t in testimonials], total, query.page, query.limit
        )

    def get_testimonial(self, testimonial_id: str) -> VideoTestimonialResponse:
        testimonial = self.repo.find_by_id(testimonial_id)
        if not testimonial:
            raise _not_found()
        return _serialize(testimonial)

    async def _upload_media(
        self, video: Optional[UploadFile], thumbnail: Optional[UploadFile]
    ) -> Dict[str, Any]:
        """Validate both files, then store them. Returns the fields to persist."""
        video_data = thumbnail_data = None
        if video is not None:
            video_data = await self.uploads.read_checked(
                video, settings.VIDEO_ALLOWED_TYPES, settings.VIDEO_MAX_BYTES
            )
        if thumbnail is not None:
            thumbnail_data = await self.uploads.read_checked(thumbnail)

        fields: Dict[str, Any] = {}
        if video_data is not None:
            stored = self.uploads.store(video, video_data, settings.VIDEO_FOLDER)
            fields.update(video_url=stored.url, video_public_id=stored.public_id)
        if thumbnail_data is not None:
            stored = self.uploads.store(
                thumbnail, thumbnail_data, f"{settings.VIDEO_FOLDER}/{THUMBNAIL_FOLDER}"
            )
            fields.update(thumbnail_url=stored.url, thumbnail_public_id=stored.public_id)
        return fields

    async def create_testimonial(
        self,
        content: Dict[str, Any],
        video: UploadFile,
        thumbnail: Optional[UploadFile] = None,
    ) -> VideoTestimonialResponse:
        media = await self._upload_media(video, thumbnail)
        testimonial = self.repo.insert_one(
            VideoTestimonial(**content, **media, is_featured=False)
        )
        logger.info("Created video testimonial %s", testimonial.id)
        return _serialize(testimonial)

    async def update_testimonial(
        self,
        testimonial_id: str,
        content: Dict[str, Any],
        video: Optional[UploadFile] = None,
        thumbnail: Optional[UploadFile] = None,
    ) -> VideoTestimonialResponse:
        existing = self.repo.find_by_id(testimonial_id)
        if not existing:
            raise _not_found()

        media = await self._upload_media(video, thumbnail)
        testimonial = self.repo.update_one(existing.id, {**content, **media})
        if not testimonial:
            raise _not_found()

        replaced = [
            old
            for old, key in (
                (existing.video_public_id, "video_public_id"),
                (existing.thumbnail_public_id, "thumbnail_public_id"),
            )
            if old and key in media
        ]
        self._delete_media(replaced)
        return _serialize(testimonial)

    def set_featured(
        self, testimonial_id: str, payload: VideoTestimonialFeatureRequest
    ) -> VideoTestimonialResponse:
        if payload.is_featured is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update"
            )
        testimonial = self.repo.update_one(
            testimonial_id, {"is_featured": payload.is_featured}
        )
        if not testimonial:
            raise _not_found()

        # At most one featured testimonial per company
        if testimonial.is_featured and testimonial.user_company:
            self.repo.unfeature_company(testimonial.user_company, testimonial.id)
        return _serialize(testimonial)

    def delete_testimonial(self, testimonial_id: str) -> None:
        existing = self.repo.find_by_id(testimonial_id)
        if not existing or not self.repo.delete_one(existing.id):
            raise _not_found()
        self._delete_media(
            [k for k in (existing.video_public_id, existing.thumbnail_public_id) if k]
        )
        logger.info("Deleted video testimonial %s", testimonial_id)

    def _delete_media(self, public_ids: List[str]) -> None:
        if not public_ids or self.storage is None or not self.storage.enabled:
            return
        for result in self.storage.delete_many(public_ids):
            if result.get("result") != "ok":
                logger.warning("Could not delete media %s", result.get("publicId"))
