from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    Envelope,
    PageResponse,
    VideoTestimonialFeatureRequest,
    VideoTestimonialResponse,
)
from app.middleware.auth import require_admin
from app.services.media_service import MediaStorage, get_media_storage
from app.services.video_testimonial_service import VideoTestimonialService

router = APIRouter(prefix="/video-testimonials", tags=["Video testimonials"])


def _content(
    user_name: str,
    user_company: Optional[str],
    title: str,
    comment: str,
    duration: Optional[float],
) -> Dict[str, Any]:
    content: Dict[str, Any] = {
        "user_name": user_name,
        "user_company": user_company or None,
        "title": title,
        "comment": comment,
    }
    if duration is not None:
        content["duration"] = duration
    return content


@router.get("", response_model=PageResponse[VideoTestimonialResponse])
def list_video_testimonials(request: Request, db: Database = Depends(get_db)):
    """Newest first; `featured=true` narrows to featured videos."""
    return VideoTestimonialService(db).list_testimonials(request.query_params)


@router.post(
    "",
    response_model=Envelope[VideoTestimonialResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_video_testimonial(
    user_name: str = Form(..., alias="userName", min_length=1, max_length=100),
    title: str = Form(..., min_length=1, max_length=200),
    comment: str = Form(..., min_length=1, max_length=1000),
    user_company: Optional[str] = Form(None, alias="userCompany", max_length=100),
    duration: Optional[float] = Form(None, ge=0),
    video: UploadFile = File(...),
    thumbnail: Optional[UploadFile] = File(None),
    db: Database = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    testimonial = await VideoTestimonialService(db, storage).create_testimonial(
        _content(user_name, user_company, title, comment, duration), video, thumbnail
    )
    return Envelope[VideoTestimonialResponse](
        data=testimonial, message="Video testimonial created successfully"
    )


@router.get("/{testimonial_id}", response_model=Envelope[VideoTestimonialResponse])
def get_video_testimonial(testimonial_id: str, db: Database = Depends(get_db)):
    return Envelope[VideoTestimonialResponse](
        data=VideoTestimonialService(db).get_testimonial(testimonial_id)
    )


@router.put(
    "/{testimonial_id}",
    response_model=Envelope[VideoTestimonialResponse],
    dependencies=[Depends(require_admin)],
)
async def update_video_testimonial(
    testimonial_id: str,
    user_name: str = Form(..., alias="userName", min_length=1, max_length=100),
    title: str = Form(..., min_length=1, max_length=200),
    comment: str = Form(..., min_length=1, max_length=1000),
    user_company: Optional[str] = Form(None, alias="userCompany", max_length=100),
    duration: Optional[float] = Form(None, ge=0),
    video: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Database = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Replace the text fields; the video and thumbnail change only when sent."""
    testimonial = await VideoTestimonialService(db, storage).update_testimonial(
        testimonial_id,
        _content(user_name, user_company, title, comment, duration),
        video,
        thumbnail,
    )
    return Envelope[VideoTestimonialResponse](
        data=testimonial, message="Video testimonial updated successfully"
    )


@router.patch(
    "/{testimonial_id}",
    response_model=Envelope[VideoTestimonialResponse],
    dependencies=[Depends(require_admin)],
)
def feature_video_testimonial(
    testimonial_id: str,
    payload: VideoTestimonialFeatureRequest,
    db: Database = Depends(get_db),
):
    testimonial = VideoTestimonialService(db).set_featured(testimonial_id, payload)
    return Envelope[VideoTestimonialResponse](
        data=testimonial, message="Video testimonial updated successfully"
    )


@router.delete(
    "/{testimonial_id}",
    response_model=Envelope[VideoTestimonialResponse],
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def delete_video_testimonial(
    testimonial_id: str,
    db: Database = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    VideoTestimonialService(db, storage).delete_testimonial(testimonial_id)
    return Envelope[VideoTestimonialResponse](
        message="Video testimonial deleted successfully"
    )
