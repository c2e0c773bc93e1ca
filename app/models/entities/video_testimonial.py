"""Video testimonial entity - an admin-uploaded customer video"""

from typing import Optional

from .base import BaseEntity


class VideoTestimonial(BaseEntity):
    user_name: str
    user_company: Optional[str] = None
    title: str
    comment: str
    video_url: str
    video_public_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    thumbnail_public_id: Optional[str] = None
    duration: Optional[float] = None
    is_featured: bool = False
