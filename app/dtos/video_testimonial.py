"""Video testimonial DTOs"""

from typing import Optional

from pydantic import computed_field

from .base import ApiModel, BaseResponse


class VideoTestimonialFeatureRequest(ApiModel):
    is_featured: Optional[bool] = None


class VideoTestimonialResponse(BaseResponse):
    user_name: str
    user_company: Optional[str] = None
    title: str
    comment: str
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[float] = None
    is_featured: bool = False

    @computed_field(alias="formattedDuration")
    @property
    def formatted_duration(self) -> str:
        """m:ss, or N/A when the length is unknown."""
        if not self.duration:
            return "N/A"
        minutes, seconds = divmod(int(self.duration), 60)
        return f"{minutes}:{seconds:02d}"

    @computed_field
    @property
    def status(self) -> str:
        return "featured" if self.is_featured else "normal"
