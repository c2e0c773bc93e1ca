"""Review DTOs"""

from typing import Dict, Literal, Optional

from pydantic import EmailStr, Field

from app.models.entities.base import PyObjectIdStr
from .base import ApiModel, BaseResponse


class ReviewContent(ApiModel):
    user_name: str = Field(..., min_length=1)
    user_email: Optional[EmailStr] = None
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)


class ReviewCreateRequest(ReviewContent):
    car_id: PyObjectIdStr


class ReviewUpdateRequest(ReviewContent):
    pass


class ReviewActionRequest(ApiModel):
    action: Literal["approve", "reject", "toggleFeatured", "delete"]


class ReviewResponse(BaseResponse):
    car_id: PyObjectIdStr
    user_name: str
    user_email: Optional[str] = None
    rating: int
    title: str
    comment: str
    is_approved: bool = False
    is_featured: bool = False
    is_admin_created: bool = False


class ReviewStatsResponse(ApiModel):
    average_rating: float
    total_reviews: int
    rating_distribution: Dict[int, int]
