"""Data Transfer Objects (DTOs) for API requests and responses"""

from .auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, VerifyResponse
from .base import (
    ApiModel,
    BaseResponse,
    DataResponse,
    Envelope,
    MessageResponse,
    PageResponse,
)
from .brand import BrandCreateRequest, BrandResponse, BrandStatsResponse, BrandUpdateRequest
from .car import CarCreateRequest, CarResponse, CarStatsResponse, CarUpdateRequest
from .category import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryStatsResponse,
    CategoryUpdateRequest,
)
from .review import (
    ReviewActionRequest,
    ReviewCreateRequest,
    ReviewResponse,
    ReviewStatsResponse,
    ReviewUpdateRequest,
)
from .upload import (
    DeleteMediaRequest,
    DeleteMediaResponse,
    MediaConfigResponse,
    UploadedFile,
    UploadResponse,
)
from .user import UserResponse, UserStatsResponse
from .video_testimonial import VideoTestimonialFeatureRequest, VideoTestimonialResponse

__all__ = [
    # Base
    "ApiModel",
    "BaseResponse",
    "DataResponse",
    "Envelope",
    "MessageResponse",
    "PageResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "VerifyResponse",
    # User
    "UserResponse",
    "UserStatsResponse",
    # Car
    "CarCreateRequest",
    "CarResponse",
    "CarStatsResponse",
    "CarUpdateRequest",
    # Brand
    "BrandCreateRequest",
    "BrandResponse",
    "BrandStatsResponse",
    "BrandUpdateRequest",
    # Category
    "CategoryCreateRequest",
    "CategoryResponse",
    "CategoryStatsResponse",
    "CategoryUpdateRequest",
    # Review
    "ReviewActionRequest",
    "ReviewCreateRequest",
    "ReviewResponse",
    "ReviewStatsResponse",
    "ReviewUpdateRequest",
    # Upload
    "DeleteMediaRequest",
    "DeleteMediaResponse",
    "MediaConfigResponse",
    "UploadedFile",
    "UploadResponse",
    # Video testimonials
    "VideoTestimonialFeatureRequest",
    "VideoTestimonialResponse",
]
