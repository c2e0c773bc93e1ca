"""Category DTOs"""

from typing import Dict, Optional

from pydantic import Field

from app.models.entities.category import CategoryType
from .base import ApiModel, BaseResponse
from .brand import Slug


class CategoryCreateRequest(ApiModel):
    name: str = Field(..., min_length=1)
    slug: Slug
    type: CategoryType
    image: Optional[str] = None
    description: Optional[str] = None
    featured: bool = False


class CategoryUpdateRequest(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[Slug] = None
    type: Optional[CategoryType] = None
    image: Optional[str] = None
    description: Optional[str] = None
    featured: Optional[bool] = None


class CategoryResponse(BaseResponse):
    name: str
    slug: str
    type: CategoryType
    image: Optional[str] = None
    description: Optional[str] = None
    featured: bool = False
    car_count: Optional[int] = None


class CategoryStatsResponse(ApiModel):
    total: int
    featured: int
    by_type: Dict[str, int]
    categories_with_cars: int
