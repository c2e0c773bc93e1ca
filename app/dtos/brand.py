"""Brand DTOs"""

from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from .base import ApiModel, BaseResponse


Slug = Annotated[str, Field(min_length=1), AfterValidator(str.lower)]


class BrandCreateRequest(ApiModel):
    name: str = Field(..., min_length=1)
    logo: str = Field(..., min_length=1)
    slug: Slug
    featured: bool = False


class BrandUpdateRequest(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    logo: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[Slug] = None
    featured: Optional[bool] = None


class BrandResponse(BaseResponse):
    name: str
    logo: str
    slug: str
    featured: bool = False


class BrandStatsResponse(ApiModel):
    total: int
    featured: int
    brands_with_cars: int
