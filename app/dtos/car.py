"""Car DTOs"""

from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, Field, model_validator

from app.models.entities.base import PyObjectIdStr
from app.models.entities.car import FuelType, Transmission
from .base import ApiModel, BaseResponse

MIN_YEAR = 1900


def _check_year(year: int) -> int:
    max_year = datetime.now(timezone.utc).year + 1
    if year < MIN_YEAR or year > max_year:
        raise ValueError(f"year must be between {MIN_YEAR} and {max_year}")
    return year


ModelYear = Annotated[int, AfterValidator(_check_year)]


class CarCreateRequest(ApiModel):
    brand: str = Field(..., min_length=1)
    brand_id: Optional[PyObjectIdStr] = None
    model: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    year: ModelYear
    transmission: Transmission
    fuel: FuelType
    mileage: float = Field(..., ge=0)
    daily_price: float = Field(..., gt=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    images: List[str] = Field(..., min_length=1)
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    category_id: Optional[PyObjectIdStr] = None
    engine: Optional[str] = None
    power: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    seater: Optional[int] = Field(default=None, ge=1)
    featured: bool = False
    available: bool = True

    @model_validator(mode="after")
    def discount_below_daily_price(self):
        if (
            self.discounted_price is not None
            and self.discounted_price >= self.daily_price
        ):
            raise ValueError("Discounted price must be less than the daily price")
        return self


class CarUpdateRequest(ApiModel):
    brand: Optional[str] = Field(default=None, min_length=1)
    brand_id: Optional[PyObjectIdStr] = None
    model: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    year: Optional[ModelYear] = None
    transmission: Optional[Transmission] = None
    fuel: Optional[FuelType] = None
    mileage: Optional[float] = Field(default=None, ge=0)
    daily_price: Optional[float] = Field(default=None, gt=0)
    discounted_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = Field(default=None, min_length=1)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    category: Optional[str] = None
    category_id: Optional[PyObjectIdStr] = None
    engine: Optional[str] = None
    power: Optional[str] = None
    tags: Optional[List[str]] = None
    seater: Optional[int] = Field(default=None, ge=1)
    featured: Optional[bool] = None
    available: Optional[bool] = None


class CarResponse(BaseResponse):
    brand: str
    brand_id: Optional[PyObjectIdStr] = None
    model: str
    name: str
    year: int
    transmission: str
    fuel: str
    mileage: float
    daily_price: float
    discounted_price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    category_id: Optional[PyObjectIdStr] = None
    engine: Optional[str] = None
    power: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    seater: Optional[int] = None
    featured: bool = False
    available: bool = True


class CarStatsResponse(ApiModel):
    total: int
    available: int
    featured: int
    brands: List[str]
