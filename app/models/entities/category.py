"""Category entity - a car type, fuel type or free-form tag"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict

from .base import BaseEntity


class CategoryType(str, Enum):
    CAR_TYPE = "carType"
    FUEL_TYPE = "fuelType"
    TAG = "tag"


class Category(BaseEntity):
    model_config = ConfigDict(use_enum_values=True)

    name: str
    slug: str
    type: CategoryType
    image: Optional[str] = None
    description: Optional[str] = None
    featured: bool = False
