"""Car entity - a vehicle listed in the rental catalog"""

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from .base import BaseEntity, PyObjectId


class Transmission(str, Enum):
    AUTOMATIC = "Automatic"
    MANUAL = "Manual"
    CVT = "CVT"
    SEMI_AUTOMATIC = "Semi-Automatic"


class FuelType(str, Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    PLUG_IN_HYBRID = "Plug-in Hybrid"


class Car(BaseEntity):
    model_config = ConfigDict(use_enum_values=True)

    brand: str
    brand_id: Optional[PyObjectId] = None
    model: str
    name: str
    year: int
    transmission: Transmission
    fuel: FuelType
    mileage: float
    daily_price: float
    discounted_price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    category_id: Optional[PyObjectId] = None
    engine: Optional[str] = None
    power: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    seater: Optional[int] = None
    featured: bool = False
    available: bool = True
