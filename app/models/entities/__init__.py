from .base import BaseEntity, PyObjectId, PyObjectIdStr
from .brand import Brand
from .car import Car, FuelType, Transmission
from .category import Category, CategoryType
from .review import Review
from .user import User, UserRole
from .video_testimonial import VideoTestimonial

__all__ = [
    "BaseEntity",
    "PyObjectId",
    "PyObjectIdStr",
    "Brand",
    "Car",
    "FuelType",
    "Transmission",
    "Category",
    "CategoryType",
    "Review",
    "User",
    "UserRole",
    "VideoTestimonial",
]
