"""Repository layer for database operations"""

from .base import BaseRepository
from .brand import BrandRepository
from .car import CarRepository
from .category import CategoryRepository
from .review import ReviewRepository
from .user import UserRepository
from .video_testimonial import VideoTestimonialRepository

__all__ = [
    "BaseRepository",
    "BrandRepository",
    "CarRepository",
    "CategoryRepository",
    "ReviewRepository",
    "UserRepository",
    "VideoTestimonialRepository",
]
