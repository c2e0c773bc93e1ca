"""Review entity - customer feedback on a car, moderated by admins"""

from typing import Optional

from .base import BaseEntity, PyObjectId


class Review(BaseEntity):
    car_id: PyObjectId
    user_name: str
    user_email: Optional[str] = None
    rating: int
    title: str
    comment: str
    is_approved: bool = False
    is_featured: bool = False
    is_admin_created: bool = False
