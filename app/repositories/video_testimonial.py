"""Video testimonial repository for database operations"""

from bson import ObjectId
from pymongo.database import Database

from app.models.entities.video_testimonial import VideoTestimonial
from .base import BaseRepository


class VideoTestimonialRepository(BaseRepository[VideoTestimonial]):
    def __init__(self, db: Database):
        super().__init__(db, "video_testimonials", VideoTestimonial)
        self.collection.create_index("is_featured")
        self.collection.create_index([("created_at", -1)])
        self.collection.create_index("user_name")
        self.collection.create_index("user_company")

    def unfeature_company(self, company: str, keep_id: ObjectId) -> int:
        """Clear the featured flag on every other testimonial of a company."""
        result = self.collection.update_many(
            {"user_company": company, "_id": {"$ne": keep_id}, "is_featured": True},
            {"$set": {"is_featured": False}},
        )
        return result.modified_count
