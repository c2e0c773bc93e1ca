"""Review repository for database operations"""

from typing import Dict

from bson import ObjectId
from pymongo.database import Database

from app.models.entities.review import Review
from .base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, db: Database):
        super().__init__(db, "reviews", Review)
        self.collection.create_index("car_id")
        self.collection.create_index("is_approved")
        self.collection.create_index([("created_at", -1)])

    def rating_distribution(self, car_id: ObjectId) -> Dict[int, int]:
        """Count approved reviews of a car per star rating."""
        rows = self.aggregate(
            [
                {"$match": {"car_id": car_id, "is_approved": True}},
                {"$group": {"_id": "$rating", "count": {"$sum": 1}}},
            ]
        )
        return {int(row["_id"]): row["count"] for row in rows}
