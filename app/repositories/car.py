"""Car repository for database operations"""

from typing import List

from bson import ObjectId
from pymongo.database import Database

from app.models.entities.car import Car
from .base import BaseRepository


class CarRepository(BaseRepository[Car]):
    def __init__(self, db: Database):
        super().__init__(db, "cars", Car)
        self.collection.create_index("brand")
        self.collection.create_index("featured")
        self.collection.create_index("available")
        self.collection.create_index("daily_price")

    def list_all(self, limit: int) -> List[Car]:
        return self.find_many({}, sort=[("created_at", -1)], limit=limit)

    def distinct_brands(self) -> List[str]:
        return [b for b in self.collection.distinct("brand") if b]

    def distinct_brand_ids(self) -> List[ObjectId]:
        return [b for b in self.collection.distinct("brand_id") if b]
