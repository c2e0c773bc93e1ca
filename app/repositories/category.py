"""Category repository for database operations"""

from typing import List, Optional

from pymongo.database import Database

from app.models.entities.category import Category
from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    def __init__(self, db: Database):
        super().__init__(db, "categories", Category)
        self.collection.create_index("slug", unique=True)
        self.collection.create_index("type")

    def find_by_slug(self, slug: str) -> Optional[Category]:
        return self.find_one({"slug": slug.strip().lower()})

    def list_by_type_then_name(self) -> List[Category]:
        return self.find_many({}, sort=[("type", 1), ("name", 1)])
