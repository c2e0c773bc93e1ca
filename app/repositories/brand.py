"""Brand repository for database operations"""

from typing import Optional

from pymongo.database import Database

from app.models.entities.brand import Brand
from .base import BaseRepository


class BrandRepository(BaseRepository[Brand]):
    def __init__(self, db: Database):
        super().__init__(db, "brands", Brand)
        self.collection.create_index("name", unique=True)
        self.collection.create_index("slug", unique=True)
        self.collection.create_index("featured")

    def find_by_slug(self, slug: str) -> Optional[Brand]:
        return self.find_one({"slug": slug.strip().lower()})
