"""User repository for database operations"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.database import Database

from app.models.entities.user import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Database):
        super().__init__(db, "users", User)
        self.collection.create_index("email", unique=True)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one({"email": email.strip().lower()})

    def list_all(self) -> List[User]:
        return self.find_many({}, sort=[("created_at", -1)])

    def exists_with_role(self, role: str) -> bool:
        return self.count({"role": role}) > 0

    def create_user(
        self, email: str, name: str, password_hash: str, role: str = "admin"
    ) -> User:
        user = User(
            email=email.strip().lower(),
            name=name,
            password_hash=password_hash,
            role=role,
        )
        return self.insert_one(user)

    def touch_last_login(self, user_id) -> None:
        self.collection.update_one(
            {"_id": self._to_object_id(user_id)},
            {"$set": {"last_login": datetime.now(timezone.utc)}},
        )

    def stats(self) -> Dict[str, int]:
        return {
            "total": self.count(),
            "active": self.count({"is_active": True}),
            "admins": self.count({"role": "admin"}),
            "super_admins": self.count({"role": "super_admin"}),
        }

    def find_document(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Raw user document, left unvalidated so legacy roles still load."""
        identifier = self._to_object_id(user_id)
        if identifier is None:
            return None
        return self.collection.find_one({"_id": identifier})
