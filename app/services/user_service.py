import logging
from typing import List

from fastapi import HTTPException, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.dtos import RegisterRequest, UserResponse, UserStatsResponse
from app.repositories import UserRepository
from app.services.auth_service import hash_password

logger = logging.getLogger(__name__)


def _serialize_user(user) -> UserResponse:
    return UserResponse.model_validate(user.model_dump())


class UserService:
    def __init__(self, db: Database):
        self.db = db
        self.user_repo = UserRepository(db)

    def register(self, payload: RegisterRequest) -> UserResponse:
        if self.user_repo.find_by_email(payload.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )
        try:
            user = self.user_repo.create_user(
                email=payload.email,
                name=payload.name,
                password_hash=hash_password(payload.password),
                role=payload.role,
            )
        except DuplicateKeyError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )
        logger.info("Created %s user %s", user.role, user.id)
        return _serialize_user(user)

    def set_password(self, email: str, password: str, name: str, role: str) -> UserResponse:
        """Create the user, or reset password/role of an existing one."""
        existing = self.user_repo.find_by_email(email)
        if not existing:
            return self.register(
                RegisterRequest(email=email, password=password, name=name, role=role)
            )
        user = self.user_repo.update_one(
            existing.id,
            {
                "password_hash": hash_password(password),
                "name": name,
                "role": role,
                "is_active": True,
            },
        )
        logger.info("Updated credentials for user %s", existing.id)
        return _serialize_user(user)

    def list_users(self) -> List[UserResponse]:
        return [_serialize_user(user) for user in self.user_repo.list_all()]

    def get_stats(self) -> UserStatsResponse:
        return UserStatsResponse(**self.user_repo.stats())

    def ensure_default_admin(self, email: str, password: str, name: str) -> bool:
        """Create a super admin unless one already exists. Returns True if created."""
        if self.user_repo.exists_with_role("super_admin"):
            return False
        self.register(
            RegisterRequest(email=email, password=password, name=name, role="super_admin")
        )
        logger.info("Default super admin %s created", email)
        return True
