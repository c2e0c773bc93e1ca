from typing import List

from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import UserResponse, UserStatsResponse
from app.middleware.auth import require_super_admin
from app.services.user_service import UserService

router = APIRouter(
    prefix="/users", tags=["Users"], dependencies=[Depends(require_super_admin)]
)


@router.get("", response_model=List[UserResponse])
def list_users(db: Database = Depends(get_db)):
    return UserService(db).list_users()


@router.get("/stats", response_model=UserStatsResponse)
def user_stats(db: Database = Depends(get_db)):
    """Count users by role and active flag."""
    return UserService(db).get_stats()
