"""User DTOs"""

from datetime import datetime
from typing import Optional

from .base import ApiModel, BaseResponse


class UserResponse(BaseResponse):
    email: str
    name: str
    role: str
    is_active: bool = True
    last_login: Optional[datetime] = None


class UserStatsResponse(ApiModel):
    total: int
    active: int
    admins: int
    super_admins: int
