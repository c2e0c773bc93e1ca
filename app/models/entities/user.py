"""User entity - an account allowed into the back office"""

from datetime import datetime
from typing import Literal, Optional

from .base import BaseEntity

# Roles new accounts may be given. Stored documents may still carry an older
# role; those load, and the role gate refuses them.
UserRole = Literal["admin", "super_admin"]


class User(BaseEntity):
    email: str
    name: str
    password_hash: str
    role: str = "admin"
    is_active: bool = True
    last_login: Optional[datetime] = None
