from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from jose import JWTError, jwt
from passlib.context import CryptContext
from pymongo.database import Database

from app.config import settings
from app.dtos import LoginRequest, LoginResponse, UserResponse
from app.repositories import UserRepository

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_TOKEN = "Invalid or expired token"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(
    subject: str,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "email": email,
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
        "type": "access",
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token; expiry is enforced by jose."""
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN
        )

    if payload.get("type") != "access" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN
        )
    return payload


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer "):].strip()
        return token or None
    return None


class AuthService:
    def __init__(self, db: Database):
        self.db = db
        self.user_repo = UserRepository(db)

    def login(self, payload: LoginRequest) -> LoginResponse:
        user = self.user_repo.find_by_email(payload.email)
        if (
            not user
            or not user.is_active
            or not verify_password(payload.password, user.password_hash)
        ):
            logger.info("Failed login attempt for %s", payload.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        self.user_repo.touch_last_login(user.id)
        token = create_access_token(subject=str(user.id), email=user.email, role=user.role)
        logger.info("User %s logged in", user.id)

        refreshed = self.user_repo.find_by_id(user.id) or user
        return LoginResponse(
            user=UserResponse.model_validate(refreshed.model_dump()),
            token=token,
        )

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to an active user document."""
        payload = decode_access_token(token)
        user = self.user_repo.find_document(payload["sub"])
        if not user or not user.get("is_active", True):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN
            )
        return user
