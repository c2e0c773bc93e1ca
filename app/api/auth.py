from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from app.database.mongo import get_db
from app.dtos import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    VerifyResponse,
)
from app.middleware.auth import get_current_user, require_super_admin
from app.services.auth_service import AuthService
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    return AuthService(db).login(payload)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    db: Database = Depends(get_db),
    _: dict = Depends(require_super_admin),
):
    """Create an admin account. Only super admins may do this."""
    user = UserService(db).register(payload)
    return RegisterResponse(user=user)


@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: dict = Depends(get_current_user)):
    return VerifyResponse(user=UserResponse.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
def logout():
    # Tokens are stateless, the client just discards its copy
    return MessageResponse(message="Logged out successfully")
