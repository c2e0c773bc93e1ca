from pydantic import EmailStr, Field

from app.models.entities.user import UserRole
from .base import ApiModel
from .user import UserResponse


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: UserRole


class LoginResponse(ApiModel):
    user: UserResponse
    token: str
    message: str = "Login successful"


class RegisterResponse(ApiModel):
    message: str = "User created successfully"
    user: UserResponse


class VerifyResponse(ApiModel):
    valid: bool = True
    user: UserResponse
    message: str = "Token is valid"
