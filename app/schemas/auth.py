"""Auth request/response schemas."""

from uuid import UUID
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    user: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public projection of a user; the password hash is never part of it."""

    id: UUID
    name: str
    email: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str


class VerifiedEmail(BaseModel):
    email: str


class VerifyTokenResponse(BaseModel):
    data: VerifiedEmail


class Identity(BaseModel):
    """Claims carried by a verified session token."""

    user_id: UUID
    username: str
    display_name: str = Field(default="")
