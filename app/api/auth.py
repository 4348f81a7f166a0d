"""Auth endpoints: register, login, forgot/verify/reset password."""

from fastapi import APIRouter, status

from app.dependencies import DbSession
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserResponse,
    VerifiedEmail,
    VerifyTokenResponse,
)
from app.services.auth_service import (
    login as do_login,
    register as do_register,
    request_password_reset,
    reset_password as do_reset_password,
    verify_reset_token,
)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: DbSession):
    user = do_register(
        db,
        name=body.name,
        email=body.email,
        username=body.user,
        password=body.password,
    )
    return RegisterResponse(message="User registered successfully", user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: DbSession):
    token = do_login(db, username=body.user, password=body.password)
    return LoginResponse(message="Login successful", token=token)


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(body: ForgotPasswordRequest, db: DbSession):
    """Email a single-use reset link. Unknown emails are reported as 400."""
    request_password_reset(db, body.email)
    return MessageResponse(message="Password reset email sent")


@router.get("/verify-token/{token}", response_model=VerifyTokenResponse)
def verify_token(token: str, db: DbSession):
    """Check a reset token without consuming it; returns the owner's email."""
    email = verify_reset_token(db, token)
    return VerifyTokenResponse(data=VerifiedEmail(email=email))


@router.post("/reset-password/{token}", response_model=MessageResponse)
def reset_password(token: str, body: ResetPasswordRequest, db: DbSession):
    do_reset_password(db, token, body.password)
    return MessageResponse(message="Password updated successfully")
