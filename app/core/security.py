"""JWT creation/verification, password hashing and reset-token helpers."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # unknown or corrupted hash format
        return False


def create_session_token(
    user_id: str,
    username: str,
    display_name: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.session_token_expire_hours))
    return jwt.encode(
        {
            "sub": user_id,
            "username": username,
            "displayName": display_name,
            "iat": now,
            "exp": expire,
            "jti": str(uuid4()),
            "type": "access",
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry. Raises jose.JWTError on any failure."""
    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    if payload.get("type") != "access" or not payload.get("sub"):
        raise JWTError("Not a session token")
    return payload


def generate_reset_token() -> str:
    """Opaque URL-safe token with 256 bits of entropy."""
    return secrets.token_urlsafe(32)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
