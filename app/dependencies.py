"""FastAPI dependency injection: db session, authenticated identity."""

from collections.abc import Generator
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.exceptions import Forbidden, Unauthorized
from app.core.security import decode_session_token
from app.db.base import SessionLocal
from app.schemas.auth import Identity

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Provide a DB session; close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Identity:
    """Require a bearer session token: 401 when absent, 403 when invalid or expired."""
    if not credentials or not credentials.credentials:
        raise Unauthorized()
    try:
        payload = decode_session_token(credentials.credentials)
        return Identity(
            user_id=UUID(payload["sub"]),
            username=payload.get("username") or "",
            display_name=payload.get("displayName") or "",
        )
    except (JWTError, ValueError, KeyError):
        raise Forbidden()


DbSession = Annotated[Session, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
