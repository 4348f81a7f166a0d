"""Auth: register, login, forgot/verify/reset password."""

import logging
import smtplib
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.exceptions import (
    AuthError,
    ConflictError,
    EmailDeliveryError,
    ExpiredTokenError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from app.core.security import (
    create_session_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)
from app.db.models.password_reset import PasswordResetToken
from app.db.models.user import User
from app.services.email_service import send_password_reset_email

logger = logging.getLogger(__name__)

# compared against when the username is unknown so both login failures cost one bcrypt check
_DUMMY_PASSWORD_HASH = hash_password("unknown-user-placeholder")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _require(*values: Optional[str]) -> None:
    if any(value is None or not value.strip() for value in values):
        raise ValidationError("All fields are required")


def register(
    db: Session,
    name: Optional[str],
    email: Optional[str],
    username: Optional[str],
    password: Optional[str],
) -> User:
    """Create a user with a bcrypt-hashed password. Username is checked before email."""
    _require(name, email, username, password)
    username = username.strip()
    email = email.strip()
    if db.query(User).filter(User.username == username).first():
        raise ConflictError("Username already exists")
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=email,
        password_hash=hash_password(password),
        name=name.strip(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.rollback()
        raise ConflictError("Username or email already exists")
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def login(db: Session, username: Optional[str], password: Optional[str]) -> str:
    """Authenticate and return a signed session token. Unknown user and wrong password fail alike."""
    _require(username, password)
    user = db.query(User).filter(User.username == username.strip()).first()
    password_hash = user.password_hash if user else _DUMMY_PASSWORD_HASH
    if not verify_password(password, password_hash) or not user:
        logger.info("Failed login attempt")
        raise AuthError("Invalid credentials")
    logger.info("User %s logged in", user.id)
    return create_session_token(str(user.id), user.username, user.name)


def request_password_reset(db: Session, email: Optional[str]) -> None:
    """
    Issue a reset token and email it. The token row is committed only after the
    email went out; a delivery failure rolls it back and raises EmailDeliveryError.
    """
    _require(email)
    user = db.query(User).filter(User.email == email.strip()).first()
    if not user:
        raise NotFoundError("No account is registered with that email")
    now = _utcnow()
    db.execute(
        delete(PasswordResetToken)
        .where(
            PasswordResetToken.user_id == user.id,
            PasswordResetToken.expires_at <= now,
        )
        .execution_options(synchronize_session=False)
    )
    token = generate_reset_token()
    ttl = timedelta(minutes=get_settings().password_reset_token_expire_minutes)
    db.add(
        PasswordResetToken(
            token_hash=hash_reset_token(token),
            user_id=user.id,
            expires_at=now + ttl,
            created_at=now,
        )
    )
    db.flush()
    try:
        send_password_reset_email(user.email, user.name, token)
    except (smtplib.SMTPException, OSError) as e:
        db.rollback()
        logger.exception("Password reset email to user %s failed: %s", user.id, e)
        raise EmailDeliveryError() from e
    db.commit()
    logger.info("Issued password reset token for user %s", user.id)


def _usable_reset_token(db: Session, token: Optional[str]) -> tuple[PasswordResetToken, User]:
    if not token:
        raise InvalidTokenError()
    record = (
        db.query(PasswordResetToken)
        .filter(PasswordResetToken.token_hash == hash_reset_token(token))
        .first()
    )
    if not record:
        raise InvalidTokenError()
    if _as_utc(record.expires_at) <= _utcnow():
        raise ExpiredTokenError()
    user = db.query(User).filter(User.id == record.user_id).first()
    if not user:
        raise InvalidTokenError()
    return record, user


def verify_reset_token(db: Session, token: Optional[str]) -> str:
    """Return the email of the token's owner without consuming the token."""
    _, user = _usable_reset_token(db, token)
    return user.email


def reset_password(db: Session, token: Optional[str], new_password: Optional[str]) -> None:
    """
    Consume the token and set the new password in one transaction. The guarded
    delete must remove exactly one row, so concurrent completions cannot both win.
    """
    _require(new_password)
    record, user = _usable_reset_token(db, token)
    try:
        result = db.execute(
            delete(PasswordResetToken).where(PasswordResetToken.id == record.id)
        )
        if result.rowcount != 1:
            raise InvalidTokenError()
        user.password_hash = hash_password(new_password)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Password reset completed for user %s", user.id)
