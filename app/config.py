from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_JWT_SECRET = "change-me-in-production-use-env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Video Favorites API"
    debug: bool = False
    environment: Literal["development", "staging", "production", "test"] = "development"
    log_level: str = "INFO"
    port: int = 3000

    # DB
    database_url: str = "sqlite:///./video_favorites.db"

    # JWT
    jwt_secret: str = Field(
        default=_DEFAULT_JWT_SECRET,
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = "HS256"
    session_token_expire_hours: int = 48

    # Passwords
    bcrypt_rounds: int = Field(default=12, ge=10)
    password_reset_token_expire_minutes: int = 120

    # Email
    email_user: str = ""
    email_pass: str = ""
    email_from: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True

    # Frontend
    site_url: str = "http://localhost:3000"
    password_reset_link_path: str = "/reset-password"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # YouTube
    youtube_api_key: str = ""
    youtube_search_url: str = "https://www.googleapis.com/youtube/v3/search"
    youtube_max_results: int = 10
    youtube_timeout_seconds: float = 10.0

    @property
    def mail_sender(self) -> str:
        return self.email_from or self.email_user

    def check_production(self) -> None:
        """Refuse to boot a production process with development secrets."""
        if self.environment != "production":
            return
        errors: list[str] = []
        if not self.jwt_secret or self.jwt_secret == _DEFAULT_JWT_SECRET:
            errors.append("JWT_SECRET must be set to a secure value in production")
        if not self.email_user or not self.email_pass:
            errors.append("EMAIL_USER and EMAIL_PASS must be set in production")
        if not self.site_url.startswith(("http://", "https://")):
            errors.append("SITE_URL must be an http(s) URL in production")
        if errors:
            raise RuntimeError("Invalid configuration:\n- " + "\n- ".join(errors))


@lru_cache
def get_settings() -> Settings:
    return Settings()
