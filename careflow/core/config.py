import os
from dataclasses import dataclass

from dotenv import load_dotenv

from careflow.core.errors import ServiceUnavailable

load_dotenv()

DEFAULT_JWT_SECRET = "change-me"


def _get_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item] or default


@dataclass(frozen=True)
class Settings:
    """Process configuration, read once from the environment and injected into handlers."""

    app_env: str = "development"
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = ("*",)

    data_store_url: str = "sqlite:///./careflow.db"
    data_store_key: str | None = None

    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"
    jwt_expires_minutes: int = 60

    video_provider_key: str | None = None
    video_provider_url: str = "https://api.daily.co/v1"
    room_name_prefix: str = "careflow"

    email_provider_key: str | None = None
    email_provider_url: str = "https://api.resend.com"
    email_sender: str = "Healthcare <onboarding@resend.dev>"

    def require_video_provider_key(self) -> str:
        if not self.video_provider_key:
            raise ServiceUnavailable("Video service not configured")
        return self.video_provider_key

    def require_email_provider_key(self) -> str:
        if not self.email_provider_key:
            raise ServiceUnavailable("Email service not configured")
        return self.email_provider_key


def get_settings() -> Settings:
    return Settings(
        app_env=os.getenv("APP_ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        allowed_origins=tuple(_get_list(os.getenv("ALLOWED_ORIGINS"), ["*"])),
        data_store_url=os.getenv("DATABASE_URL") or "sqlite:///./careflow.db",
        data_store_key=os.getenv("DATABASE_PASSWORD") or None,
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_audience=os.getenv("JWT_AUDIENCE", "authenticated"),
        jwt_expires_minutes=_get_int(os.getenv("JWT_EXPIRES_MINUTES"), 60),
        video_provider_key=os.getenv("DAILY_API_KEY") or None,
        video_provider_url=os.getenv("DAILY_API_URL", "https://api.daily.co/v1").rstrip("/"),
        room_name_prefix=os.getenv("ROOM_NAME_PREFIX", "careflow"),
        email_provider_key=os.getenv("RESEND_API_KEY") or None,
        email_provider_url=os.getenv("RESEND_API_URL", "https://api.resend.com").rstrip("/"),
        email_sender=os.getenv("EMAIL_SENDER", "Healthcare <onboarding@resend.dev>"),
    )


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() == "production" and settings.jwt_secret_key == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
