from datetime import datetime, timedelta, timezone

import jwt

from careflow.core.config import Settings


def create_access_token(subject: str, settings: Settings, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or settings.jwt_expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "aud": settings.jwt_audience,
        "exp": now + timedelta(minutes=expire_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
    )
