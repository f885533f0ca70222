from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from careflow.auth import jwt_handler
from careflow.core.config import Settings, get_settings
from careflow.core.errors import Unauthorized

# Missing or non-bearer headers arrive as None so they report as our own 401 body.
security = HTTPBearer(auto_error=False)


def resolve_user_id(credentials: HTTPAuthorizationCredentials | None, settings: Settings) -> str:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing authorization header")

    try:
        payload = jwt_handler.decode_access_token(credentials.credentials, settings)
    except Exception as exc:
        raise Unauthorized("Invalid token") from exc

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token subject")
    return str(user_id)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    return resolve_user_id(credentials, settings)
