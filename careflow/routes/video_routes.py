import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from careflow.auth.dependencies import resolve_user_id, security
from careflow.core.config import Settings, get_settings
from careflow.core.errors import InternalError, InvalidRequest, PortalError
from careflow.database import get_db
from careflow.routes.responses import error_response, json_response, preflight_response
from careflow.video.service import provision_room

router = APIRouter(tags=['telemedicine'])

logger = logging.getLogger(__name__)


async def read_appointment_id(request: Request) -> str:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequest('Request body must be JSON') from exc

    appointment_id = body.get('appointmentId') if isinstance(body, dict) else None
    if not isinstance(appointment_id, str) or not appointment_id.strip():
        raise InvalidRequest('appointmentId is required')
    return appointment_id.strip()


@router.options('/create-video-room')
def create_video_room_preflight():
    return preflight_response()


@router.post('/create-video-room')
async def create_video_room(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user_id = resolve_user_id(credentials, settings)
        appointment_id = await read_appointment_id(request)
        room = await provision_room(db, settings, user_id=user_id, appointment_id=appointment_id)
        return json_response(room)
    except PortalError as exc:
        logger.warning('Video room request rejected: %s', exc.message)
        return error_response(exc)
    except Exception:
        logger.exception('Error creating video room')
        return error_response(InternalError())
