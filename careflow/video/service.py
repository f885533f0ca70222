import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careflow.core.config import Settings
from careflow.core.errors import Forbidden, ServiceUnavailable
from careflow.models.appointment import Appointment
from careflow.video import daily_client

logger = logging.getLogger(__name__)

ROOM_LIFETIME_SECONDS = 3600


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def build_room_name(prefix: str, appointment_id: str, now_ms: int) -> str:
    return f'{prefix}-{appointment_id}-{now_ms}'


def get_owned_appointment(db: Session, appointment_id: str, user_id: str) -> Appointment:
    try:
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    except SQLAlchemyError as exc:
        raise ServiceUnavailable('Database unavailable') from exc

    # Missing and foreign appointments look the same to the caller.
    if appointment is None or appointment.user_id != user_id:
        raise Forbidden('Appointment not found or access denied')
    return appointment


async def provision_room(
    db: Session,
    settings: Settings,
    user_id: str,
    appointment_id: str,
    now_ms: int | None = None,
) -> dict:
    """Create a one-hour video room for an appointment owned by ``user_id``.

    Every call creates a new room; earlier rooms are left to expire.
    """
    appointment = get_owned_appointment(db, appointment_id, user_id)
    settings.require_video_provider_key()

    now_ms = current_time_ms() if now_ms is None else now_ms
    name = build_room_name(settings.room_name_prefix, appointment.id, now_ms)
    expires_at = now_ms // 1000 + ROOM_LIFETIME_SECONDS

    logger.info('Creating video room %s for appointment %s', name, appointment.id)
    room = await daily_client.create_room(settings, name=name, expires_at=expires_at)
    logger.info('Video room created: %s', room.get('url'))

    return {'url': room['url'], 'name': room.get('name', name)}
