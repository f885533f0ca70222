import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careflow.core.config import Settings
from careflow.core.errors import InvalidRequest, NotFound, ServiceUnavailable
from careflow.models.profile import Profile
from careflow.notifications import resend_client, templates
from careflow.notifications.schemas import REQUEST_MODELS, NotificationRequest, Recipient

logger = logging.getLogger(__name__)


def parse_notification_request(payload: object) -> NotificationRequest:
    if not isinstance(payload, dict):
        raise InvalidRequest('Request body must be a JSON object')

    tag = payload.get('type')
    model = REQUEST_MODELS.get(tag) if isinstance(tag, str) else None
    if model is None:
        raise InvalidRequest('Invalid notification type')

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = ', '.join('.'.join(str(part) for part in error['loc']) for error in exc.errors())
        raise InvalidRequest(f'Invalid notification fields: {fields}') from exc


def get_recipient(db: Session, user_id: object) -> Recipient:
    if not isinstance(user_id, str) or not user_id:
        raise NotFound('User email not found')

    try:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    except SQLAlchemyError as exc:
        raise ServiceUnavailable('Database unavailable') from exc

    if profile is None or not profile.email:
        raise NotFound('User email not found')
    return Recipient(email=profile.email, first_name=profile.first_name)


async def dispatch(db: Session, settings: Settings, payload: object) -> dict:
    """Render and send one email for a raw notification payload; returns the delivery receipt.

    The recipient is resolved before the notification type is checked. There is a
    single delivery attempt. Retrying is left to whoever scheduled the reminder.
    """
    if not isinstance(payload, dict):
        raise InvalidRequest('Request body must be a JSON object')

    logger.info('Processing %s notification for user %s', payload.get('type'), payload.get('user_id'))

    recipient = get_recipient(db, payload.get('user_id'))
    request = parse_notification_request(payload)
    email = templates.render(request, recipient)
    receipt = await resend_client.send_email(settings, to=recipient.email, subject=email.subject, html=email.html)

    logger.info('Email sent for %s notification: %s', request.type, receipt)
    return receipt
