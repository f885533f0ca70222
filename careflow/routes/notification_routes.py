import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from careflow.core.config import Settings, get_settings
from careflow.core.errors import InternalError, InvalidRequest, PortalError
from careflow.database import get_db
from careflow.notifications.service import dispatch
from careflow.routes.responses import error_response, json_response, preflight_response

router = APIRouter(tags=['notifications'])

logger = logging.getLogger(__name__)

# Callers only distinguish success from failure.
FAILURE_STATUS = 500


@router.options('/send-notifications')
def send_notifications_preflight():
    return preflight_response()


@router.post('/send-notifications')
async def send_notifications(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidRequest('Request body must be JSON') from exc

        receipt = await dispatch(db, settings, payload)
        return json_response({'success': True, 'message': 'Notification sent', 'data': receipt})
    except PortalError as exc:
        logger.error('Error in send-notifications: %s', exc.message)
        return error_response(exc, status_code=FAILURE_STATUS)
    except Exception:
        logger.exception('Error in send-notifications')
        return error_response(InternalError(), status_code=FAILURE_STATUS)
