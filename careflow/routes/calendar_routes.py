from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careflow.auth.dependencies import get_current_user_id
from careflow.core.errors import Forbidden, NotFound, ServiceUnavailable
from careflow.database import ensure_appointment_schema, get_db
from careflow.models.appointment import Appointment
from careflow.scheduling.calendar import build_calendar_event, reschedule_fields

router = APIRouter(tags=['appointments'])


class RescheduleRequest(BaseModel):
    start: datetime


class CalendarEventResponse(BaseModel):
    id: str
    title: str
    start: str
    end: str
    is_telemedicine: bool
    specialty: str | None = None
    type: str | None = None


class RescheduleResponse(BaseModel):
    id: str
    appointment_date: str
    appointment_time: str
    event: CalendarEventResponse


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise ServiceUnavailable('Database unavailable. Verify DATABASE_URL and credentials.') from exc


@router.get('/calendar', response_model=list[CalendarEventResponse])
def list_calendar_events(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointments = db.query(Appointment).filter(
            Appointment.user_id == user_id,
        ).order_by(Appointment.appointment_date.asc()).all()
    except SQLAlchemyError as exc:
        raise ServiceUnavailable('Database unavailable. Verify DATABASE_URL and credentials.') from exc

    return [build_calendar_event(appointment) for appointment in appointments]


@router.patch('/{appointment_id}/schedule', response_model=RescheduleResponse)
def reschedule_appointment(
    appointment_id: str,
    data: RescheduleRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if appointment is None:
            raise NotFound('Appointment not found.')
        if appointment.user_id != user_id:
            raise Forbidden('Only the patient who booked this appointment can reschedule it.')

        for field, value in reschedule_fields(data.start).items():
            setattr(appointment, field, value)
        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise ServiceUnavailable('Database unavailable. Verify DATABASE_URL and credentials.') from exc

    return RescheduleResponse(
        id=appointment.id,
        appointment_date=appointment.appointment_date.isoformat(),
        appointment_time=appointment.appointment_time,
        event=CalendarEventResponse(**build_calendar_event(appointment)),
    )
