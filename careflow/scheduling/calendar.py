from datetime import datetime

from careflow.models.appointment import Appointment
from careflow.scheduling.time_format import DEFAULT_EVENT_DURATION_MINUTES, add_minutes, to_12_hour, to_24_hour


def build_calendar_event(appointment: Appointment) -> dict:
    start_time = to_24_hour(appointment.appointment_time or '')
    end_time = add_minutes(start_time, DEFAULT_EVENT_DURATION_MINUTES)
    day = appointment.appointment_date.isoformat() if appointment.appointment_date else ''

    return {
        'id': appointment.id,
        'title': f'{appointment.doctor_name} - {appointment.appointment_type}',
        'start': f'{day}T{start_time}',
        # Wraps at midnight onto the same date; late-evening events end "before" they start.
        'end': f'{day}T{end_time}',
        'is_telemedicine': bool(appointment.is_telemedicine),
        'specialty': appointment.doctor_specialty,
        'type': appointment.appointment_type,
    }


def reschedule_fields(start: datetime) -> dict:
    return {
        'appointment_date': start.date(),
        'appointment_time': to_12_hour(start.time()),
    }
