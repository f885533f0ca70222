from typing import Literal

from pydantic import BaseModel, field_validator


class AppointmentReminderData(BaseModel):
    doctor_name: str
    appointment_date: str
    appointment_time: str


class MedicationAlertData(BaseModel):
    medication_name: str
    dosage: str


class RefillReminderData(BaseModel):
    medication_name: str
    pills_remaining: int
    refill_date: str | None = None

    @field_validator('refill_date')
    @classmethod
    def blank_refill_date_is_missing(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class AppointmentReminder(BaseModel):
    type: Literal['appointment_reminder']
    user_id: str
    data: AppointmentReminderData


class MedicationAlert(BaseModel):
    type: Literal['medication_alert']
    user_id: str
    data: MedicationAlertData


class RefillReminder(BaseModel):
    type: Literal['refill_reminder']
    user_id: str
    data: RefillReminderData


NotificationRequest = AppointmentReminder | MedicationAlert | RefillReminder

REQUEST_MODELS: dict[str, type[BaseModel]] = {
    'appointment_reminder': AppointmentReminder,
    'medication_alert': MedicationAlert,
    'refill_reminder': RefillReminder,
}


class Recipient(BaseModel):
    email: str
    first_name: str | None = None


class RenderedEmail(BaseModel):
    subject: str
    html: str
