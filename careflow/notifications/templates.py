"""HTML email templates, one per notification kind."""

from html import escape
from string import Template

from careflow.notifications.schemas import (
    AppointmentReminder,
    MedicationAlert,
    NotificationRequest,
    Recipient,
    RefillReminder,
    RenderedEmail,
)

SIGN_OFF = '<p>Best regards,<br>Your Healthcare Team</p>'

APPOINTMENT_REMINDER = Template("""
<h1>Appointment Reminder</h1>
<p>Dear $greeting_name,</p>
<p>This is a reminder about your upcoming appointment:</p>
<ul>
  <li><strong>Doctor:</strong> $doctor_name</li>
  <li><strong>Date:</strong> $appointment_date</li>
  <li><strong>Time:</strong> $appointment_time</li>
</ul>
<p>Please arrive 15 minutes early to complete any necessary paperwork.</p>
<p>If you need to reschedule, please contact us as soon as possible.</p>
<br>
$sign_off
""")

MEDICATION_ALERT = Template("""
<h1>Medication Reminder</h1>
<p>Dear $greeting_name,</p>
<p>This is a reminder to take your medication:</p>
<ul>
  <li><strong>Medication:</strong> $medication_name</li>
  <li><strong>Dosage:</strong> $dosage</li>
</ul>
<p>Remember to take your medication as prescribed by your doctor.</p>
<br>
$sign_off
""")

REFILL_REMINDER = Template("""
<h1>Prescription Refill Reminder</h1>
<p>Dear $greeting_name,</p>
<p>Your prescription is running low:</p>
<ul>
  <li><strong>Medication:</strong> $medication_name</li>
  <li><strong>Pills Remaining:</strong> $pills_remaining</li>$refill_date_line
</ul>
<p>Please request a refill or contact your doctor to renew your prescription.</p>
<br>
$sign_off
""")

REFILL_DATE_LINE = Template('\n  <li><strong>Refill Date:</strong> $refill_date</li>')


def _escaped(values: dict) -> dict:
    return {key: escape(str(value)) for key, value in values.items()}


def render(request: NotificationRequest, recipient: Recipient) -> RenderedEmail:
    common = {
        'greeting_name': escape(recipient.first_name or 'Patient'),
        'sign_off': SIGN_OFF,
    }

    if isinstance(request, AppointmentReminder):
        fields = _escaped(request.data.model_dump())
        return RenderedEmail(
            subject=f'Appointment Reminder - {request.data.doctor_name}',
            html=APPOINTMENT_REMINDER.substitute(common, **fields),
        )

    if isinstance(request, MedicationAlert):
        fields = _escaped(request.data.model_dump())
        return RenderedEmail(
            subject=f'Medication Reminder - {request.data.medication_name}',
            html=MEDICATION_ALERT.substitute(common, **fields),
        )

    if isinstance(request, RefillReminder):
        data = request.data
        refill_date_line = ''
        if data.refill_date:
            refill_date_line = REFILL_DATE_LINE.substitute(refill_date=escape(data.refill_date))
        return RenderedEmail(
            subject=f'Refill Reminder - {data.medication_name}',
            html=REFILL_REMINDER.substitute(
                common,
                medication_name=escape(data.medication_name),
                pills_remaining=data.pills_remaining,
                refill_date_line=refill_date_line,
            ),
        )

    raise TypeError(f'No template for {type(request).__name__}')
