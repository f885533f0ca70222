"""Appointment model definitions."""

import uuid

from sqlalchemy import Boolean, Column, Date, String
from careflow.database import Base


class Appointment(Base):
    """A booked visit. ``appointment_time`` holds the 12-hour display string, e.g. "2:30 PM"."""
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, index=True, nullable=False)
    doctor_name = Column(String)
    doctor_specialty = Column(String)
    appointment_date = Column(Date)
    appointment_time = Column(String)
    appointment_type = Column(String)
    status = Column(String, default="scheduled")
    is_telemedicine = Column(Boolean, default=False)
