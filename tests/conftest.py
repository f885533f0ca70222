import os
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from careflow.core.config import Settings  # noqa: E402
from careflow.database import Base  # noqa: E402
from careflow.models.appointment import Appointment  # noqa: E402
from careflow.models.profile import Profile  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret_key='careflow-test-secret-0123456789abcdef',
        video_provider_key='daily-test-key',
        email_provider_key='resend-test-key',
    )


@pytest.fixture
def portal_db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[Appointment.__table__, Profile.__table__])

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=[Appointment.__table__, Profile.__table__])


@pytest.fixture
def owned_appointment(portal_db) -> Appointment:
    appointment = Appointment(
        id='appt-123',
        user_id='user-a',
        doctor_name='Dr. Rivera',
        doctor_specialty='Cardiology',
        appointment_date=date(2026, 3, 9),
        appointment_time='2:30 PM',
        appointment_type='Consultation',
        status='scheduled',
        is_telemedicine=True,
    )
    portal_db.add(appointment)
    portal_db.commit()
    portal_db.refresh(appointment)
    return appointment
