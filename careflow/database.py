from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from careflow.core.config import Settings, get_settings


def build_database_url(settings: Settings):
    url = make_url(settings.data_store_url)
    if settings.data_store_key:
        url = url.set(password=settings.data_store_key)
    return url


engine = create_engine(build_database_url(get_settings()))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_appointment_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
        migration_steps = [
            ('doctor_specialty', 'ALTER TABLE appointments ADD COLUMN doctor_specialty VARCHAR'),
            ('is_telemedicine', 'ALTER TABLE appointments ADD COLUMN is_telemedicine BOOLEAN DEFAULT FALSE'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_user_date ON appointments(user_id, appointment_date)')
            )

        _appointment_schema_checked = True
