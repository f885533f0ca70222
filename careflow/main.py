import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from careflow.core.config import get_settings, validate_runtime_config
from careflow.core.errors import PortalError
from careflow.core.logging import setup_logging
from careflow.database import Base, engine, ensure_appointment_schema
from careflow.models import appointment, profile  # noqa: F401
from careflow.routes import calendar_routes, notification_routes, video_routes
from careflow.routes.responses import CORS_HEADERS

settings = get_settings()
setup_logging(settings)
validate_runtime_config(settings)

app = FastAPI(title='CareFlow Patient Portal API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=['*'],
    allow_headers=CORS_HEADERS['Access-Control-Allow-Headers'].split(', '),
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and credentials.')


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.get('/')
def root():
    return {'status': 'CareFlow API Running'}


app.include_router(calendar_routes.router, prefix='/appointments')
app.include_router(video_routes.router, prefix='/functions')
app.include_router(notification_routes.router, prefix='/functions')
