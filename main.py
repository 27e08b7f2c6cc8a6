"""
Main FastAPI application entry point.
"""
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables
load_dotenv()

from config import ConfigurationError, Settings, get_settings, resolve_database_url
from deps import get_app_settings, get_store
from alembic_runner import run_migrations
from Store_module.record_store import RecordStore
from Utils.body_limit import BodySizeLimitMiddleware
from Utils.cors_policy import select_cors_policy
from Utils.datetime_utils import now_utc, to_utc_isoformat
from Utils.error_middleware import UnhandledErrorMiddleware
from Utils.request_logging import RequestLoggingMiddleware

# Routers
from Enquiry_module.Enquiry_router import router as enquiry_router
from Appointment_module.Appointment_router import router as appointment_router

logger = logging.getLogger(__name__)

try:
    import resource
except ImportError:  # not available on Windows
    resource = None

SUBMISSION_ENDPOINTS = {
    "enquiry": "/api/enquiry",
    "appointment": "/api/appointment",
    "enquiries": "/api/enquiries",
    "appointments": "/api/appointments",
}

ROOT_ENDPOINTS = {
    "health": "/health",
    "submitEnquiry": "POST /api/enquiry",
    "submitAppointment": "POST /api/appointment",
    "getEnquiries": "GET /api/enquiries",
    "getAppointments": "GET /api/appointments",
}

AVAILABLE_ENDPOINTS = {
    "root": "GET /",
    "health": "GET /health",
    "submitEnquiry": "POST /api/enquiry",
    "submitAppointment": "POST /api/appointment",
    "getEnquiries": "GET /api/enquiries",
    "getAppointments": "GET /api/appointments",
}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )


def initialize_database(store: RecordStore) -> None:
    """
    Connect the record store and bring the schema up to date.
    Connection errors are logged; the service still starts and reports
    the store as disconnected on /health.
    """
    if not store.connect():
        logger.warning("Record store unreachable at startup; requests will fail until it recovers")
        return

    try:
        run_migrations(store.engine)
    except Exception as e:
        logger.error(f"Migrations failed, creating tables from models instead: {e}")
        try:
            store.create_schema()
        except Exception as e:
            logger.error(f"Unexpected error creating tables: {e}", exc_info=True)


def _memory_usage() -> Optional[dict]:
    if resource is None:
        return None
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {"maxRssKb": usage.ru_maxrss}


def _log_startup_banner(settings: Settings, store: RecordStore) -> None:
    base_url = f"http://{settings.HOST}:{settings.PORT}"
    logger.info("=" * 60)
    logger.info(f"{settings.SERVICE_NAME} ({settings.ENVIRONMENT})")
    logger.info(f"Server running at:   {base_url}")
    logger.info(f"Health check:        {base_url}/health")
    logger.info(f"Submit enquiry:      {base_url}/api/enquiry")
    logger.info(f"Submit appointment:  {base_url}/api/appointment")
    logger.info(f"Database status:     {store.connection_state.value}")
    logger.info("=" * 60)


def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the application.

    The record store is created here (or passed in) and attached to
    app.state so routers receive it through deps.get_store.
    """
    settings = settings or get_settings()
    if store is None:
        store = RecordStore(
            resolve_database_url(settings),
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    cors_policy = select_cors_policy(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown."""
        logger.info("Starting application...")
        initialize_database(store)
        _log_startup_banner(settings, store)
        yield
        logger.info("Shutting down server...")
        store.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.cors_policy = cors_policy
    app.state.started_at = time.monotonic()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unmatched method+path pairs all answer with the endpoint directory
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Endpoint not found",
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        content = {"error": exc.detail}
        if exc.status_code == status.HTTP_400_BAD_REQUEST:
            content["code"] = "invalid_body"
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    # Middleware: the last one added runs first, so CORS wraps every response
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(UnhandledErrorMiddleware, expose_details=not settings.is_production)
    cors_policy.install(app)

    app.include_router(enquiry_router)
    app.include_router(appointment_router)

    @app.get("/")
    def root(app_settings: Settings = Depends(get_app_settings)):
        """Root endpoint with API information."""
        return {
            "message": app_settings.SERVICE_NAME,
            "version": app_settings.SERVICE_VERSION,
            "endpoints": ROOT_ENDPOINTS,
            "cors": cors_policy.summary(),
            "documentation": "See /health for detailed status",
        }

    @app.get("/health")
    def health_check(
        request: Request,
        app_settings: Settings = Depends(get_app_settings),
        record_store: RecordStore = Depends(get_store),
    ):
        """Health check; always 200, store degradation is reported in the body."""
        body = {
            "status": "OK",
            "timestamp": to_utc_isoformat(now_utc()),
            "database": "connected" if record_store.is_connected else "disconnected",
            "endpoints": SUBMISSION_ENDPOINTS,
        }
        if app_settings.HEALTH_VERBOSE:
            body["environment"] = app_settings.ENVIRONMENT
            body["uptime"] = round(time.monotonic() - request.app.state.started_at, 3)
            memory = _memory_usage()
            if memory is not None:
                body["memory"] = memory
        return body

    return app


configure_logging(get_settings().LOG_LEVEL)

try:
    app = create_app()
except ConfigurationError as e:
    logger.critical(f"Fatal configuration error: {e}")
    sys.exit(1)


# Run application
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
    )
