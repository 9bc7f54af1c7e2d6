import logging
import traceback
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from educalendar.api.announcements.router import router as announcements_router
from educalendar.api.app_settings.router import router as app_settings_router
from educalendar.api.auth.router import router as auth_router
from educalendar.api.events.router import router as events_router
from educalendar.api.notes.router import router as notes_router
from educalendar.api.payments.router import router as payments_router
from educalendar.api.students.router import router as students_router
from educalendar.core.config import Settings, load_settings
from educalendar.core.exceptions import ServiceError
from educalendar.core.identifiers import utc_timestamp
from educalendar.core.logging import configure_logging
from educalendar.db.session import open_store
from educalendar.db.store import DocumentStore

logger = logging.getLogger(__name__)

SERVICE_NAME = "EduCalendar API"


def error_body(message: str, details: Optional[List[str]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return messages


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body("Invalid request body", _format_validation_errors(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        body = error_body("Internal server error")
        if settings.debug:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=body)


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = await open_store(settings)
        logger.info("%s started (env=%s, origins=%s)", SERVICE_NAME, settings.app_env, settings.allowed_origins)
        yield
        if owns_store:
            await app.state.store.close()
            app.state.store = None

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app, settings)

    # Routers
    app.include_router(auth_router)
    app.include_router(students_router)
    app.include_router(events_router)
    app.include_router(payments_router)
    app.include_router(notes_router)
    app.include_router(announcements_router)
    app.include_router(app_settings_router)

    @app.get("/health", tags=["health"])
    @app.get("/api/health", tags=["health"], include_in_schema=False)
    async def health() -> Dict[str, str]:
        return {"status": "ok", "timestamp": utc_timestamp(), "service": SERVICE_NAME}

    @app.get("/", include_in_schema=False)
    async def root() -> Dict[str, str]:
        return {"message": SERVICE_NAME}

    return app


app = create_app()
