"""FastAPI application factory: blob proxy plus the user/event JSON API."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from roster.core.config import Settings, get_settings
from roster.core.errors import RosterError
from roster.core.logging_config import setup_logging
from roster.repositories import CollectionStore, EventRepository, UserRepository
from roster.routers import blob as blob_router
from roster.routers import events as events_router
from roster.routers import users as users_router
from roster.services import EventService, UserService
from roster.storage import ObjectStore, build_object_store

DEV_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
}


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    logger.warning("{} {} failed: [{}] {}", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse({"success": False, "error": exc.message}, status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse({"success": False, "error": details or "Invalid request"}, status_code=400)


def create_app(settings: Optional[Settings] = None, object_store: Optional[ObjectStore] = None) -> FastAPI:
    """Build the app; compatible with ``uvicorn --factory roster.app:create_app``."""
    settings = settings or get_settings()
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=Path(settings.log_file) if settings.log_file else None,
    )

    store = object_store or build_object_store(settings)
    collections = CollectionStore(store)
    users = UserRepository(collections, settings.users_key)
    events = EventRepository(collections, settings.events_key)

    app = FastAPI(title="Event Roster API")
    app.state.settings = settings
    app.state.object_store = store
    app.state.user_service = UserService(users)
    app.state.event_service = EventService(events, users)

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(DEV_ORIGINS),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_exception_handler(RosterError, roster_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    app.include_router(blob_router.router)
    app.include_router(users_router.router)
    app.include_router(events_router.router)

    logger.info("Roster API ready (storage backend: {})", settings.storage_backend)
    return app
