"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and error mapping."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from soundshare.api.v1 import router as api_router
from soundshare.core.config import Settings, settings
from soundshare.core.database import create_db_engine, create_session_factory
from soundshare.core.errors import SoundshareError
from soundshare.services.storage import (
    UPLOAD_TARGETS,
    LocalStorageBackend,
    UploadKind,
    build_storage,
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Open the engine and storage backend at startup; dispose the engine at shutdown.

    With local storage the upload directories are created here, before the
    static mounts can receive a request.
    """
    app_settings: Settings = app.state.settings
    engine = create_db_engine(app_settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    storage = build_storage(app_settings)
    if isinstance(storage, LocalStorageBackend):
        storage.ensure_directories()
    app.state.storage = storage
    logger.info(
        "Started: env=%s storage=%s", app_settings.APP_ENV, app_settings.STORAGE_BACKEND
    )
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


async def handle_soundshare_error(request: Request, exc: SoundshareError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def create_app(app_settings: Settings) -> FastAPI:
    """Build the application for the given settings."""
    app = FastAPI(
        title="Soundshare API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SoundshareError, handle_soundshare_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    if app_settings.STORAGE_BACKEND == "local":
        # Directories are created in lifespan, after the mounts are declared.
        for kind in UploadKind:
            directory = UPLOAD_TARGETS[kind].directory
            app.mount(
                f"/{directory}",
                StaticFiles(
                    directory=f"{app_settings.UPLOAD_ROOT}/{directory}", check_dir=False
                ),
                name=directory,
            )
    return app


app = create_app(settings)
