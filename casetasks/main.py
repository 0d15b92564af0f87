# casetasks/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from casetasks.config import Settings
from casetasks.database import Database
from casetasks.logging_setup import setup_logging
from casetasks.routers import auth, tasks
from casetasks.schemas.base import ErrorResponse
from casetasks.services.credentials import CredentialService
from casetasks.utils.responses import register_exception_handlers

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    404: {"model": ErrorResponse, "description": "Not found or not owned by the caller"},
    409: {"model": ErrorResponse, "description": "Email already in use"},
}


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API with its collaborators attached to ``app.state``.

    Nothing is read from module globals: the secret, the engine and the
    credential service all hang off the app instance, so tests can build as
    many isolated apps as they like.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    database = database or Database.from_settings(settings)
    database.create_all()

    app = FastAPI(title="Caseworker Task Manager API")
    app.state.settings = settings
    app.state.database = database
    app.state.credentials = CredentialService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Route registration
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"], responses=ERROR_RESPONSES)
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"], responses=ERROR_RESPONSES)

    @app.get("/health")
    def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.environment,
        }

    logger.info("Task Manager API ready (environment=%s)", settings.environment)
    return app
