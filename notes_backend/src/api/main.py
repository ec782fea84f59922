import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_database.db import Database
from notes_database.init_db import init_db

from .config import get_settings
from .errors import register_error_handlers
from .observability import setup_logging
from .routes_auth import router as auth_router
from .routes_notes import router as notes_router

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Authentication", "description": "User registration, login, and profile"},
    {"name": "Notes", "description": "Create, update, view, delete, search and tag notes"},
    {"name": "General", "description": "Service health"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Creates the schema on startup and releases connections on shutdown."""
    init_db(app.state.database)
    logger.info("Notes API started")
    yield
    if app.state.owns_database:
        app.state.database.dispose()
    logger.info("Notes API shutting down")


# PUBLIC_INTERFACE
def create_app(database=None, settings=None):
    """
    Builds the FastAPI application around an explicitly provided Database.

    Without arguments the database and settings come from the environment.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title="Personal Notes Backend API",
        description="Backend API for user auth and personal notes with ownership control, search and tag filtering.",
        version="1.0.0",
        openapi_tags=OPENAPI_TAGS,
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.owns_database = database is None
    app.state.database = database or Database(settings.DATABASE_URL)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Root Health Check
    @app.get("/", summary="Health Check", tags=["General"])
    def health_check():
        """Simple health check endpoint."""
        return {"message": "Healthy"}

    app.include_router(auth_router)
    app.include_router(notes_router)
    return app


# PUBLIC_INTERFACE
def run():
    """Console entry point: serve the app with uvicorn on PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=settings.PORT)
