"""
Job Board API - Main Application

FastAPI backend with:
- MongoDB for users, jobs and applications
- JWT authentication carried in an HTTP-only cookie
- Resume uploads (PNG/JPEG/WebP) served from /uploads

Run: uvicorn jobboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient

from jobboard.api import api_router
from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import register_error_handlers
from jobboard.db.mongodb import MongoConnection
from jobboard.services.storage import LocalResumeStorage, ResumeStorage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, prepare the upload dir and connect to MongoDB on startup."""
    settings: Settings = app.state.settings
    mongo: MongoConnection = app.state.mongo
    configure_logging(settings)
    logger.info("Starting Job Board API...")

    storage = app.state.resume_storage
    if isinstance(storage, LocalResumeStorage):
        storage.ensure_root()

    # A failed connection is logged inside connect(); the API still starts
    mongo.connect()
    yield
    logger.info("Shutting down...")
    mongo.close()


def create_app(
    settings: Optional[Settings] = None,
    mongo_client: Optional[MongoClient] = None,
    storage: Optional[ResumeStorage] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: defaults to get_settings() (environment / .env)
        mongo_client: pre-built client, e.g. mongomock in tests
        storage: resume storage backend, defaults to LocalResumeStorage
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Job Board API",
        description="""
        Job board backend.

        ## Features
        - **Users**: register/login as Job Seeker or Employer (cookie-based JWT)
        - **Jobs**: employers post, update and delete jobs; anyone lists active jobs
        - **Applications**: job seekers apply with a resume image; employers see applications to their jobs
        """,
        version="1.0.0",
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.mongo = MongoConnection(settings, client=mongo_client)

    local_storage = None
    if storage is None:
        local_storage = LocalResumeStorage(settings.upload_dir, settings.upload_url_prefix)
        storage = local_storage
    app.state.resume_storage = storage

    # Cookies need an explicit origin, "*" is not allowed with credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    # Serve stored resumes; the directory is created on startup
    if local_storage is not None:
        app.mount(
            settings.upload_url_prefix,
            StaticFiles(directory=str(local_storage.root), check_dir=False),
            name="uploads",
        )

    @app.get("/health", tags=["Health"])
    def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "mongodb": "connected" if app.state.mongo.ping() else "disconnected",
        }

    return app


app = create_app()
