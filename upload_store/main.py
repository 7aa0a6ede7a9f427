# ================================
# FILE: upload_store/main.py
# ================================
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from upload_store.api.dependencies import get_dir_manager
from upload_store.api.routes import router
from upload_store.core.config import settings
from upload_store.core.logging_config import setup_logging
from upload_store.core.exception_handlers import register_exception_handlers
from upload_store.middleware.cors import cors_middleware_options
from upload_store.middleware.logging_middleware import LoggingMiddleware

setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Upload Store API starting up...")
    root = get_dir_manager().ensure()
    logger.info("Storing uploads in %s, served under %s", root, settings.public_base_path)
    try:
        yield
    finally:
        logger.info("Upload Store API shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description=settings.description,
    debug=settings.debug,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health checks"},
        {"name": "File Management", "description": "File upload and storage"},
    ],
)

# --- Add middleware (last added runs first) ---
if settings.cors_origins == ["*"]:
    logger.warning("CORS origins set to '*'; every request Origin will be echoed back.")
app.add_middleware(CORSMiddleware, **cors_middleware_options(settings.cors_origins))
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

app.include_router(router, prefix=settings.api_prefix, tags=["File Management"])

# Stored files are served from the storage root under the public base path
app.mount(
    get_dir_manager().path(),
    StaticFiles(directory=get_dir_manager().abs(), check_dir=False),
    name="files",
)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Upload Store API is running",
        "version": settings.version,
        "status": "operational",
        "docs_url": "/docs",
        "health_url": f"{settings.api_prefix}/health",
        "upload_url": f"{settings.api_prefix}/upload",
        "files_url": get_dir_manager().path(),
    }
