"""
FastAPI application for Absorbey.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import config
from app.api.routes import router
from app.db.database import init_db
from app.utils.caching import setup_redis_cache
from app.utils.error_handling import AbsorbeyError, InvalidYouTubeURLError
from app.utils.logger import logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and connect the cache before serving."""
    init_db()
    logging.info("Database initialized")

    if config.REDIS_URL:
        setup_redis_cache(config.REDIS_URL)

    logging.info(f"{config.APP_NAME} API server v{config.APP_VERSION} ready")
    logging.info(f"Anthropic API key: {'set' if config.ANTHROPIC_API_KEY else 'missing'}")
    logging.info(f"Firebase auth: {'enabled' if config.firebase_enabled() else 'disabled'}")
    yield


app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="An API for turning YouTube videos into summaries and quizzes",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request and report its duration in ``X-Process-Time``."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started

    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    logging.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.2f}s)")
    return response


@app.exception_handler(AbsorbeyError)
async def absorbey_exception_handler(request: Request, exc: AbsorbeyError):
    """Map domain errors to ``{"error": message}`` responses."""
    status_code = 400 if isinstance(exc, InvalidYouTubeURLError) else 500

    logging.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and answer with a 500."""
    logging.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": f"An unexpected error occurred: {exc}"},
    )


app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": "Absorbey API",
    }


@app.get("/health")
async def health():
    """Report which external services are configured."""
    return {
        "status": "ok",
        "anthropic_api_key": bool(config.ANTHROPIC_API_KEY),
        "youtube_api_key": bool(config.YOUTUBE_API_KEY),
        "firebase_auth": config.firebase_enabled(),
        "redis_cache": bool(config.REDIS_URL),
    }
