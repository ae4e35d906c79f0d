#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main FastAPI application setup for Tubelist.

Initializes the FastAPI application, sets up lifespan management for services,
registers middleware and error handlers, mounts static files, and includes API routes.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from version import __version__

from api import dependencies, routes
from config import config
from exceptions import GENERIC_ERROR_MESSAGE, APIConfigurationError
from logging_config import StructuredLogger
from middleware import RequestLoggingMiddleware
from services.engine import ChannelVideoEngine
from services.youtube_api import YouTubeAPIClient

logger = StructuredLogger(__name__)

# --- Lifespan Management ---

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the API client and engine once at startup. A missing API key does
    not stop the server; /api/videos then answers 500 until it is configured.
    """
    logger.info("Starting Tubelist FastAPI application lifespan...")

    if not config.API_KEY:
        logger.critical("YOUTUBE_API_KEY is not defined. Services will not be initialized.", exc_info=False)
        dependencies.api_client = None
        dependencies.video_engine = None
    else:
        try:
            dependencies.api_client = YouTubeAPIClient(config.API_KEY, settings=config)
            dependencies.video_engine = ChannelVideoEngine(api_client=dependencies.api_client)
            logger.info("Tubelist services initialized successfully.")
        except APIConfigurationError as api_err:
            logger.critical(f"API configuration error during startup: {api_err}")
            dependencies.api_client = None
            dependencies.video_engine = None

    yield

    logger.info("Shutting down Tubelist FastAPI application lifespan...")
    dependencies.api_client = None
    dependencies.video_engine = None


# --- FastAPI Application Instantiation ---

app = FastAPI(
    lifespan=lifespan,
    title="Tubelist API",
    description="Lists a YouTube channel's uploads with titles, durations and watch URLs, filtered into Shorts or long videos.",
    version=__version__
)

# --- Error Handlers ---
# Every error body has the shape {"error": "<message>"}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail) if exc.detail else GENERIC_ERROR_MESSAGE},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Request validation failed for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request parameters."},
        headers={"X-Error-Code": "INVALID_INPUT"}
    )

# --- Middleware Registration ---

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"]
)
app.add_middleware(RequestLoggingMiddleware)

# --- Static Files Mounting ---
static_dir = Path(__file__).parent / "static"
if static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    logger.info(f"Static files mounted from directory: {static_dir}")
else:
    logger.warning(f"Static files directory not found at expected location: {static_dir}. Static files will not be served.")

# --- API Router Inclusion ---
app.include_router(routes.router)

logger.info("FastAPI application setup complete.")
