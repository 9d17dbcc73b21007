"""
FastAPI application for the YouTube transcript cleaner.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import config
from app.api.routes import router
from app.utils.error_handling import register_exception_handlers
from app.utils.logger import logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report missing configuration once at startup."""
    config.initialize()
    logging.info(f"{config.APP_NAME} v{config.APP_VERSION} started")
    yield


# FastAPI application
app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="An API for fetching YouTube transcripts and cleaning them into articles",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Middleware to add processing time header to responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


register_exception_handlers(app)

# Include API router
app.include_router(router)


# Root
@app.get("/")
async def root():
    """Root endpoint returning basic API information."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": config.APP_DESCRIPTION,
    }
