"""FastAPI application entry point."""

import logging

from fastapi import FastAPI

from api import preferences, users
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Preferences",
    description="Typed per-user preferences with defaults and scoped overrides",
    version="0.1.0",
)

# Include API routers
app.include_router(users.router)
app.include_router(preferences.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
