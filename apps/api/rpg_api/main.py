"""FastAPI application entry point."""

from fastapi import FastAPI

from rpg_api.auth.firebase_admin import initialize_firebase
from rpg_api.config import get_settings
from rpg_api.routers.characters import router as characters_router
from rpg_api.utils.logging import configure_logging

settings = get_settings()

# Configure logging (must be called before other modules use loggers)
configure_logging(debug=settings.debug)

# Initialize Firebase Admin SDK
initialize_firebase()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

# Include routers
app.include_router(characters_router, prefix="/api")


@app.get("/")
async def root() -> dict:
    """Return application information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
