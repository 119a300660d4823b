"""Main application entry point with FastAPI."""

import logging
import sys
import threading
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel, Field, ValidationError, field_validator

from . import claude_service
from .claude_service import DescribeError, _log_namer, normalize_media_type
from .config import get_settings
from .database import SessionLocal, check_database_health, dispose_engine, init_db
from .learner import record_acceptance
from .name_generator import NameStrategy, build_name_strategy, suggest_names
from .storage import HistoryEntry, HistoryStore, PreferenceStore, StorageError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

INVALID_IMAGE_MESSAGE = "No valid image file uploaded. Please upload a JPEG, PNG, GIF, or WebP image."

# Acceptances load, learn and save; one at a time per process
_acceptance_lock = threading.Lock()


def validate_environment():
    """Validate environment variables on startup."""
    try:
        loaded = get_settings()
        logger.info("Environment variables validated successfully")
        return loaded
    except ValidationError as e:
        logger.error("ERROR: Invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    logger.info("Starting Dish Namer...")

    loaded = validate_environment()
    init_db()

    if loaded.claude_enabled:
        logger.info(f"Claude naming enabled ({loaded.claude_model})")
    else:
        logger.info("No ANTHROPIC_API_KEY set - using built-in name generation")

    logger.info("Dish Namer started successfully")

    yield

    logger.info("Shutting down Dish Namer...")
    dispose_engine()
    logger.info("Dish Namer shutdown complete")


app = FastAPI(
    title="Dish Namer",
    description="Suggests names for a photographed dish and learns your taste",
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Dependencies
# =============================================================================


def get_preference_store() -> PreferenceStore:
    return PreferenceStore(SessionLocal, fail_loud=settings.fail_loud_persistence)


def get_history_store() -> HistoryStore:
    return HistoryStore(SessionLocal, fail_loud=settings.fail_loud_persistence)


def get_name_strategy() -> NameStrategy:
    generate_text = claude_service.generate_text if settings.claude_enabled else None
    return build_name_strategy(generate_text)


def get_describer():
    """Image description capability, or None when Claude is not configured."""
    return claude_service.describe_image if settings.claude_enabled else None


# =============================================================================
# Request Models
# =============================================================================


class SaveSelectionRequest(BaseModel):
    name: str = Field(min_length=1)
    image: str | None = None
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def check_not_blank(cls, v):
        """Reject whitespace-only names; the name itself is kept verbatim."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


# =============================================================================
# Routes
# =============================================================================


def _read_upload(image: UploadFile | None) -> tuple[bytes, str]:
    """Validate the uploaded image and return its bytes and media type."""
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail=INVALID_IMAGE_MESSAGE)

    media_type = normalize_media_type(image.content_type)
    if media_type is None:
        raise HTTPException(status_code=400, detail=INVALID_IMAGE_MESSAGE)

    data = image.file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Image is too large (10MB limit).")
    if not data:
        raise HTTPException(status_code=400, detail=INVALID_IMAGE_MESSAGE)
    return data, media_type


@app.post("/api/generate-names")
def generate_names(
    image: UploadFile | None = File(None),
    preference_store: PreferenceStore = Depends(get_preference_store),
    strategy: NameStrategy = Depends(get_name_strategy),
    describer=Depends(get_describer),
):
    """Suggest three names for an uploaded dish photo.

    The image is only held in memory for the description call.
    """
    data, media_type = _read_upload(image)

    description = None
    if describer is not None:
        try:
            description = describer(data, media_type)
        except DescribeError as e:
            _log_namer(f"Image description failed, naming without it: {e}", "warning")

    record = preference_store.load()
    names = suggest_names(description, record, strategy)
    return {"success": True, "names": names}


@app.post("/api/save-selection")
def save_selection(
    selection: SaveSelectionRequest,
    preference_store: PreferenceStore = Depends(get_preference_store),
    history_store: HistoryStore = Depends(get_history_store),
):
    """Record the accepted name and learn from it."""
    try:
        with _acceptance_lock:
            history_store.append(
                HistoryEntry(
                    name=selection.name,
                    image=selection.image,
                    suggestions=selection.suggestions,
                )
            )
            record = preference_store.load()
            updated = record_acceptance(selection.name, record, selection.suggestions)
            preference_store.save(updated)
    except StorageError as e:
        logger.error(f"Error in save-selection: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {"success": True}


@app.get("/api/history")
def get_history(history_store: HistoryStore = Depends(get_history_store)):
    """Accepted names, most recent first."""
    entries = history_store.recent()
    return {"success": True, "history": [entry.to_dict() for entry in entries]}


@app.get("/health")
def health_check():
    """Health check endpoint for the hosting platform.

    Verifies database connection and returns status.
    """
    db_healthy = check_database_health()

    if db_healthy:
        return {
            "status": "healthy",
            "database": "connected",
        }
    else:
        return {
            "status": "unhealthy",
            "database": "disconnected",
        }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Dish Namer",
        "status": "running",
        "version": "1.0.0",
        "claude": settings.claude_enabled,
    }
