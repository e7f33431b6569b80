from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Tarot Deck Studio"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "postgresql+asyncpg://localhost:5432/tarotdeck"

    # Raw upload bytes are written here and served back under upload_url_prefix
    upload_dir: Path = Path("uploads")
    upload_url_prefix: str = "/uploads"

    # Create the Rider-Waite Classic deck on startup when no decks exist
    seed_default_deck: bool = True


settings = Settings()


# =============================================================================
# UPLOAD LIMITS
# =============================================================================

# Per-file size limit, enforced before files reach the ingestion pipeline
MAX_UPLOAD_BYTES = 5 * 1024 * 1024

# One full tarot deck
MAX_BULK_FILES = 78

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
