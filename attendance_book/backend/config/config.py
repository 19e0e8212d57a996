import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Settings read straight from environment variables (and an optional .env file).
    """
    # Storage: professors.json / students.json live in STORE_ROOT,
    # snapshots under STORE_ROOT/DATA_DIR_NAME/<professor>/<date>.json
    STORE_ROOT: str = os.environ.get("STORE_ROOT", "public")
    DATA_DIR_NAME: str = os.environ.get("DATA_DIR_NAME", "data")

    # Server
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", 3001))
    CORS_ORIGINS: list = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Logging
    LOG_DIR: str = os.environ.get("LOG_DIR", "logs")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = _as_bool(os.environ.get("RATE_LIMIT_ENABLED", "true"))
    DEFAULT_RATE_LIMIT: str = os.environ.get("DEFAULT_RATE_LIMIT", "120/minute")
    RATE_LIMITER_STORAGE_URI: str = os.environ.get("RATE_LIMITER_STORAGE_URI", "memory://")

# Single importable settings instance
settings = Config()
