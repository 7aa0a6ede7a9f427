# upload_store/core/config.py
"""
Configuration Module
Application settings read from the environment, with upper- and lowercase attribute support
"""

import os
from pathlib import Path
from typing import List, Dict, Any


class Settings:
    """Application settings with both uppercase and lowercase attribute support"""

    # Application
    APP_NAME: str = os.getenv("APP_NAME", "Upload Store API")
    app_name: str = APP_NAME
    VERSION: str = os.getenv("VERSION", "1.0.0")
    version: str = VERSION
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    debug: bool = DEBUG

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    host: str = HOST
    PORT: int = int(os.getenv("PORT", "8000"))
    port: int = PORT

    # Storage
    STORAGE_ROOT: str = os.getenv("STORAGE_ROOT", "storage")
    storage_root: str = STORAGE_ROOT
    PUBLIC_BASE_PATH: str = os.getenv("PUBLIC_BASE_PATH", "/files")
    public_base_path: str = PUBLIC_BASE_PATH
    UPLOAD_TMP_DIR: str = os.getenv("UPLOAD_TMP_DIR", "tmp")
    upload_tmp_dir: str = UPLOAD_TMP_DIR

    # File Limits
    MAX_UPLOAD_SIZE: int = int(os.getenv("MAX_UPLOAD_SIZE", str(50 * 1024 * 1024)))
    max_upload_size: int = MAX_UPLOAD_SIZE
    max_upload_size_mb: int = MAX_UPLOAD_SIZE // (1024 * 1024)

    # Block size used when streaming files into the storage root
    COPY_CHUNK_SIZE: int = int(os.getenv("COPY_CHUNK_SIZE", str(1024 * 1024)))
    copy_chunk_size: int = COPY_CHUNK_SIZE

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    log_level: str = LOG_LEVEL
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    log_dir: str = LOG_DIR

    # Security
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    cors_origins: List[str] = CORS_ORIGINS

    # API Settings
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    API_PREFIX: str = api_prefix

    # Description
    description: str = "File upload storage API with per-media-type file managers"

    @classmethod
    def create_directories(cls) -> None:
        """Create necessary directories"""
        for dir_path in [
            cls.STORAGE_ROOT,
            cls.UPLOAD_TMP_DIR,
            cls.LOG_DIR,
        ]:
            Path(dir_path).mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_settings_dict(cls) -> Dict[str, Any]:
        """Get all settings as dictionary"""
        result = {}
        for key in dir(cls):
            if key.startswith("_"):
                continue
            val = getattr(cls, key)
            if callable(val):
                continue
            result[key] = val
        return result

    def __getattr__(self, name: str):
        """
        Fallback for missing attributes - try uppercase/lowercase variants.
        """
        upper_name = name.upper()
        if hasattr(Settings, upper_name):
            return getattr(Settings, upper_name)

        lower_name = name.lower()
        if hasattr(Settings, lower_name):
            return getattr(Settings, lower_name)

        public_keys = [k for k in dir(Settings) if not k.startswith("_")]
        raise AttributeError(
            f"Settings has no attribute '{name}'. Available settings: {', '.join(public_keys)}"
        )


# Global settings instance
settings = Settings()

# Create directories on import
settings.create_directories()
