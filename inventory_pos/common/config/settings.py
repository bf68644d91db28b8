"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    # Storage backend selected at startup: "mysql" (remote) or "local" (JSON files on disk)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "local")

    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_DATABASE: str = os.getenv("DB_NAME", "inventory_pos_db")
    DB_USER: str = os.getenv("DB_USER", "user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")

    LOCAL_STORE_DIR: str = os.getenv("LOCAL_STORE_DIR", "data")

    IMAGE_STORE_BASE_URL: Optional[str] = os.getenv("IMAGE_STORE_BASE_URL")
    IMAGE_STORE_TOKEN: Optional[str] = os.getenv("IMAGE_STORE_TOKEN")
    IMAGE_STORE_BUCKET: str = os.getenv("IMAGE_STORE_BUCKET", "article_images")
    LOCAL_IMAGE_DIR: str = os.getenv("LOCAL_IMAGE_DIR", os.path.join("data", "images"))

    EXPORT_DIR: str = os.getenv("EXPORT_DIR", "exports")

    # Used only until an admin PIN has been saved by the settings service
    DEFAULT_ADMIN_PIN: str = os.getenv("DEFAULT_ADMIN_PIN", "0000")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
