"""
Application Configuration
This module centralizes all configuration for the trainboard application.
It uses Pydantic's BaseSettings to load settings from environment variables
and a .env file, providing validation and type hints.
"""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_DIRECTORY = Path(__file__).parent.parent
PACKAGE_DIRECTORY = Path(__file__).parent


class Settings(BaseSettings):
    """
    Application settings loaded from the environment and the .env file.

    Attributes:
        db (str): MongoDB connection string.
        port (int): Port the API server listens on.
        api_host (str): Host interface for the API server.
        app_env (str): Runtime environment name (e.g. 'dev', 'prod').
        static_dir (str): Directory holding the single-page application bundle.
        db_name (str): Database used when the connection string names none.
        db_fail_fast (bool): Refuse to start when the database is unreachable.
        db_timeout_ms (int): Server selection and socket timeout for the driver.
    """

    db: str = "mongodb://localhost:27017/trainboard"
    port: int = 4000

    api_host: str = "0.0.0.0"
    app_env: str = "prod"
    # Shipped as package data so installed copies can serve it
    static_dir: str = str(PACKAGE_DIRECTORY / "public")

    # MongoDB Configuration
    db_name: str = "trainboard"
    db_fail_fast: bool = True
    db_timeout_ms: int = 3000

    model_config = SettingsConfigDict(
        env_prefix="BACKEND__",
        env_nested_delimiter="__",
        env_file=PROJECT_DIRECTORY / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Single settings instance shared by the entry point
settings = Settings()
