# config.py
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Base directory of the project
BASE_DIR = Path(__file__).parent.resolve()


class Settings(BaseSettings):
    """
    Settings for the parser and its command-line driver, loaded from the
    environment (ROBOT_LOG_LEVEL, ...) and an optional .env file.
    """
    model_config = SettingsConfigDict(
        env_prefix="ROBOT_",
        env_file=f"{BASE_DIR}/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging configuration
    log_level: str = "INFO"
    # No file logging unless a path is given
    log_file: Optional[Path] = None

    # Encoding used to read robot program files
    source_encoding: str = "utf-8"


settings = Settings()
