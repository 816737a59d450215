# config.py
from dataclasses import dataclass

from pydantic_settings import BaseSettings


@dataclass
class Config:
    """Holds all application configuration."""
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.0-flash"
    HTTP_TIMEOUT: float = 30.0
    LOG_LEVEL: str = "INFO"


class Credentials(BaseSettings):
    """API keys, read from the environment or a local .env file."""
    omdb_api_key: str = ""
    gemini_api_key: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}
