from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    PROJECT_NAME: str = "AI Doodle"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server Settings
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # External APIs
    # Left empty when unset; the Gemini client fails on first use instead of at startup
    GEMINI_API_KEY: str = ""

    # Model Configuration
    EDIT_MODEL: str = "gemini-2.0-flash-exp-image-generation"
    EDIT2_MODEL: str = "gemini-2.0-flash-exp"

    # Operator policy: send BLOCK_NONE for every harm category
    DISABLE_SAFETY_FILTERS: bool = True

    # Response extraction: last matching part of each kind wins unless set
    KEEP_FIRST_MATCH: bool = False

    # Local copies of generated images (/edit only)
    PERSIST_EDITED_IMAGES: bool = True
    SAVE_DIR: str = "generated"

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000"
    ]

@lru_cache
def get_settings() -> Settings:
    return Settings()
