# worker/app/config.py
from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve repo root: repo/ (since this file is repo/worker/app/config.py)
REPO_ENV = Path(__file__).resolve().parents[2] / ".env"

DEFAULT_PROMPT = (
    "You are an assistant for the visually impaired. "
    "Answer concisely for someone who is visually impaired. "
    "Write an alt-text for this image. "
    "Your response should be one or two sentences. "
    "Just state what you see descriptively."
)


class Settings(BaseSettings):
    """
    Central config for the alt-text service. Uses Pydantic v2 + pydantic-settings.

    - Loads env from the repo root .env if present
    - Ignores unknown env vars
    - Case-insensitive env keys
    - Defaults match the stock `ollama run llava` setup
    """

    model_config = SettingsConfigDict(
        env_file=str(REPO_ENV),
        extra="ignore",
        case_sensitive=False,  # allow OLLAMA_BIN or ollama_bin, etc.
    )

    # --- External captioning process -----------------------------------------
    OLLAMA_BIN: str = "ollama"
    DEFAULT_MODEL: str = "llava"
    ALT_TEXT_PROMPT: str = DEFAULT_PROMPT

    # --- Sampling -------------------------------------------------------------
    DEFAULT_COUNT: int = 3

    # --- Server ---------------------------------------------------------------
    # Kept as a string; validated as numeric before the server starts.
    PORT: str = "8080"
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000"

    # --- Telemetry ------------------------------------------------------------
    LOG_DIR: str = "data/logs"
    MAX_LOG_MB: int = 16

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Singleton-style instance used by the app/tests
settings = Settings()
