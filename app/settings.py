# app/settings.py
from __future__ import annotations

from pydantic import BaseModel
import os


class Settings(BaseModel):
    APP_NAME: str = "drawguess-sessions"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    # WebSocket origin policy (comma-separated)
    WS_ALLOWED_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,null"
    # Dev helper: allow any private LAN IP on port 5173
    WS_ALLOW_LAN_ORIGINS: bool = True

    # Game timing
    DRAWING_DURATION_MS: int = 10000
    PREPARATION_DELAY_MS: int = 5000
    MAX_ROUNDS: int = 3

    @property
    def drawing_duration_sec(self) -> float:
        return self.DRAWING_DURATION_MS / 1000

    @property
    def preparation_delay_sec(self) -> float:
        return self.PREPARATION_DELAY_MS / 1000


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y", "on")


def get_settings() -> Settings:
    return Settings(
        APP_NAME=os.getenv("APP_NAME", "drawguess-sessions"),
        HOST=os.getenv("HOST", "0.0.0.0"),
        PORT=int(os.getenv("PORT", "8000")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        LOG_DIR=os.getenv("LOG_DIR", ""),

        WS_ALLOWED_ORIGINS=os.getenv(
            "WS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,null",
        ),
        WS_ALLOW_LAN_ORIGINS=_env_bool("WS_ALLOW_LAN_ORIGINS", "true"),

        DRAWING_DURATION_MS=int(os.getenv("DRAWING_DURATION_MS", "10000")),
        PREPARATION_DELAY_MS=int(os.getenv("PREPARATION_DELAY_MS", "5000")),
        MAX_ROUNDS=int(os.getenv("MAX_ROUNDS", "3")),
    )
