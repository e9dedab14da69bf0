from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class Settings:
    session_secret: str = os.getenv("SESSION_SECRET", "friendnet-secret-change-in-production")
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: tuple[str, ...] = tuple(
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    )
    max_recommendations: int = 5
    search_limit: int = 10

    def __post_init__(self) -> None:
        # logging only knows upper-case level names
        object.__setattr__(self, "log_level", self.log_level.strip().upper())


DEFAULT_SETTINGS = Settings()
