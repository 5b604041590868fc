"""Backend configuration (small + easy to read).

We keep this intentionally simple:
- read env vars (optionally via .env)
- expose a cached `get_settings()` function
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except Exception:
        return default


@dataclass(frozen=True)
class Settings:
    # App
    app_name: str = "Lesson Feedback API"
    log_level: str = "INFO"
    cors_allow_origins: str = "*"  # comma-separated or "*"
    host: str = "0.0.0.0"
    port: int = 4000

    # Storage
    feedback_store: str = "mongodb"  # "mongodb" | "memory"
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "feedback_form"
    mongodb_collection: str = "feedbacks"
    store_wait_seconds: int = 30

    # Feedback API
    recent_feedback_limit: int = 20
    max_body_bytes: int = 200 * 1024

    def allowed_origins(self) -> list[str]:
        origins_raw = (self.cors_allow_origins or "*").strip()
        if origins_raw == "*":
            return ["*"]
        origins = [o.strip() for o in origins_raw.split(",") if o.strip()]
        return origins or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once (cached)."""
    load_dotenv()

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 4000),
        feedback_store=os.getenv("FEEDBACK_STORE", "mongodb").strip().lower(),
        mongodb_uri=os.getenv("MONGODB_URI"),
        mongodb_db=os.getenv("MONGODB_DB", "feedback_form"),
        mongodb_collection=os.getenv("MONGODB_COLLECTION", "feedbacks"),
        store_wait_seconds=_env_int("STORE_WAIT_SECONDS", 30),
        recent_feedback_limit=_env_int("RECENT_FEEDBACK_LIMIT", 20),
        max_body_bytes=_env_int("MAX_BODY_BYTES", 200 * 1024),
    )
