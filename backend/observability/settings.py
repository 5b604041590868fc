"""OpenTelemetry settings (simple, env-driven)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except Exception:
        return default


@dataclass(frozen=True)
class OTelSettings:
    enabled: bool = field(default_factory=lambda: _env_bool("OTEL_ENABLED", False))
    service_name: str = field(default_factory=lambda: os.getenv("OTEL_SERVICE_NAME", "lesson-feedback-backend"))
    otlp_endpoint: str = field(
        default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    )
    sample_rate: float = field(default_factory=lambda: _env_float("OTEL_SAMPLE_RATE", 1.0))


def get_settings() -> OTelSettings:
    return OTelSettings()
