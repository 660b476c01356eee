"""Deployment settings for the hotseat backend.

Game rules live in skyjo.GameConfig; this only covers what depends on
where the service runs.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        return default


@dataclass
class BackendSettings:
    """Environment / deployment settings."""

    auto_advance_seconds: float = 1.0  # 0 disables the deferred end-turn
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BackendSettings":
        """Build settings from SKYJO_* environment variables."""
        origins = os.getenv("SKYJO_CORS_ORIGINS", "*")
        return cls(
            auto_advance_seconds=_float_env("SKYJO_AUTO_ADVANCE_SECONDS", 1.0),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            log_level=os.getenv("SKYJO_LOG_LEVEL", "INFO").upper(),
        )


def get_settings() -> BackendSettings:
    return BackendSettings.from_env()
