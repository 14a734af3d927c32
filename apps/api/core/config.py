"""Application configuration.

Values come from the process environment, optionally seeded from a ``.env``
file at the repo root. Paths default to locations relative to the repo root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Repo root is three levels up from apps/api/core/
REPO_ROOT = Path(__file__).resolve().parent.parent.parent.parent
load_dotenv(REPO_ROOT / ".env")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# Third-party packages the prediction service needs, installed in this order.
PREDICTION_PACKAGES: tuple[str, ...] = ("flask", "flask-cors", "numpy", "joblib", "scikit-learn")


@dataclass(frozen=True)
class Settings:
    app_name: str = "GramSeva AI API"
    version: str = "1.0.0"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 3001)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_allow_origins: list[str] = field(default_factory=lambda: _env_list("CORS_ALLOW_ORIGINS", "*"))
    data_dir: Path = Path(os.getenv("GRAMSEVA_DATA_DIR", str(REPO_ROOT / "data")))

    # External prediction service
    prediction_host: str = os.getenv("PREDICTION_HOST", "localhost")
    prediction_port: int = _env_int("PREDICTION_PORT", 5000)
    prediction_dir: Path = Path(os.getenv("PREDICTION_DIR", str(REPO_ROOT / "Future Prediction")))
    prediction_python: str = os.getenv("PREDICTION_PYTHON", "python")
    prediction_probe_timeout: float = _env_float("PREDICTION_PROBE_TIMEOUT", 2.0)
    prediction_settle_delay: float = _env_float("PREDICTION_SETTLE_DELAY", 5.0)
    prediction_settle_timeout: float = _env_float("PREDICTION_SETTLE_TIMEOUT", 10.0)
    prediction_timeout: float = _env_float("PREDICTION_TIMEOUT", 30.0)

    # Realtime farmer feed
    broadcast_interval: float = _env_float("BROADCAST_INTERVAL", 30.0)

    @property
    def prediction_base_url(self) -> str:
        return f"http://{self.prediction_host}:{self.prediction_port}"


settings = Settings()
