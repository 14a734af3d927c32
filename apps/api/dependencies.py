"""Process-wide singletons shared by the routers.

Routers receive these through the getter functions so tests can swap them
with ``app.dependency_overrides``.
"""

from core.config import settings
from prediction.manager import PredictionProcessManager
from realtime.broadcaster import RealtimeBroadcaster
from storage.leaks import LeakReportStore
from storage.local import LocalStorage

# ── Singletons ────────────────────────────────────────────────────────────────
storage = LocalStorage()
leak_store = LeakReportStore(storage.leak_file)
prediction_manager = PredictionProcessManager(
    base_url=settings.prediction_base_url,
    service_dir=settings.prediction_dir,
    python=settings.prediction_python,
    log_path=storage.prediction_log,
    probe_timeout=settings.prediction_probe_timeout,
    settle_delay=settings.prediction_settle_delay,
    settle_timeout=settings.prediction_settle_timeout,
    predict_timeout=settings.prediction_timeout,
)
broadcaster = RealtimeBroadcaster(interval=settings.broadcast_interval)


def get_storage() -> LocalStorage:
    return storage


def get_leak_store() -> LeakReportStore:
    return leak_store


def get_prediction_manager() -> PredictionProcessManager:
    return prediction_manager


def get_broadcaster() -> RealtimeBroadcaster:
    return broadcaster
