import os
import tempfile

# Keep runtime data out of the repo; must be set before core.config is imported.
os.environ.setdefault("GRAMSEVA_DATA_DIR", tempfile.mkdtemp(prefix="gramseva_test_"))
os.environ.setdefault("PREDICTION_PORT", "59999")

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from dependencies import get_leak_store, get_prediction_manager
from main import app
from prediction.manager import PredictionProcessManager
from storage.leaks import LeakReportStore


@pytest.fixture
def leak_store(tmp_path: Path) -> LeakReportStore:
    return LeakReportStore(tmp_path / "data" / "waterComplaints.txt")


@pytest.fixture
def prediction_manager(tmp_path: Path) -> PredictionProcessManager:
    return PredictionProcessManager(
        base_url="http://127.0.0.1:59999",
        service_dir=tmp_path,
        python="python-test",
        packages=["flask", "numpy"],
        log_path=tmp_path / "prediction-server.log",
        settle_delay=0,
    )


@pytest.fixture
def client(leak_store, prediction_manager):
    app.dependency_overrides[get_leak_store] = lambda: leak_store
    app.dependency_overrides[get_prediction_manager] = lambda: prediction_manager
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
