"""Supervisor and proxy for the external health-risk prediction service.

The prediction service is a separate Flask process listening on a fixed local
port. This module probes it, bootstraps it on demand (runtime check, package
installs one at a time, detached launch, settle re-probe) and forwards
prediction requests to it. Blocking calls run in worker threads so only the
calling request waits.
"""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import requests

from core.config import PREDICTION_PACKAGES

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/health-check"
PREDICT_PATH = "/predict"

# Timeout for a single `python --version` / `pip install` invocation
COMMAND_TIMEOUT = 600.0


class PredictionServerState(str, Enum):
    unknown = "unknown"
    checking = "checking"
    absent = "absent"
    starting = "starting"
    installing = "installing-dependencies"
    ready = "ready"
    failed = "failed"


class PredictionError(Exception):
    """Prediction call failed; ``message`` is safe to show to API clients."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class PredictionNotReadyError(PredictionError):
    def __init__(self) -> None:
        super().__init__("Prediction service is not ready")


class PredictionBootstrapError(PredictionError):
    """A bootstrap step failed. ``step`` names it: runtime, install, launch, settle."""

    def __init__(self, message: str, step: str, details: str | None = None):
        super().__init__(message, details)
        self.step = step


class PredictionProcessManager:
    def __init__(
        self,
        base_url: str,
        service_dir: Path,
        python: str = "python",
        packages: Sequence[str] = PREDICTION_PACKAGES,
        log_path: Path | None = None,
        probe_timeout: float = 2.0,
        settle_delay: float = 5.0,
        settle_timeout: float = 10.0,
        predict_timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_dir = Path(service_dir)
        self.python = python
        self.packages = list(packages)
        self.log_path = log_path
        self.probe_timeout = probe_timeout
        self.settle_delay = settle_delay
        self.settle_timeout = settle_timeout
        self.predict_timeout = predict_timeout

        self._state = PredictionServerState.unknown
        self._last_error: str | None = None
        self._process: subprocess.Popen | None = None
        self._bootstrap_lock = asyncio.Lock()

    @property
    def state(self) -> PredictionServerState:
        return self._state

    def _set_state(self, state: PredictionServerState, error: str | None = None) -> None:
        if state != self._state:
            logger.info("Prediction server state: %s -> %s", self._state.value, state.value)
        self._state = state
        if state == PredictionServerState.failed:
            self._last_error = error
        elif state == PredictionServerState.ready:
            self._last_error = None

    def describe(self) -> dict:
        pid = None
        if self._process is not None and self._process.poll() is None:
            pid = self._process.pid
        return {
            "state": self._state.value,
            "base_url": self.base_url,
            "pid": pid,
            "last_error": self._last_error,
        }

    # ── Liveness probe ────────────────────────────────────────────────────────

    def _probe_sync(self, timeout: float) -> dict | list | None:
        """GET the health-check path. Returns parsed JSON or None."""
        try:
            resp = requests.get(f"{self.base_url}{HEALTH_CHECK_PATH}", timeout=timeout)
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.debug("Prediction probe failed: %s", exc)
            return None

    async def _probe(self, timeout: float, track_state: bool = True) -> bool:
        if track_state:
            self._set_state(PredictionServerState.checking)
        payload = await asyncio.to_thread(self._probe_sync, timeout)
        ready = payload is not None
        if isinstance(payload, dict) and "status" in payload and payload["status"] != "ok":
            ready = False
        if track_state:
            self._set_state(PredictionServerState.ready if ready else PredictionServerState.absent)
        return ready

    async def check_status(self) -> str:
        """Return "ready" or "not_ready". Never raises."""
        try:
            # A bootstrap in flight owns the state until it finishes
            ready = await self._probe(self.probe_timeout, track_state=not self._bootstrap_lock.locked())
        except Exception:
            logger.exception("Unexpected error probing prediction server")
            ready = False
        return "ready" if ready else "not_ready"

    # ── Bootstrap ─────────────────────────────────────────────────────────────

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        cwd = self.service_dir if self.service_dir.is_dir() else None
        return subprocess.run(
            args, cwd=cwd, capture_output=True, text=True, timeout=COMMAND_TIMEOUT,
        )

    async def _check_runtime(self) -> None:
        try:
            result = await asyncio.to_thread(self._run, [self.python, "--version"])
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.error("Failed to start Python: %s", exc)
            raise PredictionBootstrapError(
                "Python is not installed or not accessible", step="runtime", details=str(exc),
            ) from exc

        if result.returncode != 0:
            logger.error("Python check failed with code: %s", result.returncode)
            raise PredictionBootstrapError(
                "Python is not installed or not accessible",
                step="runtime",
                details=result.stderr or None,
            )
        logger.info("Python check passed: %s", (result.stdout or result.stderr).strip())

    async def _install_package(self, pkg: str) -> None:
        logger.info("Installing %s...", pkg)
        args = [self.python, "-m", "pip", "install", "--no-cache-dir", pkg]
        try:
            result = await asyncio.to_thread(self._run, args)
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.error("Failed to run pip for %s: %s", pkg, exc)
            raise PredictionBootstrapError(
                f"Failed to install {pkg}. Please check if Python and pip are properly installed.",
                step="install",
                details=str(exc),
            ) from exc

        if result.returncode != 0:
            logger.error("Failed to install %s. Exit code: %s", pkg, result.returncode)
            logger.error("Install output:\n%s", result.stdout)
            logger.error("Error output:\n%s", result.stderr)
            raise PredictionBootstrapError(
                f"Failed to install {pkg}. Please check if Python and pip are properly installed.",
                step="install",
                details=result.stderr,
            )
        logger.debug("pip output for %s:\n%s", pkg, result.stdout)

    def _launch_sync(self) -> subprocess.Popen:
        env = {**os.environ, "PYTHONUNBUFFERED": "1"}
        output = subprocess.DEVNULL
        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            output = open(self.log_path, "ab")
        try:
            # New session so the service outlives this API process
            return subprocess.Popen(
                [self.python, "app.py"],
                cwd=self.service_dir,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=output,
                stderr=subprocess.STDOUT,
                start_new_session=True,
            )
        finally:
            if output is not subprocess.DEVNULL:
                output.close()

    async def _launch(self) -> None:
        logger.info("Starting prediction server in %s", self.service_dir)
        try:
            self._process = await asyncio.to_thread(self._launch_sync)
        except OSError as exc:
            logger.error("Failed to start prediction server: %s", exc)
            raise PredictionBootstrapError(
                "Failed to start prediction server", step="launch", details=str(exc),
            ) from exc
        logger.info("Prediction server launched (pid %s)", self._process.pid)

    async def _settle(self) -> None:
        await asyncio.sleep(self.settle_delay)
        try:
            resp = await asyncio.to_thread(
                requests.get, f"{self.base_url}{HEALTH_CHECK_PATH}", timeout=self.settle_timeout,
            )
        except requests.RequestException as exc:
            raise PredictionBootstrapError(
                "Failed to start prediction server", step="settle", details=str(exc),
            ) from exc
        try:
            resp.json()
        except ValueError as exc:
            raise PredictionBootstrapError(
                "Server response is not valid JSON", step="settle",
            ) from exc

    async def ensure_started(self) -> str:
        """Bring the prediction service up if it is not answering.

        Returns a status message; raises PredictionBootstrapError naming the
        step that failed. Failed bootstraps are not retried.
        """
        async with self._bootstrap_lock:
            if await self._probe(self.probe_timeout):
                return "Prediction server is already running"

            try:
                await self._check_runtime()

                self._set_state(PredictionServerState.installing)
                for pkg in self.packages:
                    await self._install_package(pkg)
                logger.info("All packages installed successfully")

                self._set_state(PredictionServerState.starting)
                await self._launch()
                await self._settle()
            except PredictionBootstrapError as exc:
                self._set_state(PredictionServerState.failed, exc.message)
                raise

            self._set_state(PredictionServerState.ready)
            return "Prediction server started successfully"

    # ── Proxy ─────────────────────────────────────────────────────────────────

    def _forward_sync(self, payload: object) -> dict:
        try:
            resp = requests.post(
                f"{self.base_url}{PREDICT_PATH}", json=payload, timeout=self.predict_timeout,
            )
        except requests.RequestException as exc:
            raise PredictionError(str(exc)) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise PredictionError("Invalid response from prediction server") from exc

        if isinstance(data, dict) and data.get("error"):
            raise PredictionError(str(data.get("details") or data["error"]))
        return data

    async def predict(self, payload: object) -> dict:
        """Forward a prediction request. Raises PredictionNotReadyError without
        contacting /predict when the liveness probe fails."""
        if await self.check_status() != "ready":
            raise PredictionNotReadyError()
        return await asyncio.to_thread(self._forward_sync, payload)
