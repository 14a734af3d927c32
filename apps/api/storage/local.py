"""Local disk layout for runtime data (leak log, uploaded samples, child logs)."""

import time
import random
from pathlib import Path

from core.config import settings


class LocalStorage:
    def __init__(self, base_dir: Path | None = None):
        self.base = base_dir or settings.data_dir
        self._ensure_dirs()

    def _ensure_dirs(self) -> None:
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def uploads_dir(self) -> Path:
        return self.base / "uploads"

    @property
    def leak_file(self) -> Path:
        return self.base / "waterComplaints.txt"

    @property
    def prediction_log(self) -> Path:
        return self.base / "prediction-server.log"

    def upload_path(self, fieldname: str, ext: str) -> Path:
        """Unique destination for an uploaded file: <field>-<millis>-<random><ext>."""
        suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return self.uploads_dir / f"{fieldname}-{suffix}{ext}"

    def save_upload(self, fieldname: str, ext: str, data: bytes) -> Path:
        path = self.upload_path(fieldname, ext)
        path.write_bytes(data)
        return path
