"""Append-only flat-file log of water leak reports.

Each record is one line of six pipe-separated fields:

    id | location | description | status | created_at | updated_at

after a fixed four-line header. Reads are tolerant (bad status tokens become
``pending``, short lines are padded); I/O failures never raise to the caller.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from schemas.water import LeakReport, LeakStatus

logger = logging.getLogger(__name__)

HEADER = (
    "Water Complaints Log\n"
    "===================\n"
    "Format: ID | Location | Description | Status | Date Reported | Last Updated\n"
    "\n"
)
HEADER_LINES = 4
FIELD_COUNT = 6
_VALID_STATUSES = {s.value for s in LeakStatus}


def _clean_field(value: str) -> str:
    """Strip characters that would break the one-record-per-line format."""
    return value.replace("|", " ").replace("\r", " ").replace("\n", " ")


def format_line(report: LeakReport) -> str:
    updated_at = report.updated_at or report.created_at
    fields = [
        report.id,
        report.location,
        report.description,
        report.status.value,
        report.created_at,
        updated_at,
    ]
    return "|".join(_clean_field(f) for f in fields) + "\n"


def parse_line(line: str) -> LeakReport:
    fields = [f.strip() for f in line.split("|")]
    fields += [""] * (FIELD_COUNT - len(fields))
    report_id, location, description, status, created_at, updated_at = fields[:FIELD_COUNT]

    if status not in _VALID_STATUSES:
        status = LeakStatus.pending.value

    return LeakReport(
        id=report_id,
        location=location,
        description=description,
        status=LeakStatus(status),
        created_at=created_at,
        updated_at=updated_at or None,
    )


class LeakReportStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._write_lock = threading.Lock()

    def ensure_file(self) -> bool:
        """Create the data directory and the header if missing or empty."""
        try:
            self._ensure_file()
        except OSError:
            logger.exception("Error creating complaints file %s", self.path)
            return False
        return True

    def _ensure_file(self) -> None:
        if self.path.exists() and self.path.stat().st_size > 0:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(HEADER, encoding="utf-8")
        logger.info("Created complaints file: %s", self.path)

    def list_reports(self) -> list[LeakReport]:
        try:
            content = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.error("Error reading complaints from %s: %s", self.path, exc)
            return []

        lines = content.split("\n")[HEADER_LINES:]
        return [parse_line(line) for line in lines if line.strip()]

    def append_report(self, report: LeakReport) -> bool:
        line = format_line(report)
        try:
            with self._write_lock:
                self._ensure_file()
                with open(self.path, "a", encoding="utf-8", errors="replace") as f:
                    f.write(line)
        except (OSError, UnicodeError):
            logger.exception("Error writing complaint %s to file", report.id)
            return False

        logger.info("Successfully wrote complaint to file: %s", report.id)
        return True
