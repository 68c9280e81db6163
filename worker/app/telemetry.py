# worker/app/telemetry.py
from __future__ import annotations

import json
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import logging

from worker.app.config import settings

log = logging.getLogger(__name__)

COUNTERS = ("generate_total", "generate_failed", "samples_total")


class Telemetry:
    """
    Thread-safe telemetry singleton for the alt-text service.

    Keeps in-memory counters and writes structured JSON lines to <LOG_DIR>/worker.jsonl.
    Every operation swallows its own failures so telemetry never breaks a request.
    """

    def __init__(self, log_dir: Optional[str] = None, max_log_mb: Optional[int] = None):
        self._lock = threading.Lock()
        self._uptime_start = time.time()
        self._counts: Dict[str, int] = {name: 0 for name in COUNTERS}
        self._last_error: Optional[str] = None

        self._log_dir = Path(log_dir or settings.LOG_DIR)
        self._log_file = self._log_dir / "worker.jsonl"
        self._max_log_bytes = (max_log_mb or settings.MAX_LOG_MB) * 1024 * 1024

    def increment(self, counter_name: str, amount: int = 1) -> None:
        """Thread-safe counter increment; unknown names are ignored."""
        try:
            with self._lock:
                if counter_name in self._counts:
                    self._counts[counter_name] += amount
        except Exception as e:
            log.debug(f"Telemetry increment failed for {counter_name}: {e}")

    def set_error(self, error: str) -> None:
        try:
            with self._lock:
                self._last_error = str(error)
        except Exception as e:
            log.debug(f"Telemetry set_error failed: {e}")

    def log_json(self, event: str, level: str = "info", **fields: Any) -> None:
        """
        Append one JSON line to worker.jsonl.

        Fields: ts, level, subsystem="alt_text", event, plus any kwargs.
        """
        try:
            entry = {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": level,
                "subsystem": "alt_text",
                "event": event,
                **fields,
            }
            self._log_dir.mkdir(parents=True, exist_ok=True)
            self._maybe_rotate_log()
            with self._lock:
                with open(self._log_file, "a", encoding="utf-8") as f:
                    f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except Exception as e:
            log.debug(f"Telemetry log_json failed: {e}")

    def _maybe_rotate_log(self) -> None:
        """Rotate log file if it exceeds size limit (2-deep: .1, .2)."""
        try:
            if (
                self._log_file.exists()
                and self._log_file.stat().st_size > self._max_log_bytes
            ):
                log_file_2 = self._log_file.with_suffix(".jsonl.2")
                log_file_1 = self._log_file.with_suffix(".jsonl.1")
                if log_file_2.exists():
                    log_file_2.unlink()
                if log_file_1.exists():
                    log_file_1.rename(log_file_2)
                self._log_file.rename(log_file_1)
        except Exception as e:
            log.warning(f"Log rotation failed: {e}")

    def get_stats(self) -> Dict[str, Any]:
        try:
            with self._lock:
                return {
                    "uptime_s": int(time.time() - self._uptime_start),
                    **self._counts,
                    "last_error": self._last_error,
                }
        except Exception as e:
            log.debug(f"Telemetry get_stats failed: {e}")
            return {"uptime_s": 0, **{name: 0 for name in COUNTERS}, "last_error": None}


# Singleton instance
telemetry = Telemetry()
