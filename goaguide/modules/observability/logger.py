"""
Structured JSON logger — append-only, one object per line (.jsonl).

Usage:
    from goaguide.modules.observability.logger import StructuredLogger

    logger = StructuredLogger()
    logger.log("trace_abc123", "ITINERARY_PLANNED", {"total_cost": 8400})

Logs are written to  <LOGS_DIR>/<trace_id>.jsonl  (GOAGUIDE_LOGS_DIR, default ./logs).
"""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime, timezone
from pathlib import Path

from goaguide import config


class StructuredLogger:
    """Thread-safe, append-only JSONL logger."""

    def __init__(self, logs_dir: Path | str | None = None) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else Path(config.LOGS_DIR)
        self._lock = threading.Lock()

    # ── public API ────────────────────────────────────────────────────────

    def log(self, trace_id: str, event_type: str, payload: dict) -> None:
        """Append one structured JSON record to ``<trace_id>.jsonl``."""
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "event_type": event_type,
            "payload": payload,
        }
        line = json.dumps(record, default=str, ensure_ascii=False) + "\n"

        with self._lock:
            os.makedirs(self._logs_dir, exist_ok=True)
            with open(self._logs_dir / f"{trace_id}.jsonl", "a", encoding="utf-8") as fh:
                fh.write(line)

    def read(self, trace_id: str) -> list[dict]:
        """Return every record logged under *trace_id* (empty if none)."""
        path = self._logs_dir / f"{trace_id}.jsonl"
        if not path.exists():
            return []
        with open(path, encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
