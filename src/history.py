"""Analysis history and chat transcript persistence.

Layout under the data directory:
  current_report.json   the last analysis (AnalysisReport.to_dict())
  analysis_history.json list of records, most recent first, at most `limit`
  chat_history.json     advisor transcript [{"role", "content"}, ...]

Each history record is the flattened report plus `id` and `stored_at`.
Corrupt or unreadable files are treated as empty.
"""

from __future__ import annotations

import datetime
import json
import logging
import uuid
from datetime import timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.models import AnalysisReport
from settings import ensure_data_dir, get_history_limit, write_json_atomic

logger = logging.getLogger(__name__)

CURRENT_FILE = "current_report.json"
HISTORY_FILE = "analysis_history.json"
CHAT_FILE = "chat_history.json"
CHAT_LIMIT = 200


class HistoryStore:
    def __init__(self, base_dir: Optional[str | Path] = None, limit: Optional[int] = None):
        if base_dir is None:
            self.base_dir = ensure_data_dir()
        else:
            self.base_dir = Path(base_dir)
            self.base_dir.mkdir(parents=True, exist_ok=True)
        self.limit = limit if limit is not None else get_history_limit()
        if self.limit < 1:
            raise ValueError("History limit must be at least 1")

    # ---- low level ----
    def _path(self, name: str) -> Path:
        return self.base_dir / name

    def _read(self, name: str, default: Any) -> Any:
        p = self._path(name)
        if not p.exists():
            return default
        try:
            with p.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", p, e)
            return default

    # ---- reports ----
    def record(self, report: AnalysisReport) -> Dict[str, Any]:
        """Store `report` as current and prepend it to the history."""
        rec = report.to_dict()
        rec["id"] = uuid.uuid4().hex
        rec["stored_at"] = datetime.datetime.now(timezone.utc).isoformat()
        history = [rec] + self.entries()
        evicted = len(history) - self.limit
        if evicted > 0:
            logger.debug("History full; evicting %d oldest record(s)", evicted)
        # history first: a failed write leaves both files at the previous report
        write_json_atomic(self._path(HISTORY_FILE), history[: self.limit])
        write_json_atomic(self._path(CURRENT_FILE), report.to_dict())
        return rec

    def current(self) -> Optional[AnalysisReport]:
        data = self._read(CURRENT_FILE, None)
        if not isinstance(data, dict):
            return None
        try:
            return AnalysisReport.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed current report: %s", e)
            return None

    def entries(self) -> List[Dict[str, Any]]:
        data = self._read(HISTORY_FILE, [])
        if not isinstance(data, list):
            return []
        return [r for r in data if isinstance(r, dict)][: self.limit]

    def get(self, record_id: str) -> Optional[AnalysisReport]:
        for rec in self.entries():
            if rec.get("id") == record_id:
                return AnalysisReport.from_dict(rec)
        return None

    def clear(self) -> None:
        for name in (CURRENT_FILE, HISTORY_FILE):
            p = self._path(name)
            if p.exists():
                p.unlink()

    # ---- chat ----
    def load_chat(self) -> List[Dict[str, str]]:
        data = self._read(CHAT_FILE, [])
        if not isinstance(data, list):
            return []
        return [
            {"role": str(m["role"]), "content": str(m["content"])}
            for m in data
            if isinstance(m, dict) and "role" in m and "content" in m
        ]

    def save_chat(self, messages: List[Dict[str, str]]) -> None:
        write_json_atomic(self._path(CHAT_FILE), list(messages)[-CHAT_LIMIT:])
