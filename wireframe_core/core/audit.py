from __future__ import annotations

from collections import Counter
import json
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Callable, Iterator


AuditLogger = Callable[[dict[str, Any]], None]


class JsonlAuditSink:
    """Append-only JSONL log of render outcomes, one object per rendered frame."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def log(self, entry: dict[str, Any]) -> None:
        line = json.dumps(entry, separators=(",", ":"), sort_keys=True)
        with self._lock, self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def summarize(self) -> dict[str, Any]:
        """Count renders per action and per root surface.

        Malformed lines are skipped. `mean_duration_ms` covers rows that carry a duration.
        """
        actions: Counter[str] = Counter()
        surfaces: Counter[str] = Counter()
        node_errors = 0
        durations: list[float] = []
        for row in self._rows():
            actions[str(row.get("action", ""))] += 1
            surfaces[str(row.get("surface", ""))] += 1
            node_errors += int(row.get("node_errors", 0))
            if "duration_ms" in row:
                durations.append(float(row["duration_ms"]))
        return {
            "total": sum(actions.values()),
            "by_action": dict(actions),
            "by_surface": dict(surfaces),
            "node_errors": node_errors,
            "mean_duration_ms": round(sum(durations) / len(durations), 3) if durations else 0.0,
        }

    def prune(self, *, max_rows: int | None = None) -> int:
        """Keep only the newest `max_rows` entries; returns how many were dropped."""
        if max_rows is None or max_rows <= 0:
            return 0
        with self._lock:
            if not self.path.exists():
                return 0
            lines = [line for line in self.path.read_text(encoding="utf-8").splitlines() if line.strip()]
            dropped = len(lines) - max_rows
            if dropped <= 0:
                return 0
            # readers never observe a half-written log
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.writelines(line + "\n" for line in lines[dropped:])
            os.replace(tmp_name, self.path)
        return dropped

    def _rows(self) -> Iterator[dict[str, Any]]:
        if not self.path.exists():
            return
        with self.path.open("r", encoding="utf-8") as f:
            for raw in f:
                raw = raw.strip()
                if not raw:
                    continue
                try:
                    row = json.loads(raw)
                except json.JSONDecodeError:
                    continue
                if isinstance(row, dict):
                    yield row
