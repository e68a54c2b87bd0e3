import json
import time
from pathlib import Path
from typing import Any, Dict, List

HISTORY_PATH = Path.home() / ".base50_history.jsonl"


def log_event(action: str, payload: Dict[str, Any], path: Path = HISTORY_PATH) -> None:
    """
    Append a simple JSON line to history for traceability.
    """
    record = {"time": int(time.time()), "action": action, **payload}
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError:
        # History failures should not break encoding or decoding.
        pass


def read_events(path: Path = HISTORY_PATH, limit: int = 20) -> List[Dict[str, Any]]:
    """Return the last `limit` history records, oldest first. Unparseable lines are skipped."""
    if not path.exists():
        return []
    events: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    if limit > 0:
        events = events[-limit:]
    return events
