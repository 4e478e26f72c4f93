"""JSONL journal of order commits, one file per user."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import json
import re

from weather_locations.config import AppConfig

_SAFE_USER_RE = re.compile(r"^[A-Za-z0-9_.@-]+$")


def validate_user_id(user_id: str) -> None:
    """Validate user_id to prevent path traversal."""
    if not user_id:
        raise ValueError("user_id must not be empty")
    if "/" in user_id or "\\" in user_id:
        raise ValueError("user_id must not contain path separators")
    if ".." in user_id:
        raise ValueError("user_id must not contain '..'")
    if not _SAFE_USER_RE.match(user_id):
        raise ValueError("user_id contains invalid characters")


def default_journal_root(config: AppConfig) -> Optional[Path]:
    """Journal root from config, or None when journaling is switched off."""
    if not config.logging.log_jsonl:
        return None
    return config.app.journal_dir


def journal_path(user_id: str, journal_root: Path) -> Path:
    validate_user_id(user_id)
    return Path(journal_root) / user_id / "commits.jsonl"


def make_commit_record(user_id: str, source: str, names: List[str], ok: bool, message: str) -> Dict[str, Any]:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "user_id": user_id,
        "source": source,
        "names": list(names),
        "ok": ok,
        "message": message,
    }


def append_commit_log(user_id: str, record: Dict[str, Any], journal_root: Path) -> Path:
    """Append one JSON record to commits.jsonl and return its path."""
    path = journal_path(user_id, journal_root)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")
    return path


def read_commit_logs(user_id: str, journal_root: Path, limit: int | None = None) -> List[Dict[str, Any]]:
    """Read commits.jsonl into list of dicts, skipping corrupt lines."""
    path = journal_path(user_id, journal_root)
    if not path.exists():
        return []
    results: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if limit is not None and len(results) >= limit:
                break
            line = line.strip()
            if not line:
                continue
            try:
                results.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return results
