# intel_sync/store.py
# Read/write the intel JSON array (intel-data.json).

from __future__ import annotations

import json
import os
import shutil
import sys
import tempfile
from typing import Any, Dict, List


def load_entries(path: str) -> List[Dict[str, Any]]:
    """Missing, unreadable or malformed file -> [] (first run starts fresh)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"[load] No existing {path} found, starting fresh")
        return []
    except (OSError, ValueError) as ex:
        print(f"[load] Could not read {path} ({ex}), starting fresh", file=sys.stderr)
        return []

    if not isinstance(data, list):
        print(f"[load] {path} does not hold a JSON array, starting fresh", file=sys.stderr)
        return []

    entries = [o for o in data if isinstance(o, dict)]
    if len(entries) != len(data):
        print(f"[load] Ignored {len(data) - len(entries)} non-object entries in {path}", file=sys.stderr)
    print(f"[load] Loaded {len(entries)} existing intel entries")
    return entries


def read_entries_strict(path: str) -> List[Dict[str, Any]]:
    """Like load_entries but a missing, malformed or non-array file raises ValueError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ValueError(f"{path} not found") from None
    except (OSError, ValueError) as ex:
        raise ValueError(f"{path} is not readable JSON: {ex}") from ex
    if not isinstance(data, list):
        raise ValueError(f"{path} does not hold a JSON array")
    return data


def dumps_entries(entries: List[Dict[str, Any]]) -> str:
    return json.dumps(entries, ensure_ascii=False, indent=2)


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_entries(path: str, entries: List[Dict[str, Any]]) -> None:
    """Write via a temp file in the same directory, then swap it in. Keeps the target's mode."""
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".intel-", suffix=".tmp", dir=folder)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dumps_entries(entries))
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    print(f"[write] Wrote {len(entries)} total entries to {path}")
