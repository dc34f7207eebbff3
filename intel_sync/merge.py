# intel_sync/merge.py
# Merge freshly transformed Steam entries into the existing intel list and order it.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from dateutil.parser import isoparse

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_fetched(entry: Dict[str, Any], prefix: str) -> bool:
    return str(entry.get("id") or "").startswith(prefix)


def split_entries(entries: List[Dict[str, Any]], prefix: str) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """(curated, fetched) in their original order. Curated = id without the feed prefix."""
    curated, fetched = [], []
    for e in entries:
        (fetched if is_fetched(e, prefix) else curated).append(e)
    return curated, fetched


def merge_entries(existing: List[Dict[str, Any]],
                  candidates: List[Dict[str, Any]],
                  prefix: str) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Returns (merged, new_entries).
    merged = curated + new + previously fetched. Known ids are never re-added or updated.
    """
    curated, fetched = split_entries(existing, prefix)
    seen_ids = {e.get("id") for e in fetched}

    new_entries = []
    for c in candidates:
        if c["id"] in seen_ids:
            continue
        seen_ids.add(c["id"])
        new_entries.append(c)

    return curated + new_entries + fetched, new_entries


def start_date_key(entry: Dict[str, Any]) -> datetime:
    raw = entry.get("startDate")
    if not raw or not isinstance(raw, str):
        return EPOCH
    try:
        dt = isoparse(raw)
    except (ValueError, OverflowError):
        return EPOCH
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def sort_entries(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Newest startDate first; missing dates sort as 1970-01-01. Stable on ties."""
    return sorted(entries, key=start_date_key, reverse=True)
