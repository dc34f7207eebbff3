# intel_sync/pipeline.py
# load -> fetch -> filter -> transform -> merge -> sort -> write

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from intel_sync.config import SyncConfig
from intel_sync.filtering import filter_news
from intel_sync.merge import merge_entries, sort_entries
from intel_sync.steam import fetch_news
from intel_sync.store import load_entries, write_entries
from intel_sync.transform import news_to_intel


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_sync(config: SyncConfig, session: Optional[Any] = None, dry_run: bool = False) -> Dict[str, Any]:
    """
    One sync pass. Returns a status dict for printing.
    Load and fetch failures are absorbed; a failed write raises.
    """
    started = _utc_now()
    print(f"[sync] Fetching Steam news for app {config.app_id}...")

    existing = load_entries(config.data_file)
    news = fetch_news(config, session=session)
    relevant = filter_news(news, config)
    if config.filter_enabled:
        print(f"[filter] {len(relevant)}/{len(news)} items relevant")

    candidates = [news_to_intel(it, config) for it in relevant]
    merged, new_entries = merge_entries(existing, candidates, config.id_prefix)
    for e in new_entries:
        print(f"[new] {e['title']}")
    final = sort_entries(merged)

    if dry_run:
        print(f"[write] Dry run: {config.data_file} left untouched ({len(final)} entries)")
    else:
        write_entries(config.data_file, final)
    print(f"[sync] Added {len(new_entries)} new Steam entries")

    return {
        "started_utc": started,
        "ended_utc": _utc_now(),
        "file": config.data_file,
        "dry_run": dry_run,
        "loaded": len(existing),
        "fetched": len(news),
        "relevant": len(relevant),
        "new_entries": len(new_entries),
        "total": len(final),
        "new_titles": [e["title"] for e in new_entries],
        "filter_enabled": config.filter_enabled,
        "limits": {
            "app_id": config.app_id,
            "count": config.news_count,
            "maxlength": config.max_length,
            "teaser_limit": config.teaser_limit,
            "summary_limit": config.summary_limit,
            "timeout_s": config.request_timeout,
        },
    }
