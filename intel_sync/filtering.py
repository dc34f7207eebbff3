# intel_sync/filtering.py
# Relevance filter: keep news about the tracked game, drop store-wide roundups.
#
# Order matters:
#   1. generic roundup title ("top sellers", ...) without the game's name -> drop
#   2. item published by the tracked app itself (not syndicated)          -> keep
#   3. game's name in title or feed label                                  -> keep
#   4. everything else                                                     -> drop

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from intel_sync.config import SyncConfig


def keyword_match(text: Any, keywords: Iterable[str]) -> bool:
    if not text:
        return False
    t = str(text).lower()
    return any(k.lower() in t for k in keywords if k)


def is_relevant(item: Dict[str, Any], config: SyncConfig) -> bool:
    title = item.get("title") or ""
    label = item.get("feedlabel") or ""
    title_hit = keyword_match(title, config.subject_names)

    if keyword_match(title, config.generic_phrases) and not title_hit:
        return False
    if str(item.get("appid", "")) == str(config.app_id) and not item.get("is_external_url"):
        return True
    return title_hit or keyword_match(label, config.subject_names)


def filter_news(items: List[Dict[str, Any]], config: SyncConfig) -> List[Dict[str, Any]]:
    if not config.filter_enabled:
        return list(items)
    kept = []
    for it in items:
        if is_relevant(it, config):
            kept.append(it)
        else:
            print(f"[filter] skipped: {it.get('title') or '(untitled)'}")
    return kept
