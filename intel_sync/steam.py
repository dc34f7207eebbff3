# intel_sync/steam.py
# Single GET against ISteamNews/GetNewsForApp. Failures degrade to "no news".

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from intel_sync.config import STEAM_NEWS_ENDPOINT, SyncConfig

UA = "intel-sync/1.0 (+https://store.steampowered.com/news)"
REQ_HEADERS = {
    "User-Agent": UA,
    "Accept": "application/json",
}


def build_news_url(config: SyncConfig) -> str:
    query = urlencode({
        "appid": config.app_id,
        "count": config.news_count,
        "maxlength": config.max_length,
        "format": "json",
    })
    return f"{STEAM_NEWS_ENDPOINT}?{query}"


def extract_news_items(payload: Any) -> List[Dict[str, Any]]:
    """Pull appnews.newsitems out of a response body; anything missing -> []."""
    if not isinstance(payload, dict):
        return []
    appnews = payload.get("appnews")
    if not isinstance(appnews, dict):
        return []
    items = appnews.get("newsitems")
    if not isinstance(items, list):
        return []
    return [it for it in items if isinstance(it, dict)]


def fetch_news(config: SyncConfig, session: Optional[Any] = None) -> List[Dict[str, Any]]:
    """
    Fetch news items for config.app_id.
    Network errors, timeouts, non-2xx and non-JSON bodies are reported and yield [].
    """
    url = build_news_url(config)
    http = session or requests
    try:
        r = http.get(url, headers=REQ_HEADERS, timeout=config.request_timeout)
        if not 200 <= r.status_code < 300:
            raise RuntimeError(f"HTTP {r.status_code}")
        payload = r.json()
    except (requests.RequestException, ValueError, RuntimeError) as ex:
        print(f"[fetch] Failed to fetch Steam news: {ex.__class__.__name__}: {ex}", file=sys.stderr)
        return []

    items = extract_news_items(payload)
    print(f"[fetch] Fetched {len(items)} news items from Steam (appid={config.app_id})")
    return items
