# intel_sync/transform.py
# Steam news item -> intel record.

from __future__ import annotations

from typing import Any, Dict

from intel_sync.config import SyncConfig
from intel_sync.text import format_date, make_slug, strip_html, truncate

STATUS_CONFIRMED = "confirmed"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def make_id(title: str, config: SyncConfig) -> str:
    if config.id_limit_includes_prefix:
        return (config.id_prefix + make_slug(title, None))[:config.slug_max_length]
    return config.id_prefix + make_slug(title, config.slug_max_length)


def source_label(item: Dict[str, Any], config: SyncConfig) -> str:
    label = _text(item.get("feedlabel")).strip() if config.use_feed_label else ""
    return label or config.source_label


def news_to_intel(item: Dict[str, Any], config: SyncConfig) -> Dict[str, Any]:
    title = _text(item.get("title"))
    clean = strip_html(_text(item.get("contents")))
    date_str = format_date(item.get("date"))
    label = source_label(item, config)

    return {
        "id": make_id(title, config),
        "title": title,
        "status": STATUS_CONFIRMED,
        "startDate": date_str,
        "endDate": None,
        "teaser": truncate(clean, config.teaser_limit),
        "summary": truncate(clean, config.summary_limit),
        "howItWorks": [t.format(source=label) for t in config.how_it_works],
        "rewards": [t.format(source=label) for t in config.rewards],
        "raiderImpact": [t.format(source=label) for t in config.raider_impact],
        "sources": [{"label": label, "url": _text(item.get("url")) or config.fallback_url()}],
        "lastUpdated": date_str,
    }
