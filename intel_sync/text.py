# intel_sync/text.py
# Text helpers for Steam news bodies: markup stripping, slugs, dates, truncation.

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

ELLIPSIS = "..."

_rx_br = re.compile(r"<br\s*/?>", re.I)
_rx_tag = re.compile(r"<[^>]+>")
_rx_clan_image = re.compile(r"\{STEAM_CLAN_IMAGE\}\S*")
_rx_bbcode = re.compile(r"\[/?[^\]]*\]")
_rx_space = re.compile(r"\s+")
_rx_non_alnum = re.compile(r"[^a-z0-9]+")

# Only the entities Steam emits in news bodies; anything else stays literal.
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
)


def strip_html(s: str) -> str:
    if not s:
        return ""
    s = _rx_br.sub(" ", s)
    s = _rx_tag.sub("", s)
    s = _rx_clan_image.sub("", s)
    s = _rx_bbcode.sub("", s)
    for ent, ch in _ENTITIES:
        s = s.replace(ent, ch)
    return _rx_space.sub(" ", s).strip()


def make_slug(title: str, max_length: Optional[int] = 50) -> str:
    """'Patch Notes 1.2' -> 'patch-notes-1-2'. No truncation when max_length is None."""
    s = _rx_non_alnum.sub("-", (title or "").lower())
    if s.startswith("-"):
        s = s[1:]
    if s.endswith("-"):
        s = s[:-1]
    return s if max_length is None else s[:max_length]


def format_date(timestamp) -> Optional[str]:
    """Unix seconds -> 'YYYY-MM-DD' (UTC). None for missing/garbage input."""
    if timestamp is None or isinstance(timestamp, bool):
        return None
    try:
        dt = datetime.fromtimestamp(float(timestamp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return dt.strftime("%Y-%m-%d")


def truncate(s: str, limit: int) -> str:
    if len(s) > limit:
        return s[:limit - len(ELLIPSIS)] + ELLIPSIS
    return s
