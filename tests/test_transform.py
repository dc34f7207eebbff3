"""Unit tests for news item -> intel record conversion."""

from __future__ import annotations

from dataclasses import replace

from intel_sync.transform import make_id, news_to_intel
from tests.steam_payloads import news_item


def test_news_to_intel_builds_full_record(config) -> None:
    """All record fields are derived from the item and config."""
    item = news_item("Patch Notes 1.2", date=1700000000, contents="<p>Fixed &amp; improved.</p>")

    record = news_to_intel(item, config)

    assert list(record) == [
        "id", "title", "status", "startDate", "endDate", "teaser", "summary",
        "howItWorks", "rewards", "raiderImpact", "sources", "lastUpdated",
    ]
    assert record["id"] == "steam-patch-notes-1-2"
    assert record["title"] == "Patch Notes 1.2"
    assert record["status"] == "confirmed"
    assert record["startDate"] == "2023-11-14"
    assert record["lastUpdated"] == "2023-11-14"
    assert record["endDate"] is None
    assert record["teaser"] == "Fixed & improved."
    assert record["summary"] == "Fixed & improved."
    assert record["howItWorks"][0] == "Details sourced from Community Announcements"
    assert len(record["raiderImpact"]) == 3
    assert record["sources"] == [{"label": "Community Announcements", "url": item["url"]}]


def test_news_to_intel_truncates_teaser_and_summary(config) -> None:
    """Teaser and summary are cut independently with an ellipsis."""
    item = news_item("Long read", contents="x" * 1000)

    record = news_to_intel(item, config)

    assert len(record["teaser"]) == 150
    assert record["teaser"].endswith("...")
    assert len(record["summary"]) == 600
    assert record["summary"] == "x" * 597 + "..."


def test_news_to_intel_legacy_bounds_and_label(legacy_config) -> None:
    """Revision 1 keeps the 500-char summary and the fixed source label."""
    item = news_item("Long read", contents="y" * 700, feedlabel="PC Gamer")

    record = news_to_intel(item, legacy_config)

    assert len(record["summary"]) == 500
    assert record["sources"][0]["label"] == "Steam News"
    assert record["howItWorks"][0] == "Details sourced from official Steam news feed"


def test_news_to_intel_falls_back_to_store_url(config) -> None:
    """Missing item URL and label use the app's store news page and default label."""
    item = news_item("No link", url="", feedlabel=None)

    record = news_to_intel(item, config)

    assert record["sources"] == [
        {"label": "Steam News", "url": "https://store.steampowered.com/news/app/1808500"}
    ]


def test_news_to_intel_without_date_leaves_dates_null(config) -> None:
    """An item with no timestamp gets null dates instead of failing."""
    item = news_item("Undated")
    del item["date"]

    record = news_to_intel(item, config)

    assert record["startDate"] is None
    assert record["lastUpdated"] is None


def test_make_id_prefix_placement(config) -> None:
    """The id limit applies to the slug, or to the whole id when configured."""
    title = "A very long announcement title that keeps going and going and going"

    slug_limited = make_id(title, config)
    id_limited = make_id(title, replace(config, id_limit_includes_prefix=True))

    assert slug_limited.startswith("steam-")
    assert len(slug_limited) == len("steam-") + 50
    assert len(id_limited) == 50
    assert slug_limited.startswith(id_limited)


def test_news_to_intel_coerces_non_string_fields(config) -> None:
    """Numeric titles, bodies and labels are stringified instead of failing the run."""
    item = news_item("placeholder", contents=12345, feedlabel=7, url=None)
    item["title"] = 2024

    record = news_to_intel(item, config)

    assert record["id"] == "steam-2024"
    assert record["title"] == "2024"
    assert record["teaser"] == "12345"
    assert record["sources"] == [{"label": "7", "url": "https://store.steampowered.com/news/app/1808500"}]
