# intel_sync/config.py
# Run settings for the Steam news -> intel-data.json sync.
# Layering: revision preset -> YAML file -> environment -> CLI overrides.

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join("config", "intel_sync.yaml")
DEFAULT_DATA_FILE = "intel-data.json"
DEFAULT_REVISION = 2

STEAM_NEWS_ENDPOINT = "https://api.steampowered.com/ISteamNews/GetNewsForApp/v2/"
STEAM_STORE_NEWS_URL = "https://store.steampowered.com/news/app/{app_id}"


class ConfigError(ValueError):
    """Invalid configuration value or file."""


@dataclass(frozen=True)
class SyncConfig:
    data_file: str = DEFAULT_DATA_FILE
    app_id: str = "1808500"
    news_count: int = 20
    max_length: int = 1000
    request_timeout: float = 15.0

    teaser_limit: int = 150
    summary_limit: int = 600

    id_prefix: str = "steam-"
    slug_max_length: int = 50
    id_limit_includes_prefix: bool = False

    filter_enabled: bool = True
    subject_names: List[str] = field(default_factory=lambda: ["arc raiders", "arc raider"])
    generic_phrases: List[str] = field(default_factory=lambda: ["top sellers", "top played"])

    source_label: str = "Steam News"
    use_feed_label: bool = True
    how_it_works: List[str] = field(default_factory=lambda: [
        "Details sourced from {source}",
        "Check the source link for full information",
    ])
    rewards: List[str] = field(default_factory=lambda: [
        "See official announcement for details",
    ])
    raider_impact: List[str] = field(default_factory=lambda: [
        "Solo: Check source for gameplay impact",
        "Duo: Check source for gameplay impact",
        "Trio: Check source for gameplay impact",
    ])

    def fallback_url(self) -> str:
        return STEAM_STORE_NEWS_URL.format(app_id=self.app_id)


# ==================== REVISIONS ====================
# 1: first script (wrong app id, no relevance filter, 500-char summaries)
# 2: corrected script (default)
REVISIONS: Dict[int, Dict[str, Any]] = {
    1: {
        "app_id": "2325290",
        "news_count": 15,
        "max_length": 500,
        "summary_limit": 500,
        "filter_enabled": False,
        "use_feed_label": False,
        "how_it_works": [
            "Details sourced from official Steam news feed",
            "Check the source link for full information",
        ],
    },
    2: {},
}

# env var -> SyncConfig field
ENV_VARS = {
    "INTEL_DATA_FILE": "data_file",
    "STEAM_APP_ID": "app_id",
    "STEAM_NEWS_COUNT": "news_count",
    "STEAM_NEWS_MAXLENGTH": "max_length",
    "REQUEST_TIMEOUT": "request_timeout",
    "INTEL_FILTER": "filter_enabled",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce(name: str, value: Any, kind: type) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        s = str(value).strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
        raise ConfigError(f"{name}: expected a boolean, got {value!r}")
    if kind is int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{name}: expected an integer, got {value!r}") from None
    if kind is float:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{name}: expected a number, got {value!r}") from None
    if kind is list:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"{name}: expected a list, got {value!r}")
        return [str(v) for v in value]
    return str(value)


def _field_kinds() -> Dict[str, type]:
    kinds = {}
    for f in fields(SyncConfig):
        t = str(f.type)
        if t.startswith("List"):
            kinds[f.name] = list
        else:
            kinds[f.name] = {"int": int, "float": float, "bool": bool}.get(t, str)
    return kinds


def apply_overrides(config: SyncConfig, values: Mapping[str, Any], origin: str = "override") -> SyncConfig:
    """Return a copy of ``config`` with ``values`` coerced onto it. ``None`` values are skipped."""
    kinds = _field_kinds()
    changes = {}
    for key, value in values.items():
        if value is None:
            continue
        if key not in kinds:
            raise ConfigError(f"{origin}: unknown setting '{key}'")
        changes[key] = _coerce(f"{origin}:{key}", value, kinds[key])
    if not changes:
        return config
    out = replace(config, **changes)
    _check(out)
    return out


def _check(config: SyncConfig) -> None:
    for name in ("news_count", "max_length", "teaser_limit", "summary_limit", "slug_max_length"):
        if getattr(config, name) < 1:
            raise ConfigError(f"{name} must be >= 1")
    if config.teaser_limit < 4 or config.summary_limit < 4:
        raise ConfigError("teaser_limit and summary_limit must leave room for the ellipsis")
    if config.request_timeout <= 0:
        raise ConfigError("request_timeout must be > 0")
    if not config.id_prefix:
        raise ConfigError("id_prefix must not be empty")
    for name in ("how_it_works", "rewards", "raider_impact"):
        for template in getattr(config, name):
            try:
                template.format(source="")
            except (KeyError, IndexError, AttributeError, ValueError) as ex:
                raise ConfigError(f"{name}: bad template {template!r}, "
                                  f"only {{source}} may be used ({ex!r})") from None


def for_revision(revision: int = DEFAULT_REVISION) -> SyncConfig:
    if revision not in REVISIONS:
        raise ConfigError(f"unknown revision {revision!r} (expected one of {sorted(REVISIONS)})")
    return apply_overrides(SyncConfig(), REVISIONS[revision], origin=f"revision {revision}")


def load_yaml(path: str) -> Dict[str, Any]:
    """Read a YAML settings file. A missing file yields ``{}``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as ex:
        raise ConfigError(f"{path}: invalid YAML: {ex}") from ex
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return data


def env_values(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    return {fname: environ[var] for var, fname in ENV_VARS.items() if environ.get(var)}


def load_config(path: Optional[str] = None,
                revision: Optional[int] = None,
                overrides: Optional[Mapping[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> SyncConfig:
    """Build the run config. The YAML file may itself pick a ``revision``.

    An explicit ``path`` must exist; the default config file is optional.
    """
    if path and not os.path.exists(path):
        raise ConfigError(f"config file not found: {path}")
    file_values = load_yaml(path or DEFAULT_CONFIG_PATH)
    file_revision = file_values.pop("revision", None)
    rev = revision if revision is not None else _coerce("revision", file_revision or DEFAULT_REVISION, int)

    config = for_revision(rev)
    config = apply_overrides(config, file_values, origin=path or DEFAULT_CONFIG_PATH)
    config = apply_overrides(config, env_values(environ), origin="env")
    config = apply_overrides(config, overrides or {}, origin="cli")
    return config
