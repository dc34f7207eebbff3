"""Unit tests for run configuration layering."""

from __future__ import annotations

from pathlib import Path

import pytest

from intel_sync.config import ConfigError, for_revision, load_config


def test_revision_presets_differ() -> None:
    """Revision 1 reproduces the original script; 2 is the corrected default."""
    old, new = for_revision(1), for_revision(2)

    assert (old.app_id, old.news_count, old.summary_limit, old.filter_enabled) == ("2325290", 15, 500, False)
    assert (new.app_id, new.summary_limit, new.filter_enabled) == ("1808500", 600, True)


def test_unknown_revision_is_rejected() -> None:
    """Only the known presets are accepted."""
    with pytest.raises(ConfigError):
        for_revision(3)


def test_load_config_layers_file_env_and_cli(tmp_path: Path) -> None:
    """CLI beats env, env beats the YAML file, the file beats the preset."""
    cfg_file = tmp_path / "intel.yaml"
    cfg_file.write_text(
        "revision: 1\nnews_count: 30\nmax_length: 800\nsubject_names: [arc raiders]\n",
        encoding="utf-8",
    )

    config = load_config(
        str(cfg_file),
        overrides={"max_length": 900, "app_id": None},
        environ={"STEAM_NEWS_COUNT": "40", "INTEL_FILTER": "yes"},
    )

    assert config.app_id == "2325290"
    assert config.summary_limit == 500
    assert config.news_count == 40
    assert config.max_length == 900
    assert config.filter_enabled is True
    assert config.subject_names == ["arc raiders"]


def test_load_config_default_file_is_optional(tmp_path: Path, monkeypatch) -> None:
    """Without config/intel_sync.yaml the revision 2 preset is used."""
    monkeypatch.chdir(tmp_path)

    config = load_config(environ={})

    assert config == for_revision(2)


def test_load_config_rejects_bad_values(tmp_path: Path) -> None:
    """Unknown keys, bad numbers and a missing explicit file are errors."""
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("colour: blue\n", encoding="utf-8")
    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(unknown), environ={})
    with pytest.raises(ConfigError):
        load_config(str(not_mapping), environ={})
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.yaml"), environ={})
    with pytest.raises(ConfigError):
        load_config(None, revision=2, environ={"REQUEST_TIMEOUT": "fast"})


def test_load_config_rejects_unknown_template_placeholders(tmp_path: Path) -> None:
    """Templates may only use {source}; others fail at load time, not mid-run."""
    cfg_file = tmp_path / "intel.yaml"
    cfg_file.write_text('rewards: ["See {url} for details"]\n', encoding="utf-8")
    ok_file = tmp_path / "ok.yaml"
    ok_file.write_text('rewards: ["See {source} for details"]\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="rewards"):
        load_config(str(cfg_file), environ={})
    assert load_config(str(ok_file), environ={}).rewards == ["See {source} for details"]
