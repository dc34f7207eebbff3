"""Pytest fixtures shared by the intel_sync tests."""

from __future__ import annotations

from dataclasses import replace

import pytest

from intel_sync.config import SyncConfig, for_revision


@pytest.fixture
def config(tmp_path) -> SyncConfig:
    """Revision 2 settings with the data file inside a temp directory."""
    return replace(for_revision(2), data_file=str(tmp_path / "intel-data.json"))


@pytest.fixture
def legacy_config(tmp_path) -> SyncConfig:
    """Revision 1 settings (no filter, 500-char summaries)."""
    return replace(for_revision(1), data_file=str(tmp_path / "intel-data.json"))
