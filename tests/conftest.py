from __future__ import annotations

from pathlib import Path

import pytest

from seacebot.utils.config import Config


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    """Config with every wait shrunk so the fake target runs instantly."""
    return Config(
        seace_url="https://seace.example/buscadorPublico.xhtml",
        debug_dir=str(tmp_path / "debug"),
        panel_timeout_ms=100,
        results_timeout_ms=2000,
        page_timeout_ms=2000,
        search_grace_ms=0,
        page_settle_ms=0,
        poll_interval_ms=1,
    )
