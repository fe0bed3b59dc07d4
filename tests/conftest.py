from __future__ import annotations

import os
from typing import Iterator

import pytest

import project_config


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Run every test against an empty config file and a clean environment."""

    config_path = tmp_path / "config.toml"
    config_path.write_text("", encoding="utf-8")
    for key in list(os.environ):
        if key.startswith(("SUDOKU_", "CLI_SUDOKU_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SUDOKU_CONFIG", str(config_path))
    project_config.reload()
    yield
    project_config.reload()
