"""Shared fixtures: every test gets its own hands-free state directory.

Engine state lives in marker files under ``VOCAL_STATE_DIR`` (the user's
home by default). Pointing it at ``tmp_path`` keeps tests from touching
real state and from seeing each other's markers.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from vocal_lib.config import DEBUG_LOG_ENV, LOG_LEVEL_ENV, STATE_DIR_ENV, load_config
from vocal_lib.controller import HandsFreeController


@pytest.fixture(autouse=True)
def state_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / 'state'
    directory.mkdir()
    monkeypatch.setenv(STATE_DIR_ENV, str(directory))
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    monkeypatch.delenv(DEBUG_LOG_ENV, raising=False)
    return directory


@pytest.fixture
def controller(state_dir: Path) -> HandsFreeController:
    return HandsFreeController.from_config(load_config())
