"""Shared fixtures for the memograph tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from memograph._config import _project_config


@pytest.fixture(autouse=True)
def isolated_project_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run each test outside any project so the default engine config applies."""
    monkeypatch.chdir(tmp_path)
    _project_config.cache_clear()
    yield
    _project_config.cache_clear()
