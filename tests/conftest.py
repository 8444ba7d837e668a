import os

import pytest

from core.config import AppSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user env vars, .env files and config dirs out of the tests."""
    for key in list(os.environ):
        if key.startswith("URLLAB_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path):
    return AppSettings(_env_file=None, cache_dir=tmp_path / "http-cache")
