"""
Tests for config directory resolution
"""
import os
from pathlib import Path

import pytest

from backup_tags.config import APP_DIR_NAME, CONFIG_DIR_ENV, get_config_dir


def test_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, f"  {tmp_path}  ")
    assert get_config_dir() == tmp_path


@pytest.mark.skipif(os.name == "nt", reason="XDG layout only")
def test_xdg_config_home(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_config_dir() == tmp_path / APP_DIR_NAME


@pytest.mark.skipif(os.name == "nt", reason="XDG layout only")
def test_home_fallback(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert get_config_dir() == tmp_path / ".config" / APP_DIR_NAME


@pytest.mark.skipif(os.name == "nt", reason="XDG layout only")
def test_unknown_home_raises_oserror(monkeypatch):
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

    def no_home(cls):
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", classmethod(no_home))
    with pytest.raises(OSError):
        get_config_dir()
