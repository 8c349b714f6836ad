"""
Pytest fixtures for backup_tags tests
"""
import pytest

from backup_tags.config import CONFIG_DIR_ENV
from backup_tags.tags_store import TagStore


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config directory at a fresh temp dir"""
    path = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(path))
    return path


@pytest.fixture
def db_path(config_dir):
    return config_dir / "tags.json"


@pytest.fixture
def store(db_path):
    return TagStore(db_path)
