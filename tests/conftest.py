import pytest

from upload_storage.settings import get_settings
from upload_storage.storage.grid_fs import GridFSFile
from tests.fixtures.grid_fixtures import MemoryGrid, SampleUploader

SETTINGS_ENV_VARS = ["MONGODB_URI", "GRID_FS_BUCKET", "GRID_FS_ACCESS_URL", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from default settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_grid(monkeypatch):
    grid = MemoryGrid()
    monkeypatch.setattr(GridFSFile, "grid", grid)
    return grid


@pytest.fixture
def uploader():
    return SampleUploader()
