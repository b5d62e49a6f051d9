"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
import tempfile
import shutil


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset the settings cache before and after each test."""
    from safedownload.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_root():
    """Create a temporary working root with an empty download directory."""
    temp_dir = tempfile.mkdtemp()
    root = Path(temp_dir)
    (root / "download").mkdir()
    yield root
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def policy(temp_root):
    """Default download policy rooted at the temporary directory."""
    from safedownload.config import DownloadPolicy

    return DownloadPolicy(download_dir="download/", base_path=temp_root)


@pytest.fixture
def env(temp_root, monkeypatch):
    """Point the settings at the temporary root."""
    log_dir = tempfile.mkdtemp()

    monkeypatch.setenv("SAFEDL_BASE_PATH", str(temp_root))
    monkeypatch.setenv("SAFEDL_DOWNLOAD_DIR", "download/")
    monkeypatch.setenv("SAFEDL_LOG_DIR", log_dir)
    monkeypatch.setenv("SAFEDL_DEBUG", "false")
    yield monkeypatch

    shutil.rmtree(log_dir, ignore_errors=True)


@pytest.fixture
def app(env):
    """Create test application with temporary directories."""
    # Import after setting env vars (caches are already cleared by autouse fixture)
    from safedownload.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    """Create test client."""
    from starlette.testclient import TestClient

    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_client(env):
    """Build a client for an app configured with extra environment variables."""
    from starlette.testclient import TestClient

    def _make(**overrides):
        from safedownload.config import get_settings
        from safedownload.main import create_app

        for key, value in overrides.items():
            env.setenv(key, value)
        get_settings.cache_clear()
        return TestClient(create_app())

    return _make
