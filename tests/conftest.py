"""
Shared Test Fixtures for the Blog Backend

Every test gets its own SQLite file and image directory under pytest's
tmp_path, so nothing touches ./db.test.sqlite or test/images.
"""

import io
import os
import sys
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blog_backend.api.server import create_app
from blog_backend.auth.crud import create_user
from blog_backend.config import Config
from blog_backend.db import connect, init_db


TEST_USERNAME = "testUser"
TEST_PASSWORD = "password123"
TEST_SECRET = "test-secret-key"


# =============================================================================
# Configuration / storage
# =============================================================================

@pytest.fixture
def cfg(tmp_path) -> Config:
    """A development config pointing at throwaway paths."""
    return Config(
        ENV="development",
        DB_PATH=str(tmp_path / "db.test.sqlite"),
        IMAGE_DIR=str(tmp_path / "images"),
        SECRET_KEY=TEST_SECRET,
        AUTH_TOKEN_EXPIRE_MINUTES=360,
        CORS_ALLOW_ORIGINS="",
    )


@pytest.fixture
def db_path(cfg) -> str:
    """Initialized database file, for tests that skip the HTTP layer."""
    init_db(cfg.DB_PATH)
    return cfg.DB_PATH


# =============================================================================
# HTTP client
# =============================================================================

@pytest.fixture
def client(cfg):
    """TestClient with the app lifespan running (schema + image dir created)."""
    app = create_app(cfg)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user(client, cfg) -> Dict:
    """The admin user, inserted the way scripts/create_user.py does it."""
    with connect(cfg.DB_PATH) as conn:
        return create_user(conn, username=TEST_USERNAME, password=TEST_PASSWORD)


@pytest.fixture
def token(client, user) -> str:
    response = client.post(
        "/api/blog/login",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Data factories
# =============================================================================

@pytest.fixture
def png_bytes() -> bytes:
    """A small real PNG so Pillow can derive variants from it."""
    img = Image.new("RGB", (320, 240), color=(200, 40, 90))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
