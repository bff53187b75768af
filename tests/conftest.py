# tests/conftest.py

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Добавляем корень репозитория в PYTHONPATH, чтобы импортировался пакет pixelforge
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_JWT_SECRET = "test-secret-key-with-enough-length-0123456789"
# pixelforge.main builds an app at import time, which needs a signing key
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)

from pixelforge.core.rate_limit import limiter  # noqa: E402
from pixelforge.core.settings import Settings  # noqa: E402
from pixelforge.main import create_app  # noqa: E402

from .utils import ADMIN_PASSWORD, auth_headers  # noqa: E402


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        db_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        upload_dir=tmp_path / "uploads",
        admin_password=ADMIN_PASSWORD,
        app_debug=True,
    )


@pytest.fixture()
def app(settings):
    """
    Каждому тесту своё приложение с чистой БД и каталогом загрузок.
    Также сбрасываем rate limiter, чтобы лимиты не накапливались между тестами.
    """
    limiter.reset()
    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def admin_headers(client) -> dict[str, str]:
    return auth_headers(client, "admin", ADMIN_PASSWORD)
