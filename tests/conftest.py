# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Each test gets its own SQLite file with the products table already in place,
# and an app whose bootstrap connects to it on the first attempt.
# =============================================================================

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from main import create_app
from src.models.products import products_table
from src.utils.config import Settings
from src.utils.db import metadata


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "products.db"
    engine = create_engine(f"sqlite:///{path}")
    metadata.create_all(engine, tables=[products_table])
    engine.dispose()
    return path


@pytest.fixture
def settings(db_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{db_path}",
        DB_CONNECT_RETRIES=1,
        DB_RETRY_DELAY=0,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def widget():
    return {"name": "Widget", "description": "A widget", "price": 9.99, "img": "w.png"}
