"""
Shared fixtures: a throwaway SQLite-backed store and a TestClient around it.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from config.settings import config
from database.store import UserStore


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


def _sqlite_store(tmp_path) -> UserStore:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    return UserStore(engine)


@pytest_asyncio.fixture
async def store(tmp_path):
    s = _sqlite_store(tmp_path)
    await s.connect()
    yield s
    await s.close()


@pytest.fixture
def app(tmp_path):
    from main import create_app

    return create_app(_sqlite_store(tmp_path))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
