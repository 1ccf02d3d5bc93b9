import asyncio
import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("REDIS_URL", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from main import app
from shared.cache import CacheLookup, CacheStatus, get_cache
from shared.config.database import Base, get_db
from shared.storage import get_storage
from services.product_service.models import Category
from services.product_service.seed import CATEGORIES


class InMemoryCache:
    """Dict-backed stand-in for RedisCache; flip ``is_connected`` to simulate an outage."""

    def __init__(self):
        self.store: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.is_connected = True

    async def get(self, key):
        if not self.is_connected:
            return CacheLookup(CacheStatus.UNAVAILABLE)
        if key not in self.store:
            return CacheLookup(CacheStatus.MISS)
        return CacheLookup(CacheStatus.HIT, self.store[key])

    async def set(self, key, value, ttl):
        if not self.is_connected:
            return False
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key):
        if not self.is_connected:
            return False
        self.store.pop(key, None)
        return True


class FakeStorage:
    bucket = "shopquanao"

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = False

    async def put(self, key, data, content_type):
        if self.fail:
            raise ConnectionError("object store unreachable")
        self.objects[key] = (data, content_type)
        return f"http://storage.test/{self.bucket}/{key}"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}", poolclass=NullPool)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async def prepare():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with factory() as session:
            session.add_all([Category(id=cid, name=name) for cid, name in CATEGORIES])
            await session.commit()

    asyncio.run(prepare())
    yield factory
    asyncio.run(engine.dispose())


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(session_factory, cache, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()
