import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))
TESTS_ROOT = Path(__file__).resolve().parent
if str(TESTS_ROOT) not in sys.path:
	sys.path.insert(0, str(TESTS_ROOT))

from fakes import FakePool
from techconnect.infra import postgres
from techconnect.main import app
from techconnect.settings import settings


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from techconnect.infra.redis import redis_client, set_redis_client
	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)
	yield
	postgres.set_pool(None)


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Ensure a consistent test environment."""
	original_env = settings.environment
	original_policy = settings.announcement_read_policy
	settings.environment = "dev"
	settings.announcement_read_policy = "club"
	try:
		yield
	finally:
		settings.environment = original_env
		settings.announcement_read_policy = original_policy


@pytest.fixture
def fake_db():
	pool = FakePool()
	postgres.set_pool(pool)
	return pool.db


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
