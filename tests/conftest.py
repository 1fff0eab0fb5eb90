"""Shared pytest fixtures — async test client and fake Redis."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from cropadvisor.config import get_settings
from cropadvisor.main import app


class FakeRedis:
	"""In-memory stand-in for the handful of redis.asyncio calls the services make."""

	def __init__(self) -> None:
		self.values: dict[str, str] = {}
		self.sets: dict[str, set[str]] = {}
		self.hashes: dict[str, dict[str, str]] = {}
		self.ttls: dict[str, int] = {}

		self.get = AsyncMock(side_effect=self._get)
		self.setex = AsyncMock(side_effect=self._setex)
		self.delete = AsyncMock(side_effect=self._delete)
		self.smembers = AsyncMock(side_effect=self._smembers)
		self.sadd = AsyncMock(side_effect=self._sadd)
		self.expire = AsyncMock(side_effect=self._expire)
		self.hgetall = AsyncMock(side_effect=self._hgetall)
		self.hset = AsyncMock(side_effect=self._hset)
		self.hdel = AsyncMock(side_effect=self._hdel)
		self.ping = AsyncMock(return_value=True)
		self.aclose = AsyncMock()

	async def _get(self, key: str) -> str | None:
		return self.values.get(key)

	async def _setex(self, key: str, ttl: int, value: str) -> bool:
		self.values[key] = value
		self.ttls[key] = ttl
		return True

	async def _delete(self, *keys: str) -> int:
		removed = 0
		for key in keys:
			for store in (self.values, self.sets, self.hashes):
				if store.pop(key, None) is not None:
					removed += 1
		return removed

	async def _smembers(self, key: str) -> set[str]:
		return set(self.sets.get(key, set()))

	async def _sadd(self, key: str, *members: str) -> int:
		bucket = self.sets.setdefault(key, set())
		added = len(set(members) - bucket)
		bucket.update(members)
		return added

	async def _expire(self, key: str, ttl: int) -> bool:
		self.ttls[key] = ttl
		return True

	async def _hgetall(self, key: str) -> dict[str, str]:
		return dict(self.hashes.get(key, {}))

	async def _hset(self, key: str, field: str | None = None, value: str | None = None, mapping: dict[str, str] | None = None) -> int:
		bucket = self.hashes.setdefault(key, {})
		items = dict(mapping or {})
		if field is not None:
			items[field] = value
		added = len(set(items) - set(bucket))
		bucket.update(items)
		return added

	async def _hdel(self, key: str, *fields: str) -> int:
		bucket = self.hashes.get(key, {})
		return sum(1 for field in fields if bucket.pop(field, None) is not None)


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch: pytest.MonkeyPatch) -> None:
	"""Keep tests offline regardless of the developer's environment."""
	settings = get_settings()
	monkeypatch.setattr(settings, "openai_api_key", "")
	monkeypatch.setattr(settings, "cache_enabled", True)


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
async def client(fake_redis: FakeRedis) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and the fake Redis on app state."""
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan
	app.state.redis = fake_redis

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.state.redis = None
