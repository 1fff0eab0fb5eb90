"""Redis-backed cache of the latest weather report per location."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from pydantic import ValidationError
from redis.asyncio import Redis

from cropadvisor.config import get_settings
from cropadvisor.schemas.weather import CachedWeather, Location, WeatherReport

_logger = logging.getLogger("cropadvisor.cache")


class WeatherCache:
	"""Versioned, TTL-bound weather entries under ``weather:{lat},{lon}``.

	A missing Redis client turns every read into a miss and every write into
	a no-op, so callers never need to branch on cache availability.
	"""

	def __init__(self, redis_client: Redis | None = None):
		self.redis_client = redis_client
		self.settings = get_settings()

	@staticmethod
	def _key(location_key: str) -> str:
		return f"weather:{location_key}"

	@property
	def enabled(self) -> bool:
		return self.redis_client is not None and self.settings.cache_enabled

	async def get(self, location_key: str) -> CachedWeather | None:
		if not self.enabled:
			return None
		raw = await self.redis_client.get(self._key(location_key))
		if raw is None:
			return None

		try:
			entry = CachedWeather.model_validate_json(raw)
		except ValidationError as exc:
			_logger.warning("weather_cache_corrupt", extra={"key": location_key, "error": str(exc)})
			await self.invalidate(location_key)
			return None

		if entry.version != self.settings.weather_cache_version:
			_logger.info("weather_cache_stale_version", extra={"key": location_key, "version": entry.version})
			await self.invalidate(location_key)
			return None
		return entry

	async def set(self, location_key: str, report: WeatherReport, location: Location | None = None) -> None:
		if not self.enabled:
			return
		entry = CachedWeather(
			version=self.settings.weather_cache_version,
			cached_at=datetime.now(UTC),
			location=location,
			weather_data=report,
		)
		await self.redis_client.setex(
			self._key(location_key),
			self.settings.weather_cache_ttl_seconds,
			entry.model_dump_json(by_alias=True),
		)

	async def invalidate(self, location_key: str) -> None:
		if not self.enabled:
			return
		await self.redis_client.delete(self._key(location_key))
