from __future__ import annotations

import datetime as dt

import pytest
from httpx import AsyncClient

from cropadvisor.main import app
from cropadvisor.schemas.weather import Location
from cropadvisor.services.analytics_service import HISTORY_KEY
from cropadvisor.services.geocoding_service import GeocodingService
from cropadvisor.services.weather_service import WeatherProviderError, WeatherService
from factories import make_report, make_snapshot


@pytest.fixture
def provider_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[float, float]]:
	"""Stub the Open-Meteo fetch with a hot, dry report and record each call."""
	calls: list[tuple[float, float]] = []

	async def fake_get_weather(self: WeatherService, latitude: float, longitude: float, timezone: str = "auto"):
		calls.append((latitude, longitude))
		return make_report(make_snapshot(temperature=36, humidity=20), forecast=[])

	monkeypatch.setattr(WeatherService, "get_weather", fake_get_weather)
	return calls


@pytest.mark.asyncio
async def test_post_insights_accepts_camel_case(client: AsyncClient) -> None:
	payload = {
		"cropType": "rice",
		"current": {"temperature": 27, "humidity": 80, "precipitation": 0, "windSpeed": 0, "uvIndex": 6},
		"forecast": [
			{"maxTemp": 30, "minTemp": 24, "precipitation": None, "rainProbability": 20, "windSpeed": 5},
		],
	}
	response = await client.post("/api/v1/insights", json=payload)

	assert response.status_code == 200
	body = response.json()
	assert body["cropName"] == "Rice"
	assert body["pestDiseaseRisk"]["overallRisk"] == "high"
	assert body["cropLossRisk"] == 32
	assert body["currentConditions"]["windSpeed"]["status"] == "good"


@pytest.mark.asyncio
async def test_post_insights_errors(client: AsyncClient) -> None:
	unknown = await client.post(
		"/api/v1/insights",
		json={"cropType": "banana", "current": {"temperature": 20, "humidity": 50}},
	)
	invalid = await client.post(
		"/api/v1/insights",
		json={"cropType": "wheat", "current": {"temperature": 20, "humidity": 140}},
	)

	assert unknown.status_code == 404
	assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_list_crops(client: AsyncClient) -> None:
	response = await client.get("/api/v1/crops")
	assert response.status_code == 200
	body = response.json()
	assert sorted(body) == ["cotton", "rice", "sugarcane", "vegetables", "wheat"]
	assert body["wheat"]["tempMin"] == 10
	assert body["rice"]["humidityOptimal"] == [75, 85]


@pytest.mark.asyncio
async def test_live_insights_cache_and_history(client: AsyncClient, fake_redis, provider_calls) -> None:
	params = {"latitude": 31.5204, "longitude": 74.3587}
	first = await client.get("/api/v1/insights/wheat", params=params)
	second = await client.get("/api/v1/insights/wheat", params=params)

	assert first.status_code == 200
	assert first.json()["cached"] is False
	assert second.json()["cached"] is True
	assert first.json()["locationKey"] == "31.5204,74.3587"
	assert first.json()["insights"]["cropLossRisk"] == 81
	assert len(provider_calls) == 1
	assert dt.date.today().isoformat() in fake_redis.hashes[HISTORY_KEY]


@pytest.mark.asyncio
async def test_live_insights_unknown_crop_skips_provider(client: AsyncClient, provider_calls) -> None:
	response = await client.get("/api/v1/insights/banana", params={"latitude": 31.5, "longitude": 74.3})
	assert response.status_code == 404
	assert provider_calls == []


@pytest.mark.asyncio
async def test_weather_endpoint_and_provider_failure(client: AsyncClient, monkeypatch: pytest.MonkeyPatch, provider_calls) -> None:
	ok = await client.get("/api/v1/weather", params={"latitude": 31.5, "longitude": 74.3})
	assert ok.status_code == 200
	assert ok.json()["weather"]["current"]["temperature"] == 36
	assert ok.json()["weather"]["timezoneAbbreviation"] == "PKT"

	async def failing(self: WeatherService, latitude: float, longitude: float, timezone: str = "auto"):
		raise WeatherProviderError("forecast request failed: timeout")

	monkeypatch.setattr(WeatherService, "get_weather", failing)
	failed = await client.get("/api/v1/weather", params={"latitude": 10.0, "longitude": 10.0})
	assert failed.status_code == 502

	out_of_range = await client.get("/api/v1/weather", params={"latitude": 95, "longitude": 10})
	assert out_of_range.status_code == 422


@pytest.mark.asyncio
async def test_location_endpoints(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	lahore = Location(
		id="1",
		name="Lahore",
		country="Pakistan",
		admin1="Punjab",
		latitude=31.558,
		longitude=74.351,
		display_name="Lahore, Punjab, Pakistan",
	)

	async def fake_search(self: GeocodingService, query: str) -> list[Location]:
		return [lahore] if query == "Lahore" else []

	async def fake_reverse(self: GeocodingService, latitude: float, longitude: float) -> Location | None:
		return lahore if latitude > 0 else None

	monkeypatch.setattr(GeocodingService, "search", fake_search)
	monkeypatch.setattr(GeocodingService, "reverse", fake_reverse)

	search = await client.get("/api/v1/locations/search", params={"q": "Lahore"})
	assert search.status_code == 200
	assert search.json()[0]["displayName"] == "Lahore, Punjab, Pakistan"

	found = await client.get("/api/v1/locations/reverse", params={"latitude": 31.5, "longitude": 74.3})
	missing = await client.get("/api/v1/locations/reverse", params={"latitude": -60, "longitude": 0})
	assert found.json()["name"] == "Lahore"
	assert missing.status_code == 404


@pytest.mark.asyncio
async def test_alert_endpoints(client: AsyncClient, fake_redis, provider_calls) -> None:
	params = {"latitude": 31.5, "longitude": 74.3, "crop_type": "wheat"}

	before = await client.get("/api/v1/alerts", params=params)
	assert before.status_code == 200
	assert "heat" in [alert["id"] for alert in before.json()["alerts"]]

	dismissed = await client.post("/api/v1/alerts/heat/dismiss")
	assert dismissed.status_code == 200
	assert dismissed.json() == {"alertId": "heat", "dismissed": True}

	after = await client.get("/api/v1/alerts", params=params)
	assert "heat" not in [alert["id"] for alert in after.json()["alerts"]]

	cleared = await client.delete("/api/v1/alerts/dismissed")
	assert cleared.status_code == 204
	restored = await client.get("/api/v1/alerts", params=params)
	assert "heat" in [alert["id"] for alert in restored.json()["alerts"]]

	unknown = await client.get("/api/v1/alerts", params={**params, "crop_type": "banana"})
	assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_dismiss_without_redis_is_unavailable(client: AsyncClient) -> None:
	app.state.redis = None
	response = await client.post("/api/v1/alerts/heat/dismiss")
	assert response.status_code == 503
