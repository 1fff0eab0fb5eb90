"""LLM integration — prompt assembly from weather + insights, completion call, fallback."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from cropadvisor.config import get_settings
from cropadvisor.core import compute_insights
from cropadvisor.core.insights import crop_display_name
from cropadvisor.models.enums import AskLanguageEnum
from cropadvisor.schemas.ask import AskResponse, ChatMessage
from cropadvisor.schemas.insights import Insights
from cropadvisor.schemas.weather import Location, WeatherReport

PROMPT_FORECAST_DAYS = 3

_logger = logging.getLogger("cropadvisor.llm")

EXAMPLE_PROMPTS: dict[AskLanguageEnum, tuple[str, ...]] = {
	AskLanguageEnum.en: (
		"Is it good time for irrigation?",
		"Why are my cotton leaves yellow?",
		"Should I spray pesticide tomorrow?",
		"Give me today's farming suggestions.",
		"What is the best time for planting?",
		"What is the rainfall forecast?",
	),
	AskLanguageEnum.ur: (
		"کیا آبیاری کا اچھا وقت ہے؟",
		"میرے کپاس کے پتے پیلا کیوں ہیں؟",
		"کیا مجھے کل کیڑے مار دوا چھڑکنی چاہیے؟",
		"آج کے لیے کاشتکاری کے مشورے دیں۔",
		"میرے لیے بہترین کاشتکاری کا وقت کیا ہے؟",
		"بارش کی پیشن گوئی کیا ہے؟",
	),
}


class LLMServiceError(RuntimeError):
	"""Raised when the completion API call fails."""


def example_prompts(language: AskLanguageEnum) -> list[str]:
	return list(EXAMPLE_PROMPTS[language])


def build_system_prompt(
	weather: WeatherReport | None,
	crop_type: str | None,
	language: AskLanguageEnum = AskLanguageEnum.en,
	location: Location | None = None,
	insights: Insights | None = None,
) -> str:
	urdu = language == AskLanguageEnum.ur
	parts = [
		"آپ ایک ماہر زرعی مشیر ہیں جو کسانوں کو موسم، کاشتکاری، اور زرعی مشورے دیتے ہیں۔ آپ کو اردو میں جواب دینا چاہیے۔"
		if urdu
		else (
			"You are an expert agricultural advisor helping farmers with weather, farming practices, "
			"and agricultural recommendations. Provide practical, actionable advice."
		)
	]

	if location is not None:
		parts.append(f"{'مقام' if urdu else 'Location'}: {location.display_name}")

	if weather is not None:
		w = weather.current
		header = "موجودہ موسمی حالات" if urdu else "Current Weather Conditions"
		parts.append(
			f"{header}:\n"
			f"- Temperature: {w.temperature:g}°C\n"
			f"- Humidity: {w.humidity:g}%\n"
			f"- Precipitation: {w.precipitation:.1f}mm\n"
			f"- Wind Speed: {w.wind_speed:g} km/h\n"
			f"- UV Index: {w.uv_index:g}\n"
			f"- Condition: {w.condition}"
		)
		upcoming = weather.forecast[:PROMPT_FORECAST_DAYS]
		if upcoming:
			lines = [
				f"Day {idx + 1}: {day.max_temp:g}°C/{day.min_temp:g}°C, Rain {day.precipitation:.1f}mm, "
				f"Rain Probability {day.rain_probability:g}%"
				for idx, day in enumerate(upcoming)
			]
			header = "اگلے 3 دنوں کی پیشن گوئی" if urdu else "Next 3 Days Forecast"
			parts.append(f"{header}:\n" + "\n".join(lines))

	if crop_type:
		parts.append(f"{'منتخب فصل' if urdu else 'Selected Crop'}: {crop_display_name(crop_type)}")

	if insights is not None:
		advice = "\n".join(f"- [{item.priority}] {item.message}" for item in insights.recommendations)
		parts.append(
			f"Crop loss risk: {insights.crop_loss_risk}/100\n"
			f"Pest/disease risk: {insights.pest_disease_risk.overall_risk}\n"
			f"Irrigation: {insights.irrigation_recommendation.message}"
			+ (f"\nAdvisory actions:\n{advice}" if advice else "")
		)

	parts.append(
		"مختصر، عملی، اور آسان الفاظ میں جواب دیں۔"
		if urdu
		else "Provide concise, practical answers in simple language."
	)
	return "\n\n".join(parts)


def fallback_answer(insights: Insights | None, language: AskLanguageEnum) -> str:
	"""Deterministic answer assembled from the advisory engine output."""
	if insights is None:
		if language == AskLanguageEnum.ur:
			return "موسم یا فصل کی معلومات دستیاب نہیں۔ براہ کرم مقام اور فصل منتخب کریں۔"
		return "No live assistant is configured. Select a location and crop to get rule-based advice."

	lines = [
		f"{insights.crop_name}: crop loss risk {insights.crop_loss_risk}/100, "
		f"pest/disease risk {insights.pest_disease_risk.overall_risk}.",
		insights.irrigation_recommendation.message + ".",
	]
	lines.extend(item.message for item in insights.recommendations if item.type != "irrigation")
	return " ".join(lines)


class LLMService:
	def __init__(self, http_client: httpx.AsyncClient | None = None):
		self.http_client = http_client
		self.settings = get_settings()

	async def ask(
		self,
		question: str,
		language: AskLanguageEnum = AskLanguageEnum.en,
		*,
		crop_type: str | None = None,
		weather: WeatherReport | None = None,
		location: Location | None = None,
		history: Sequence[ChatMessage] = (),
	) -> AskResponse:
		insights = None
		if crop_type and weather is not None:
			insights = compute_insights(crop_type, weather.current, weather.forecast)
			if insights is None:
				raise LookupError(f"Unknown crop type {crop_type!r}")

		system_prompt = build_system_prompt(weather, crop_type, language, location, insights)
		answer = await self.call_llm(system_prompt=system_prompt, question=question, history=history)

		return AskResponse(
			question=question,
			language=language,
			answer=answer if answer is not None else fallback_answer(insights, language),
			source="llm" if answer is not None else "fallback",
			model=self.settings.openai_model if answer is not None else None,
			crop_type=insights.crop_type if insights is not None else crop_type,
			crop_loss_risk=insights.crop_loss_risk if insights is not None else None,
			recommendations=insights.recommendations if insights is not None else [],
		)

	async def call_llm(
		self,
		*,
		system_prompt: str,
		question: str,
		history: Sequence[ChatMessage] = (),
	) -> str | None:
		"""Completion text, or None when no key is configured or the reply is unusable."""
		if not self.settings.openai_api_key:
			_logger.info("llm_fallback", extra={"reason": "no_api_key"})
			return None

		messages: list[dict[str, str]] = [{"role": "system", "content": system_prompt}]
		messages.extend({"role": item.role, "content": item.content} for item in history)
		messages.append({"role": "user", "content": question})

		headers = {
			"Authorization": f"Bearer {self.settings.openai_api_key}",
			"content-type": "application/json",
		}
		body = {
			"model": self.settings.openai_model,
			"messages": messages,
			"temperature": 0.7,
			"max_tokens": self.settings.openai_max_tokens,
		}
		url = f"{self.settings.openai_base_url.rstrip('/')}/chat/completions"

		try:
			payload = await self._post(url, headers, body)
		except (httpx.HTTPError, ValueError) as exc:
			_logger.error("llm_call_failed", extra={"error": str(exc)})
			raise LLMServiceError(f"completion request failed: {exc}") from exc

		text = _completion_text(payload)
		if not text:
			_logger.warning("llm_fallback", extra={"reason": "empty_completion"})
			return None
		return text

	async def _post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> Any:
		if self.http_client is not None:
			response = await self.http_client.post(url, headers=headers, json=body)
			response.raise_for_status()
			return response.json()
		async with httpx.AsyncClient(timeout=self.settings.openai_timeout_seconds) as client:
			response = await client.post(url, headers=headers, json=body)
			response.raise_for_status()
			return response.json()


def _completion_text(payload: Any) -> str:
	if not isinstance(payload, dict):
		return ""
	choices = payload.get("choices")
	if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
		return ""
	message = choices[0].get("message")
	if not isinstance(message, dict):
		return ""
	return str(message.get("content") or "").strip()
