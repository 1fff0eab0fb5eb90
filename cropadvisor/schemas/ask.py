"""Pydantic schemas for the /ask farming assistant endpoint."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from cropadvisor.models.enums import AskLanguageEnum
from cropadvisor.schemas.base import CamelModel
from cropadvisor.schemas.insights import Recommendation


class ChatMessage(CamelModel):
	role: Literal["user", "assistant"]
	content: str = Field(min_length=1, max_length=4000)


class AskRequest(CamelModel):
	question: str = Field(min_length=3, max_length=2000)
	language: AskLanguageEnum = AskLanguageEnum.en
	crop_type: str | None = None
	latitude: float | None = Field(default=None, ge=-90, le=90)
	longitude: float | None = Field(default=None, ge=-180, le=180)
	history: list[ChatMessage] = Field(default_factory=list, max_length=20)


class AskResponse(CamelModel):
	question: str
	language: AskLanguageEnum
	answer: str
	source: Literal["llm", "fallback"]
	model: str | None = None
	crop_type: str | None = None
	crop_loss_risk: int | None = Field(default=None, ge=0, le=100)
	recommendations: list[Recommendation] = Field(default_factory=list)


class ExamplePromptsResponse(CamelModel):
	language: AskLanguageEnum
	prompts: list[str] = Field(default_factory=list)
