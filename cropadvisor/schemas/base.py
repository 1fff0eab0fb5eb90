"""Shared pydantic base for camelCase wire payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
	"""Snake_case attributes in Python, camelCase keys on the wire.

	Both spellings are accepted on input so the provider normalizers and API
	clients can use whichever is natural.
	"""

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
