"""Small numeric helpers shared by the scoring rules."""

from __future__ import annotations

import math
from collections.abc import Iterable


def round_half_up(value: float) -> int:
	"""Round to the nearest integer with .5 going up (not banker's rounding)."""
	return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
	return max(low, min(high, value))


def mean(values: Iterable[float]) -> float:
	"""Arithmetic mean; an empty sequence averages to 0."""
	items = list(values)
	if not items:
		return 0.0
	return sum(items) / len(items)
