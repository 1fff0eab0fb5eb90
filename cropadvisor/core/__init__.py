"""Crop advisory rules engine.

Pure, synchronous scoring over a weather snapshot and forecast::

    from cropadvisor.core import compute_insights

    insights = compute_insights("wheat", current, forecast)
"""

from cropadvisor.core.activities import plan_activities
from cropadvisor.core.conditions import analyze_conditions
from cropadvisor.core.crop_loss import score_crop_loss
from cropadvisor.core.insights import compute_insights
from cropadvisor.core.irrigation import plan_irrigation
from cropadvisor.core.pest_disease import assess_pest_disease
from cropadvisor.core.recommendations import generate_recommendations

__all__ = [
    "analyze_conditions",
    "assess_pest_disease",
    "compute_insights",
    "generate_recommendations",
    "plan_activities",
    "plan_irrigation",
    "score_crop_loss",
]
