"""Quality-tier classification of priority scores.

A tier is always derived from ``priority_score`` at read time; nothing stores it.
"""

from __future__ import annotations

from curation.config import DEFAULT_THRESHOLDS, TierThresholds
from curation.data_models import QUALITY_TIERS, require_choice


_TIER_RANK = {"top_pick": 1, "good_buy": 2, "caution": 3}

_TIER_LABELS = {
    "top_pick": "Top Pick",
    "good_buy": "Good Buy",
    "caution": "Caution",
}

_TIER_DESCRIPTIONS = {
    "top_pick": "Exceptional vehicles that meet all criteria",
    "good_buy": "Solid vehicles with minor compromises",
    "caution": "Vehicles requiring careful consideration",
}


def classify(score: int, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> str:
    """Map a priority score to ``top_pick``, ``good_buy`` or ``caution``.

    Out-of-range scores are classified by the same rule; range checks belong to ingestion.
    """
    if score >= thresholds.top_pick_min:
        return "top_pick"
    if score >= thresholds.good_buy_min:
        return "good_buy"
    return "caution"


def tier_rank(tier: str) -> int:
    return _TIER_RANK[require_choice("quality tier", tier, QUALITY_TIERS)]


def tier_label(tier: str) -> str:
    return _TIER_LABELS[require_choice("quality tier", tier, QUALITY_TIERS)]


def tier_description(tier: str) -> str:
    return _TIER_DESCRIPTIONS[require_choice("quality tier", tier, QUALITY_TIERS)]
