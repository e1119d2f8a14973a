"""Scoring engine - weighted overall score and rating bands."""

from collections.abc import Mapping
from enum import Enum


class RatingBand(str, Enum):
    """Rating band codes as persisted in supplier_ratings.rating."""

    EXCELLENT = "excellent"
    GOOD = "good"
    SATISFACTORY = "satisfactory"
    NEEDS_IMPROVEMENT = "needs_improvement"
    POOR = "poor"
    NOT_RATED = "not_rated"


# Category -> weight. Order is the fixed enumeration order used for tie-breaks.
CATEGORY_WEIGHTS: dict[str, float] = {
    "quality": 0.30,
    "delivery": 0.25,
    "price": 0.20,
    "service": 0.15,
    "compliance": 0.10,
}

CATEGORY_LABELS: dict[str, str] = {
    "quality": "Quality",
    "delivery": "Delivery",
    "price": "Price",
    "service": "Service",
    "compliance": "Compliance",
}

# Lower bound (inclusive) -> band, evaluated high to low.
BAND_THRESHOLDS: tuple[tuple[float, RatingBand], ...] = (
    (90, RatingBand.EXCELLENT),
    (80, RatingBand.GOOD),
    (70, RatingBand.SATISFACTORY),
    (60, RatingBand.NEEDS_IMPROVEMENT),
)

BAND_TITLES: dict[RatingBand, str] = {
    RatingBand.EXCELLENT: "Excellent",
    RatingBand.GOOD: "Good",
    RatingBand.SATISFACTORY: "Satisfactory",
    RatingBand.NEEDS_IMPROVEMENT: "Needs Improvement",
    RatingBand.POOR: "Poor",
    RatingBand.NOT_RATED: "Not Rated",
}

LOW_BANDS = frozenset({RatingBand.NEEDS_IMPROVEMENT, RatingBand.POOR})


def calculate_overall_score(scores: Mapping[str, float]) -> float:
    """
    Weighted sum of the five category scores, rounded to 2 decimals.
    Every category must be present; nothing is defaulted here.
    """
    missing = [category for category in CATEGORY_WEIGHTS if category not in scores]
    if missing:
        raise ValueError(f"Missing category scores: {', '.join(missing)}")

    overall = 0.0
    for category, weight in CATEGORY_WEIGHTS.items():
        overall += float(scores[category]) * weight
    return round(overall, 2)


def determine_rating(score: float) -> RatingBand:
    """Map a score to its band. First match wins; no clamping."""
    for lower_bound, band in BAND_THRESHOLDS:
        if score >= lower_bound:
            return band
    return RatingBand.POOR


def band_title(score: float) -> str:
    """Human-readable title for the band a score falls in (e.g. 'Needs Improvement')."""
    return BAND_TITLES[determine_rating(score)]
