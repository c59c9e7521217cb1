import logging
import math
from typing import Dict, Mapping

logger = logging.getLogger(__name__)

MIN_SCORE = 1.0
MAX_SCORE = 5.0

# Composite weights, keyed by component score field
SCORE_WEIGHTS = {
    "subjectiveFitScore": 0.25,
    "clarityAndImpactScore": 0.20,
    "combinedEmotionScore": 0.20,
    "ctaStrengthScore": 0.15,
    "trendRelevanceScore": 0.10,
    "steppsShareabilityScore": 0.10,
}

STRONG_THRESHOLD = 4.0
GOOD_THRESHOLD = 3.0

RECOMMENDATION_STRONG = "Strong potential to succeed"
RECOMMENDATION_REVISE = "Good, but revise key elements"
RECOMMENDATION_REWORK = "Needs rework before launch"


def clamp_score(value: float, field: str = "score") -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{field}={value} is not a finite number")
    clamped = max(MIN_SCORE, min(MAX_SCORE, value))
    if clamped != value:
        logger.warning(f"⚠️ {field}={value} outside {MIN_SCORE}-{MAX_SCORE}, clamped to {clamped}")
    return clamped


def weighted_confidence_score(scores: Mapping[str, float]) -> float:
    """Weighted average of the six component scores, rounded to two decimals."""
    missing = [field for field in SCORE_WEIGHTS if field not in scores]
    if missing:
        raise KeyError(f"Missing component scores: {', '.join(missing)}")
    total = sum(weight * float(scores[field]) for field, weight in SCORE_WEIGHTS.items())
    return round(total, 2)


def recommendation_for(score: float) -> str:
    if score >= STRONG_THRESHOLD:
        return RECOMMENDATION_STRONG
    if score >= GOOD_THRESHOLD:
        return RECOMMENDATION_REVISE
    return RECOMMENDATION_REWORK


def aggregate(scores: Mapping[str, float]) -> Dict[str, object]:
    """Composite score and recommendation for one set of component scores."""
    composite = weighted_confidence_score(scores)
    return {
        "weightedCampaignConfidenceScore": composite,
        "recommendation": recommendation_for(composite),
    }
