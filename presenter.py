import csv
import io
import logging
from pathlib import Path
from typing import Iterable, List, Union

from errors import InputValidationError
from schemas import RESULT_FIELDS, CampaignAnalysisResult
from scoring import (
    GOOD_THRESHOLD,
    RECOMMENDATION_REVISE,
    RECOMMENDATION_STRONG,
    STRONG_THRESHOLD,
)

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "Campaign_Evaluation_Result.csv"

SCORE_EXPLANATIONS = {
    "Confidence Score": "The overall AI-powered prediction of this campaign's success, calculated as a weighted average of all other scores.",
    "Emotion": "The raw emotional tone of the message. A high score is very positive (e.g., joy), while a low score is negative (e.g., fear, anger).",
    "Clarity & Impact": "Measures how powerfully and clearly the message is written. High scores go to concise, impactful messages with strong, active language.",
    "Relevance": "How well the message aligns with the trending keywords you provided. High scores mean the keywords are integrated naturally and effectively.",
    "Shareability": "The message's potential to be shared on social media. It considers emotional hooks, practical value, and engaging elements.",
    "CTA Strength": "The effectiveness of the Call-to-Action. High scores mean the CTA is clear, urgent, and persuasive.",
}

# Display order of the component scores under the confidence score
SCORE_LABELS = [
    ("Emotion", "combined_emotion_score"),
    ("Clarity & Impact", "clarity_and_impact_score"),
    ("CTA Strength", "cta_strength_score"),
    ("Relevance", "trend_relevance_score"),
    ("Shareability", "stepps_shareability_score"),
]


def score_tier(value: float) -> str:
    if value >= STRONG_THRESHOLD:
        return "high"
    if value >= GOOD_THRESHOLD:
        return "medium"
    return "low"


def recommendation_badge(recommendation: str) -> str:
    if recommendation == RECOMMENDATION_STRONG:
        return f"✅ {recommendation}"
    if recommendation == RECOMMENDATION_REVISE:
        return f"⚠️ {recommendation}"
    return f"❌ {recommendation}"


def render_result(result: CampaignAnalysisResult) -> str:
    confidence = result.weighted_campaign_confidence_score
    lines = [
        f'Campaign Message: "{result.campaign_message}"',
        f"  Confidence Score: {confidence:.2f} out of 5.00 [{score_tier(confidence)}]",
    ]
    for label, attr in SCORE_LABELS:
        value = getattr(result, attr)
        lines.append(f"  {label}: {value:.2f} [{score_tier(value)}]")
    lines.append(f"  AI Recommendation: {recommendation_badge(result.recommendation)}")
    return "\n".join(lines)


def render_results(results: Iterable[CampaignAnalysisResult]) -> str:
    return "\n\n".join(render_result(result) for result in results)


def results_to_csv(results: List[CampaignAnalysisResult]) -> str:
    """Header row of field names, then one fully quoted row per result."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(RESULT_FIELDS)
    for result in results:
        record = result.to_record()
        writer.writerow([record[field] for field in RESULT_FIELDS])
    return buffer.getvalue().rstrip("\n")


def results_from_csv(text: str) -> List[CampaignAnalysisResult]:
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames != RESULT_FIELDS:
        raise InputValidationError(f"Unexpected CSV header: {reader.fieldnames}", error="Invalid results file.")
    return [CampaignAnalysisResult.model_validate(row) for row in reader]


def export_results(results: List[CampaignAnalysisResult], path: Union[str, Path] = EXPORT_FILENAME) -> Path:
    path = Path(path)
    # newline="" keeps carriage returns inside quoted fields intact
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(results_to_csv(results))
    logger.info(f"📄 Exported {len(results)} results to {path}")
    return path


def import_results(path: Union[str, Path]) -> List[CampaignAnalysisResult]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        results = results_from_csv(f.read())
    logger.info(f"📄 Imported {len(results)} results from {path}")
    return results
