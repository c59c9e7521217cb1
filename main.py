import time
import logging
from collections import Counter
from typing import Any, Dict, List

from errors import OracleResponseError
from prompt_builder import build_analysis_prompt
from schemas import COMPONENT_SCORE_FIELDS, AnalyzeRequest, CampaignAnalysisResult
from scoring import aggregate, clamp_score

logger = logging.getLogger(__name__)


def align_results(campaigns: List[str], raw_results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Put the oracle's records in the order the messages were submitted.
    Matches on the exact message text when every message is found,
    positionally otherwise.
    """
    if len(raw_results) != len(campaigns):
        raise OracleResponseError(
            f"Scoring oracle returned {len(raw_results)} results for {len(campaigns)} campaign messages."
        )

    by_message = {}
    for item in raw_results:
        by_message.setdefault(item.get("campaignMessage"), []).append(item)

    wanted = Counter(campaigns)
    if all(len(by_message.get(message, [])) == count for message, count in wanted.items()):
        return [by_message[message].pop(0) for message in campaigns]

    logger.warning("⚠️ Oracle did not echo every campaign message, aligning results by position")
    return list(raw_results)


def build_result(campaign: str, raw: Dict[str, Any]) -> CampaignAnalysisResult:
    try:
        scores = {field: clamp_score(float(raw[field]), field) for field in COMPONENT_SCORE_FIELDS}
    except (TypeError, ValueError) as e:
        raise OracleResponseError(f"Unusable score from the scoring oracle: {e}")

    computed = aggregate(scores)
    reported = raw.get("weightedCampaignConfidenceScore")
    if reported is not None and reported != computed["weightedCampaignConfidenceScore"]:
        logger.warning(
            f"⚠️ Oracle composite {reported} differs from computed "
            f"{computed['weightedCampaignConfidenceScore']} for: {campaign[:40]}"
        )

    return CampaignAnalysisResult(campaignMessage=campaign, **scores, **computed)


def analyze_campaigns(request: AnalyzeRequest, oracle) -> List[CampaignAnalysisResult]:
    """
    Validate the request, build the prompt, call the oracle and recompute
    the composite score and recommendation for every campaign message.
    """
    total_start = time.time()

    prompt = build_analysis_prompt(
        request.campaigns,
        request.keywords,
        request.ctas,
        request.objective,
        request.details,
    )

    if not request.campaigns:
        logger.info("No campaign messages submitted, skipping oracle call")
        return []

    oracle_start = time.time()
    raw_results = oracle.score(prompt)
    logger.info(f"✅ Oracle returned {len(raw_results)} results in {time.time()-oracle_start:.1f}s")

    aligned = align_results(request.campaigns, raw_results)
    results = [build_result(campaign, raw) for campaign, raw in zip(request.campaigns, aligned)]

    logger.info(f"🎯 Analysis complete: {len(results)} campaigns in {time.time()-total_start:.1f}s")
    return results
