import json

import pytest

from errors import InputValidationError, OracleResponseError
from main import align_results, analyze_campaigns, build_result
from schemas import AnalyzeRequest
from scoring import RECOMMENDATION_REVISE, RECOMMENDATION_STRONG
from scoring_oracle import parse_results
from tests.conftest import FakeOracle, make_raw_result


def make_request(payload):
    return AnalyzeRequest.model_validate(payload)


def test_results_follow_input_order(payload):
    first, second = payload["campaigns"]
    oracle = FakeOracle(results=[make_raw_result(second, 3), make_raw_result(first, 5)])

    results = analyze_campaigns(make_request(payload), oracle)

    assert [r.campaign_message for r in results] == [first, second]
    assert results[0].weighted_campaign_confidence_score == 5.0
    assert results[1].weighted_campaign_confidence_score == 3.0
    assert len(oracle.prompts) == 1


def test_positional_alignment_when_messages_not_echoed(payload):
    oracle = FakeOracle(results=[make_raw_result("paraphrased A", 5), make_raw_result("paraphrased B", 2)])

    results = analyze_campaigns(make_request(payload), oracle)

    assert [r.campaign_message for r in results] == payload["campaigns"]
    assert results[0].subjective_fit_score == 5.0
    assert results[1].subjective_fit_score == 2.0


def test_duplicate_messages_are_kept():
    campaigns = ["Same", "Same", "Other"]
    raw = [make_raw_result("Other", 2), make_raw_result("Same", 4), make_raw_result("Same", 5)]
    aligned = align_results(campaigns, raw)
    assert [item["combinedEmotionScore"] for item in aligned] == [4, 5, 2]


def test_count_mismatch_is_protocol_error(payload):
    oracle = FakeOracle(results=[make_raw_result(payload["campaigns"][0])])
    with pytest.raises(OracleResponseError):
        analyze_campaigns(make_request(payload), oracle)


def test_composite_and_recommendation_are_recomputed():
    raw = make_raw_result("Hi", 3, weightedCampaignConfidenceScore=4.9, recommendation="Strong potential to succeed")
    result = build_result("Hi", raw)
    assert result.weighted_campaign_confidence_score == 3.0
    assert result.recommendation == RECOMMENDATION_REVISE


def test_out_of_range_scores_are_clamped():
    result = build_result("Hi", make_raw_result("Hi", 9))
    assert result.combined_emotion_score == 5.0
    assert result.weighted_campaign_confidence_score == 5.0
    assert result.recommendation == RECOMMENDATION_STRONG


def test_non_numeric_score_is_protocol_error():
    with pytest.raises(OracleResponseError):
        build_result("Hi", make_raw_result("Hi", "great"))


def test_missing_field_never_reaches_oracle(payload):
    del payload["keywords"]
    oracle = FakeOracle(results=[])
    with pytest.raises(InputValidationError):
        analyze_campaigns(make_request(payload), oracle)
    assert oracle.prompts == []


def test_no_campaigns_returns_empty_without_oracle_call(payload):
    payload["campaigns"] = []
    oracle = FakeOracle(results=[make_raw_result("unexpected")])
    assert analyze_campaigns(make_request(payload), oracle) == []
    assert oracle.prompts == []


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_score_is_protocol_error(bad):
    with pytest.raises(OracleResponseError, match="finite"):
        build_result("Hi", make_raw_result("Hi", 4, subjectiveFitScore=bad))


def test_nan_token_from_oracle_is_rejected(payload):
    content = json.dumps({"results": [make_raw_result(m, 4) for m in payload["campaigns"]]})
    content = content.replace('"ctaStrengthScore": 4', '"ctaStrengthScore": NaN', 1)
    oracle = FakeOracle(results=parse_results(content))
    with pytest.raises(OracleResponseError):
        analyze_campaigns(make_request(payload), oracle)
