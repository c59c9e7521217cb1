import pytest

from errors import InputValidationError
from prompt_builder import (
    NEUTRAL_OBJECTIVE_INSTRUCTIONS,
    OBJECTIVE_INSTRUCTIONS,
    build_analysis_prompt,
    get_objective_instructions,
    get_optional_details_instructions,
    parse_objective,
)
from schemas import CampaignGoalDetails, MarketingObjective


@pytest.mark.parametrize("objective", ["awareness", "consideration", "sales", "loyalty"])
def test_each_objective_has_its_own_block(objective):
    text = get_objective_instructions(objective)
    assert text == OBJECTIVE_INSTRUCTIONS[MarketingObjective(objective)]
    assert text != NEUTRAL_OBJECTIVE_INSTRUCTIONS


@pytest.mark.parametrize("objective", [None, "", "world-domination", 42])
def test_unknown_objective_falls_back_to_neutral(objective):
    assert get_objective_instructions(objective) == NEUTRAL_OBJECTIVE_INSTRUCTIONS


def test_parse_objective_is_case_insensitive():
    assert parse_objective(" Loyalty ") is MarketingObjective.LOYALTY
    assert parse_objective("nope") is None


def test_details_block_lists_supplied_context(details):
    block = get_optional_details_instructions(details)
    assert '"B2B Professionals / Decision Makers"' in block
    assert '"Professional / Authoritative"' in block
    assert '"Save hours every week"' in block
    assert "heavily penalized" in block


def test_details_block_empty_without_context():
    assert get_optional_details_instructions(CampaignGoalDetails()) == ""
    assert get_optional_details_instructions(None) == ""


def test_details_custom_and_free_text_values():
    details = CampaignGoalDetails(
        targetAudience="custom",
        customTargetAudience="Retired sailors",
        brandTone="Playful but precise",
    )
    block = get_optional_details_instructions(details)
    assert '"Retired sailors"' in block
    assert '"Playful but precise"' in block
    assert "Key Message" not in block


def test_custom_without_text_is_skipped():
    details = CampaignGoalDetails(targetAudience="custom", keyMessage="Fast shipping")
    block = get_optional_details_instructions(details)
    assert "Target Audience" not in block
    assert "Fast shipping" in block


def test_prompt_contains_inputs_and_formula(ctas, details):
    prompt = build_analysis_prompt(
        ["Buy one, get one free", 'Say "hello" to summer'],
        ["bogo", "summer"],
        ctas,
        "sales",
        details,
    )
    assert OBJECTIVE_INSTRUCTIONS[MarketingObjective.SALES] in prompt
    assert '["Buy one, get one free", "Say \\"hello\\" to summer"]' in prompt
    assert '["bogo", "summer"]' in prompt
    assert '["Shop now", "Learn more"]' in prompt
    assert "Tone Score" not in prompt
    assert "subjectiveFitScore: 0.25" in prompt
    assert "steppsShareabilityScore: 0.10" in prompt
    assert '"results"' in prompt


def test_prompt_with_unknown_objective_does_not_raise(ctas):
    prompt = build_analysis_prompt(["Hi"], [], ctas, "mystery", CampaignGoalDetails())
    assert NEUTRAL_OBJECTIVE_INSTRUCTIONS in prompt
    assert "Details for Deeper Analysis" not in prompt


@pytest.mark.parametrize("missing", ["campaigns", "keywords", "ctas", "objective", "details"])
def test_missing_input_is_a_validation_error(missing, ctas, details):
    inputs = {
        "campaigns": ["Hi"],
        "keywords": ["k"],
        "ctas": ctas,
        "objective": "awareness",
        "details": details,
    }
    inputs[missing] = None
    with pytest.raises(InputValidationError) as excinfo:
        build_analysis_prompt(**inputs)
    assert missing in excinfo.value.message
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize("objective", [42, 0, ["sales"]])
def test_non_string_objective_is_supplied(objective, ctas, details):
    prompt = build_analysis_prompt(["Hi"], ["k"], ctas, objective, details)
    assert NEUTRAL_OBJECTIVE_INSTRUCTIONS in prompt


def test_blank_objective_is_missing(ctas, details):
    with pytest.raises(InputValidationError, match="objective"):
        build_analysis_prompt(["Hi"], ["k"], ctas, "  ", details)
