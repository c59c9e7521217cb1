import json
from typing import List, Optional

from errors import InputValidationError
from schemas import CTA, CampaignGoalDetails, MarketingObjective
from scoring import (
    GOOD_THRESHOLD,
    RECOMMENDATION_REVISE,
    RECOMMENDATION_REWORK,
    RECOMMENDATION_STRONG,
    SCORE_WEIGHTS,
    STRONG_THRESHOLD,
)

SYSTEM_PROMPT = (
    "You are an expert marketing campaign analyst. You score campaign "
    "messages strictly against the criteria you are given and answer "
    "with JSON only."
)

OBJECTIVE_INSTRUCTIONS = {
    MarketingObjective.AWARENESS: """The user's goal is 'Create Awareness'. The main goal is to get attention and be memorable.
- **subjectiveFitScore**: Should be HIGHEST for messages that are simple, catchy, and have a strong emotional hook (positive like joy/surprise, or even negative if it's attention-grabbing). Prioritize high shareability and clarity.
- A message is a POOR FIT if it is too complex, boring, or lacks a strong emotional angle.""",
    MarketingObjective.CONSIDERATION: """The user's goal is 'Drive Consideration'. The main goal is to build trust and inform the user, helping them evaluate the product.
- **subjectiveFitScore**: Should be HIGHEST for messages that are informative, benefit-driven, and have a neutral-to-positive, trustworthy tone. Clarity and credibility are key.
- A message is a POOR FIT if it's overly emotional, vague, or sounds like high-pressure sales hype.""",
    MarketingObjective.SALES: """The user's goal is 'Drive Sales (Conversion)'. The main goal is to get the user to take a specific action NOW.
- **subjectiveFitScore**: Should be HIGHEST for messages with a very clear, strong Call-to-Action (CTA) that create urgency or scarcity (e.g., using fear of missing out). A slightly anxious or exciting tone is GOOD. The ctaStrengthScore is critical for this objective.
- A message is a POOR FIT if the CTA is weak/unclear, or if the tone is too passive and doesn't motivate action.""",
    MarketingObjective.LOYALTY: """The user's goal is 'Build Loyalty (Retention)'. The main goal is to make existing customers feel valued.
- **subjectiveFitScore**: Should be HIGHEST for messages with a warm, appreciative, and positive tone. Language of exclusivity ("for our members"), community, and gratitude should be rewarded.
- A message is a POOR FIT if it feels impersonal, generic, or is too focused on selling instead of thanking or rewarding.""",
}

NEUTRAL_OBJECTIVE_INSTRUCTIONS = (
    "No specific objective provided. Use a general-purpose analysis, "
    "balancing all factors equally."
)

CRITERIA_INSTRUCTIONS = """**Analysis Criteria (Score from 1 to 5):**

1.  **combinedEmotionScore (1-5):** Analyze the raw emotional tone, independent of intent. 1 is extremely negative, 3 is neutral, 5 is extremely positive.
2.  **clarityAndImpactScore (1-5):** Evaluate message quality. 1 is unclear and weak (passive voice, long sentences, jargon). 5 is crystal-clear and powerful (active voice, strong verbs, concise).
3.  **trendRelevanceScore (1-5):** Assess relevance to the provided "Trending Keywords". 1 is no relevance, 5 is highly relevant and well-integrated.
4.  **steppsShareabilityScore (1-5):** Evaluate potential for social sharing. Consider emotional resonance, practical value, and engagement. 1 is low, 5 is high.
5.  **ctaStrengthScore (1-5):** Analyze the Call-to-Action. 1 is weak, vague, or missing. 5 is clear, urgent, and persuasive.
6.  **subjectiveFitScore (1-5):** This is the most important score. Based on the **Marketing Objective** and any provided **Optional Campaign Details**, how well does the message fit the strategic goal? 1 is a complete mismatch, 5 is a perfect fit."""


def parse_objective(objective) -> Optional[MarketingObjective]:
    """Known objective or None; never raises."""
    if isinstance(objective, MarketingObjective):
        return objective
    try:
        return MarketingObjective(str(objective).strip().lower())
    except ValueError:
        return None


def get_objective_instructions(objective) -> str:
    parsed = parse_objective(objective) if objective else None
    return OBJECTIVE_INSTRUCTIONS.get(parsed, NEUTRAL_OBJECTIVE_INSTRUCTIONS)


def get_optional_details_instructions(details: Optional[CampaignGoalDetails]) -> str:
    if details is None:
        return ""

    lines = []
    audience_text = details.audience_text()
    if audience_text:
        lines.append(f'- **Target Audience:** "{audience_text}". The message should resonate with this specific group.')

    brand_tone_text = details.brand_tone_text()
    if brand_tone_text:
        lines.append(f'- **Brand Tone/Voice:** "{brand_tone_text}". The message\'s tone must be consistent with this brand voice.')

    if details.key_message:
        lines.append(f'- **Key Message/USP:** "{details.key_message}". The message should clearly communicate or reinforce this core idea.')

    if not lines:
        return ""

    body = "\n".join(lines)
    return f"""**Optional Campaign Details for Deeper Analysis:**
You MUST evaluate the campaign's fit against these specific details. The subjectiveFitScore should be heavily penalized if the message clashes with this context.
{body}"""


def get_calculation_instructions() -> str:
    weights = "\n".join(f"    *   {field}: {weight:.2f}" for field, weight in SCORE_WEIGHTS.items())
    return f"""**Final Calculations:**

Using the scores from the analysis, calculate the following:

1.  **weightedCampaignConfidenceScore:** Calculate a weighted average using these weights:
{weights}
    Round the final score to two decimal places.

2.  **recommendation:** Based on the "weightedCampaignConfidenceScore", provide one of the following recommendations:
    *   "{RECOMMENDATION_STRONG}" (if score >= {STRONG_THRESHOLD})
    *   "{RECOMMENDATION_REVISE}" (if score >= {GOOD_THRESHOLD} and < {STRONG_THRESHOLD})
    *   "{RECOMMENDATION_REWORK}" (if score < {GOOD_THRESHOLD})"""


def validate_inputs(campaigns, keywords, ctas, objective, details) -> None:
    required = {
        "campaigns": campaigns,
        "keywords": keywords,
        "ctas": ctas,
        "objective": objective,
        "details": details,
    }
    # Empty lists count as supplied; only absent values (or a blank objective) are rejected
    missing = [
        name for name, value in required.items()
        if value is None or (name == "objective" and isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise InputValidationError(f"Missing required parameters: {', '.join(missing)}")


def build_analysis_prompt(
    campaigns: List[str],
    keywords: List[str],
    ctas: List[CTA],
    objective,
    details: CampaignGoalDetails,
) -> str:
    validate_inputs(campaigns, keywords, ctas, objective, details)

    objective_instructions = get_objective_instructions(objective)
    details_instructions = get_optional_details_instructions(details)

    return f"""
Your task is to evaluate one or more campaign messages based on a rigorous set of criteria and the user's specified context. Return the analysis in a structured JSON format.

**Critical Context: Marketing Objective**
{objective_instructions}

{details_instructions}

**Input Data:**

1.  **Campaign Messages:**
```json
{json.dumps(campaigns, ensure_ascii=False)}
```

2.  **Trending Keywords:**
```json
{json.dumps(keywords, ensure_ascii=False)}
```

3.  **Call-to-Action (CTA) Examples:**
```json
{json.dumps([cta.text for cta in ctas], ensure_ascii=False)}
```

{CRITERIA_INSTRUCTIONS}

{get_calculation_instructions()}

**Output Format:**

Return a JSON object containing a single key "results" which is an array of JSON objects, one for each campaign message provided, in the same order as the input. Copy each campaign message verbatim into "campaignMessage". Strictly adhere to the provided JSON schema for each object in the array.
"""
