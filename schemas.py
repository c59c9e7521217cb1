from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MarketingObjective(str, Enum):
    AWARENESS = "awareness"
    CONSIDERATION = "consideration"
    SALES = "sales"
    LOYALTY = "loyalty"


CUSTOM_OPTION = "custom"

# Preset audiences and brand tones offered to the marketer
AUDIENCE_OPTIONS = {
    "general": "General Consumers (B2C)",
    "genz": "Gen Z / Young Adults",
    "millennials": "Millennials",
    "parents": "Parents / Families",
    "b2b": "B2B Professionals / Decision Makers",
    "smb": "Small Business Owners",
}

TONE_OPTIONS = {
    "professional": "Professional / Authoritative",
    "friendly": "Friendly / Conversational",
    "humorous": "Humorous / Witty",
    "empathetic": "Empathetic / Caring",
    "inspirational": "Inspirational / Aspirational",
    "urgent": "Direct / Urgent",
}


def _resolve_option(value: Optional[str], custom_value: Optional[str], options: Dict[str, str]) -> Optional[str]:
    if not value:
        return None
    if value == CUSTOM_OPTION:
        return custom_value or None
    # Anything outside the presets is taken as free text
    return options.get(value, value)


class CTA(BaseModel):
    """A call-to-action example. Only the text is read; other columns ride along."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    text: str = Field(alias="CTA Text")
    type_score: Optional[float] = Field(default=None, alias="Type Score")
    tone_score: Optional[float] = Field(default=None, alias="Tone Score")
    simple_avg: Optional[float] = Field(default=None, alias="Simple Avg")

    @property
    def extras(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class CampaignGoalDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    target_audience: Optional[str] = Field(default=None, alias="targetAudience")
    custom_target_audience: Optional[str] = Field(default=None, alias="customTargetAudience")
    brand_tone: Optional[str] = Field(default=None, alias="brandTone")
    custom_brand_tone: Optional[str] = Field(default=None, alias="customBrandTone")
    key_message: Optional[str] = Field(default=None, alias="keyMessage")

    def audience_text(self) -> Optional[str]:
        return _resolve_option(self.target_audience, self.custom_target_audience, AUDIENCE_OPTIONS)

    def brand_tone_text(self) -> Optional[str]:
        return _resolve_option(self.brand_tone, self.custom_brand_tone, TONE_OPTIONS)


class AnalyzeRequest(BaseModel):
    # Every field is optional at the schema level so that a missing one
    # is reported as a 400 by the assembler rather than a 422 by FastAPI.
    campaigns: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    ctas: Optional[List[CTA]] = None
    # Any value is accepted; unknown objectives fall back to the neutral instruction
    objective: Optional[Any] = None
    details: Optional[CampaignGoalDetails] = None


class CampaignAnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    campaign_message: str = Field(alias="campaignMessage")
    combined_emotion_score: float = Field(alias="combinedEmotionScore")
    clarity_and_impact_score: float = Field(alias="clarityAndImpactScore")
    trend_relevance_score: float = Field(alias="trendRelevanceScore")
    stepps_shareability_score: float = Field(alias="steppsShareabilityScore")
    cta_strength_score: float = Field(alias="ctaStrengthScore")
    subjective_fit_score: float = Field(alias="subjectiveFitScore")
    weighted_campaign_confidence_score: float = Field(alias="weightedCampaignConfidenceScore")
    recommendation: str

    def to_record(self) -> Dict[str, Any]:
        """Wire form, keyed by the camelCase field names."""
        return self.model_dump(by_alias=True)


# Wire field names in declaration order; also the CSV header
RESULT_FIELDS = [field.alias or name for name, field in CampaignAnalysisResult.model_fields.items()]

COMPONENT_SCORE_FIELDS = [
    "combinedEmotionScore",
    "clarityAndImpactScore",
    "trendRelevanceScore",
    "steppsShareabilityScore",
    "ctaStrengthScore",
    "subjectiveFitScore",
]
