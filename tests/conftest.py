import pytest
from fastapi.testclient import TestClient

from app import app, get_scoring_oracle
from schemas import CTA, CampaignGoalDetails


def make_raw_result(message, score=4.0, **overrides):
    record = {
        "campaignMessage": message,
        "combinedEmotionScore": score,
        "clarityAndImpactScore": score,
        "trendRelevanceScore": score,
        "steppsShareabilityScore": score,
        "ctaStrengthScore": score,
        "subjectiveFitScore": score,
        "weightedCampaignConfidenceScore": score,
        "recommendation": "whatever the oracle said",
    }
    record.update(overrides)
    return record


class FakeOracle:
    """Stands in for ScoringOracle; answers with canned records."""

    def __init__(self, results=None, error=None):
        self.results = results
        self.error = error
        self.prompts = []

    def score(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self.results is not None:
            return self.results
        return []


@pytest.fixture
def fake_oracle():
    return FakeOracle()


@pytest.fixture
def client(fake_oracle):
    app.dependency_overrides[get_scoring_oracle] = lambda: fake_oracle
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def payload():
    return {
        "campaigns": ["Summer sale: 30% off everything!", "Thanks for being with us, here's a gift"],
        "keywords": ["summer", "sale"],
        "ctas": [{"CTA Text": "Shop now", "Type Score": 4, "Channel": "email"}],
        "objective": "sales",
        "details": {"targetAudience": "genz", "brandTone": "urgent", "keyMessage": "Limited time"},
    }


@pytest.fixture
def ctas():
    return [CTA(text="Shop now"), CTA.model_validate({"CTA Text": "Learn more", "Tone Score": 3.5})]


@pytest.fixture
def details():
    return CampaignGoalDetails(targetAudience="b2b", brandTone="professional", keyMessage="Save hours every week")
