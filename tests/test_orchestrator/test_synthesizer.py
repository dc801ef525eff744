"""Tests for degraded-mode response synthesis."""

import random
from unittest.mock import patch

import pytest

from relay_agents.core import AgentProfile
from relay_agents.domains import (
    DEFAULT_AGENTS,
    DOMAINS,
    AgentDomain,
    IntentTemplate,
    MetricRange,
    Pick,
    get_domain,
)
from relay_agents.orchestrator import DEGRADED, DegradedResponseSynthesizer

PROFILES = {profile.domain: profile for profile in DEFAULT_AGENTS}


def all_domain_intents():
    return [
        (name, intent) for name, domain in sorted(DOMAINS.items()) for intent in domain.intents
    ]


@pytest.fixture
def synthesizer():
    return DegradedResponseSynthesizer(random.Random(42))


class TestSynthesize:
    """Test suite for DegradedResponseSynthesizer.synthesize."""

    @pytest.mark.parametrize("domain_name,intent", all_domain_intents())
    def test_every_intent_produces_complete_envelope(self, synthesizer, domain_name, intent):
        domain = get_domain(domain_name)
        envelope = synthesizer.synthesize(intent, "some input", domain, PROFILES[domain_name])

        assert envelope.text.strip()
        assert envelope.provenance == DEGRADED
        assert set(envelope.insights) == set(domain.insight_keys)

        low, high = domain.template_for(intent).processing_time
        assert low <= envelope.processing_time <= high

    def test_symptoms_body(self, synthesizer):
        envelope = synthesizer.synthesize(
            "symptoms", "I have a headache", get_domain("health"), PROFILES["health"]
        )

        assert envelope.text.startswith("🏥 **Health Assessment**")
        assert "**Symptom Assessment:**" in envelope.text
        assert "• Home care recommendations" in envelope.text

        assessment = envelope.insights["health_assessment"]
        assert 78 <= assessment["confidence"] <= 92
        assert isinstance(assessment["confidence"], int)
        assert len(envelope.insights["recommendations"]) == 3

    def test_agent_name_interpolated(self, synthesizer):
        envelope = synthesizer.synthesize(
            "greeting", "hello", get_domain("conversation"), PROFILES["conversation"]
        )
        assert "I'm NeoChat" in envelope.text
        assert "{agent}" not in envelope.text

    def test_unknown_intent_uses_general(self, synthesizer):
        domain = get_domain("health")
        general = synthesizer.synthesize("general", "x", domain, PROFILES["health"])
        unknown = synthesizer.synthesize("not_an_intent", "x", domain, PROFILES["health"])
        assert unknown.text == general.text

    def test_body_independent_of_randomness(self):
        domain = get_domain("security")
        profile = PROFILES["security"]
        first = DegradedResponseSynthesizer(random.Random(1)).synthesize(
            "authentication", "oauth?", domain, profile
        )
        second = DegradedResponseSynthesizer(random.Random(999)).synthesize(
            "authentication", "oauth?", domain, profile
        )
        assert first.text == second.text

    def test_seeded_rng_is_reproducible(self):
        domain = get_domain("productivity")
        profile = PROFILES["productivity"]
        first = DegradedResponseSynthesizer(random.Random(7)).synthesize(
            "project_management", "plan", domain, profile
        )
        second = DegradedResponseSynthesizer(random.Random(7)).synthesize(
            "project_management", "plan", domain, profile
        )
        assert first.insights == second.insights
        assert first.processing_time == second.processing_time

    def test_no_network(self, synthesizer):
        with patch("httpx.AsyncClient.send") as mock_send:
            for name, domain in DOMAINS.items():
                synthesizer.synthesize("general", "hi", domain, PROFILES[name])
        mock_send.assert_not_called()


class TestInsightResolution:
    """Test suite for insight value resolution."""

    def make_template(self, insights):
        return IntentTemplate(
            title="T", intro="I", sections=[], closing="C", insights=insights
        )

    def test_metric_range_with_digits(self, synthesizer):
        insights = synthesizer.resolve_insights(
            self.make_template({"score": MetricRange(0.5, 0.9, digits=2)})
        )
        assert 0.5 <= insights["score"] <= 0.9
        assert round(insights["score"], 2) == insights["score"]

    def test_pick_draws_distinct_candidates(self, synthesizer):
        insights = synthesizer.resolve_insights(
            self.make_template({"tips": Pick(("a", "b", "c", "d"), 2)})
        )
        assert len(insights["tips"]) == 2
        assert len(set(insights["tips"])) == 2
        assert set(insights["tips"]) <= {"a", "b", "c", "d"}

    def test_pick_larger_than_candidates(self, synthesizer):
        insights = synthesizer.resolve_insights(self.make_template({"tips": Pick(("a",), 3)}))
        assert insights["tips"] == ["a"]

    def test_nested_values(self, synthesizer):
        insights = synthesizer.resolve_insights(
            self.make_template(
                {"block": {"level": "low", "items": [MetricRange(1, 1)], "flag": True}}
            )
        )
        assert insights["block"] == {"level": "low", "items": [1], "flag": True}

    def test_render_text_without_sections(self, synthesizer):
        profile = AgentProfile(
            agent_id="t", display_name="Tester", domain="custom",
            tagline="t", specializations=[], emoji="🧪",
        )
        text = synthesizer.render_text(self.make_template({}), profile)
        assert text == "🧪 **T**\n\nI\n\nC"

    def test_insights_for_unknown_intent(self, synthesizer):
        domain = get_domain("documents")
        insights = synthesizer.insights_for("unknown", domain)
        assert set(insights) == set(domain.insight_keys)

    def test_custom_domain(self, synthesizer):
        domain = AgentDomain(
            name="custom",
            rules=[],
            templates={"general": self.make_template({"k": "v"})},
            insight_keys=("k",),
        )
        profile = AgentProfile(
            agent_id="c", display_name="C", domain="custom", tagline="t", specializations=[]
        )
        envelope = synthesizer.synthesize("anything", "x", domain, profile)
        assert envelope.insights == {"k": "v"}
