"""Tests for agent domain tables and the default agent line-up."""

import re

import pytest

from relay_agents.domains import DEFAULT_AGENTS, DOMAINS, get_domain


class TestDomainTables:
    """Structural checks on every domain table."""

    def test_expected_domains(self):
        assert set(DOMAINS) == {
            "health", "configuration", "security", "documents", "productivity", "conversation",
        }

    @pytest.mark.parametrize("name", sorted(DOMAINS))
    def test_every_intent_has_template(self, name):
        domain = DOMAINS[name]
        for intent in domain.intents:
            assert intent in domain.templates, f"{name}.{intent}"

    @pytest.mark.parametrize("name", sorted(DOMAINS))
    def test_patterns_compile(self, name):
        for rule in DOMAINS[name].rules:
            re.compile(rule.pattern, re.IGNORECASE)

    @pytest.mark.parametrize("name", sorted(DOMAINS))
    def test_templates_share_insight_keys(self, name):
        domain = DOMAINS[name]
        for intent, template in domain.templates.items():
            assert set(template.insights) == set(domain.insight_keys), f"{name}.{intent}"

    @pytest.mark.parametrize("name", sorted(DOMAINS))
    def test_processing_time_ranges(self, name):
        for template in DOMAINS[name].templates.values():
            low, high = template.processing_time
            assert 0 < low <= high

    def test_intents_general_last(self):
        intents = get_domain("health").intents
        assert intents[0] == "symptoms"
        assert intents[-1] == "general"

    def test_template_for_unknown_intent(self):
        domain = get_domain("security")
        assert domain.template_for("nope") is domain.templates["general"]

    def test_get_domain_unknown(self):
        with pytest.raises(KeyError, match="Unknown agent domain"):
            get_domain("astrology")


class TestDefaultAgents:
    """Checks on the default agent profiles."""

    def test_unique_ids(self):
        ids = [profile.agent_id for profile in DEFAULT_AGENTS]
        assert len(ids) == len(set(ids)) == 6

    @pytest.mark.parametrize("profile", DEFAULT_AGENTS, ids=lambda p: p.agent_id)
    def test_profile_is_consistent(self, profile):
        assert profile.domain in DOMAINS
        assert 5 <= profile.history_window <= 10
        assert profile.build_system_prompt().startswith(f"You are {profile.display_name}")
