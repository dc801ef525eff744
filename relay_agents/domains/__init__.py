"""Agent domains and the default agent line-up."""

from ..core import AgentCapability, AgentProfile
from . import configuration, conversation, documents, health, productivity, security
from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

DOMAINS: dict[str, AgentDomain] = {
    module.DOMAIN.name: module.DOMAIN
    for module in (health, configuration, security, documents, productivity, conversation)
}


def get_domain(name: str) -> AgentDomain:
    """Look up a domain table by name.

    Raises:
        KeyError: If no domain with that name exists.
    """
    try:
        return DOMAINS[name]
    except KeyError:
        raise KeyError(f"Unknown agent domain: {name}") from None


def _capability(name: str, description: str, keywords: list[str], examples: list[str]) -> AgentCapability:
    return AgentCapability(
        name=name, description=description, keywords=keywords, examples=examples
    )


DEFAULT_AGENTS: list[AgentProfile] = [
    AgentProfile(
        agent_id="carebot",
        display_name="CareBot",
        domain="health",
        tagline="a caring AI health companion",
        specializations=["symptom assessment", "wellness planning", "medication support", "mental health"],
        capabilities=[
            _capability(
                "symptom_assessment",
                "General guidance about symptoms and when to seek care",
                ["symptom", "pain", "fever"],
                ["I have a headache and fever", "my back hurts"],
            ),
            _capability(
                "wellness_planning",
                "Personalized wellness and fitness plans",
                ["wellness", "diet", "workout"],
                ["help me plan a healthy diet"],
            ),
        ],
        response_style={"tone": "compassionate", "detail": "comprehensive"},
        system_prompt=(
            "You are CareBot, a compassionate AI health companion. Provide general "
            "health information only, never a diagnosis, and always recommend "
            "consulting healthcare professionals for personal medical advice."
        ),
        emoji="🏥",
        history_window=5,
    ),
    AgentProfile(
        agent_id="configai",
        display_name="ConfigAI",
        domain="configuration",
        tagline="an intelligent configuration and DevOps assistant",
        specializations=["system configuration", "deployment automation", "infrastructure optimization"],
        capabilities=[
            _capability(
                "configuration_management",
                "System, environment and security configuration",
                ["config", "deploy", "environment"],
                ["set up a staging environment", "automate our release pipeline"],
            ),
        ],
        response_style={"tone": "technical", "detail": "comprehensive"},
        emoji="⚙️",
        history_window=8,
    ),
    AgentProfile(
        agent_id="authwise",
        display_name="AuthWise",
        domain="security",
        tagline="a security and identity advisor",
        specializations=["vulnerability assessment", "authentication", "compliance", "identity management"],
        capabilities=[
            _capability(
                "security_advisory",
                "Security assessments, authentication design and compliance guidance",
                ["security", "oauth", "compliance"],
                ["how should we implement OAuth", "are we GDPR compliant"],
            ),
        ],
        response_style={"tone": "precise", "detail": "comprehensive"},
        emoji="🔐",
        history_window=6,
    ),
    AgentProfile(
        agent_id="documind",
        display_name="DocuMind",
        domain="documents",
        tagline="a document intelligence assistant",
        specializations=["document analysis", "information extraction", "summarization", "translation"],
        capabilities=[
            _capability(
                "document_intelligence",
                "Analyze, summarize, translate and classify documents",
                ["document", "summarize", "extract"],
                ["summarize this report", "extract the dates from this contract"],
            ),
        ],
        response_style={"tone": "neutral", "detail": "concise"},
        emoji="📄",
        history_window=5,
    ),
    AgentProfile(
        agent_id="taskmaster",
        display_name="TaskMaster",
        domain="productivity",
        tagline="a project management and productivity assistant",
        specializations=["project planning", "workflow automation", "team coordination"],
        capabilities=[
            _capability(
                "productivity_management",
                "Plan projects, automate workflows and track deadlines",
                ["project", "deadline", "team"],
                ["plan our product launch", "track my deadlines"],
            ),
        ],
        response_style={"tone": "energetic", "detail": "actionable"},
        emoji="✅",
        history_window=7,
    ),
    AgentProfile(
        agent_id="neochat",
        display_name="NeoChat",
        domain="conversation",
        tagline="an advanced AI conversation assistant",
        specializations=["natural conversation", "creative writing", "problem solving", "learning"],
        capabilities=[
            _capability(
                "conversation",
                "Engaging open-ended conversation",
                ["chat", "talk", "question"],
                ["hello there", "help me write a poem"],
            ),
        ],
        response_style={"tone": "friendly", "detail": "conversational"},
        system_prompt=(
            "You are NeoChat, an advanced AI conversation assistant. You excel at "
            "natural language understanding, creative writing, problem-solving, "
            "and engaging dialogue. Keep responses conversational but informative."
        ),
        emoji="💬",
        history_window=10,
    ),
]

__all__ = [
    "AgentDomain",
    "DEFAULT_AGENTS",
    "DOMAINS",
    "IntentRule",
    "IntentTemplate",
    "MetricRange",
    "Pick",
    "get_domain",
]
