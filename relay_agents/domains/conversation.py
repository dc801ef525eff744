"""Open-ended conversation domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("greeting", r"\b(hello|hi|hey|good morning|good afternoon|good evening)\b"),
    IntentRule("question", r"^(?=.*\?)(?=.*\b(what|how|why|when|where|who)\b)"),
    IntentRule("creative", r"\b(story|write|creative|poem|novel|character|plot)\b"),
    IntentRule("problem_solving", r"\b(problem|solve|help|stuck|challenge|difficult|issue)\b"),
    IntentRule("learning", r"\b(learn|teach|explain|understand|know|study)\b"),
    IntentRule("technology", r"\b(code|programming|software|computer|tech|app|website)\b"),
    IntentRule("emotional", r"\b(sad|happy|excited|worried|stressed|anxious|tired)\b"),
]

_SUGGESTIONS = (
    "Tell me more about that",
    "What would you like to explore next?",
    "How are you feeling about this?",
    "Want me to break it down step by step?",
)


def _insights(focus: str) -> dict:
    return {
        "conversation_analysis": {
            "focus": focus,
            "engagement_score": MetricRange(80, 98),
        },
        "suggestions": Pick(_SUGGESTIONS, 3),
    }


def _template(title: str, body: str, closing: str, focus: str) -> IntentTemplate:
    return IntentTemplate(
        title=title,
        intro=body,
        sections=[],
        closing=closing,
        insights=_insights(focus),
        processing_time=(0.4, 1.2),
    )


TEMPLATES = {
    "greeting": _template(
        "Hello!",
        "I'm {agent}, your AI conversation partner. I can help with questions, "
        "creative projects, problem-solving, or just an engaging conversation.",
        "What would you like to talk about today?",
        "greeting",
    ),
    "question": _template(
        "Great Question",
        "I can help you explore this topic in depth. Let me share some "
        "insights, then we can dive into the aspects that interest you most.",
        "Which part should we start with?",
        "inquiry",
    ),
    "creative": _template(
        "Creative Collaboration",
        "Whether you're working on a story, developing characters or crafting "
        "poetry, I can brainstorm, give feedback and co-create with you.",
        "What kind of creative project are you working on?",
        "creativity",
    ),
    "problem_solving": _template(
        "Let's Solve It",
        "Let's break down what you're facing step by step, explore different "
        "approaches and find the best solution together.",
        "Can you tell me more about the situation?",
        "problem_solving",
    ),
    "learning": _template(
        "Learning Together",
        "I can explain concepts, provide examples and guide you through new "
        "topics at your own pace.",
        "What subject would you like to explore?",
        "learning",
    ),
    "technology": _template(
        "Technology Talk",
        "I can help with coding concepts, debugging, architecture decisions "
        "and the latest tech trends.",
        "What technology topic interests you?",
        "technology",
    ),
    "emotional": _template(
        "I'm Listening",
        "Thank you for sharing how you're feeling. I'm here to listen and "
        "support you.",
        "Would you like to talk through what's on your mind?",
        "emotional_support",
    ),
    "general": IntentTemplate(
        title="Conversation Partner",
        intro="I'm {agent}. Here's what we can do together:",
        sections=[
            ("What I Can Do", [
                "Answer questions and explain topics",
                "Brainstorm and co-write creative projects",
                "Work through problems step by step",
                "Talk about technology and programming",
            ]),
        ],
        closing="Where would you like to take our conversation?",
        insights=_insights("open"),
        processing_time=(0.4, 1.0),
    ),
}

DOMAIN = AgentDomain(
    name="conversation",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=("conversation_analysis", "suggestions"),
)
