"""Prompt construction for provider calls."""

from typing import Any

from ..core import AgentProfile, RequestContext

RESPONSE_GUIDELINES = """RESPONSE GUIDELINES:
- Stay within your specialization and be accurate
- Use short sections and bullet points where they help
- Keep responses conversational but informative"""


def format_preferences(preferences: dict[str, Any]) -> str:
    """Format a flat preference map as prompt lines.

    Args:
        preferences: Caller preferences, e.g. ``{"tone": "casual"}``.

    Returns:
        One ``- key: value`` line per preference, or an empty string.
    """
    return "\n".join(f"- {key}: {value}" for key, value in sorted(preferences.items()))


def build_system_prompt(profile: AgentProfile, preferences: dict[str, Any]) -> str:
    """Build the provider system prompt for an agent and caller."""
    parts = [profile.build_system_prompt()]

    if profile.response_style:
        style = ", ".join(f"{key}: {value}" for key, value in profile.response_style.items())
        parts.append(f"Response style: {style}.")

    parts.append(RESPONSE_GUIDELINES)

    if preferences:
        parts.append(f"USER PREFERENCES:\n{format_preferences(preferences)}")

    return "\n\n".join(parts)


def build_user_prompt(context: RequestContext) -> str:
    """Build the user prompt, prefixed with recent history when there is any."""
    if not context.history:
        return context.message
    return (
        f"Recent conversation:\n{context.get_recent_context()}\n\n"
        f"New message: {context.message}"
    )
