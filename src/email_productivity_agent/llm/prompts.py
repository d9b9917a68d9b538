"""Prompt assembly for every Gemini invocation.

All builders are pure: the full email body is always included and nothing is
truncated or sanitized. Template instruction text always comes last.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from email_productivity_agent.models import BehaviorConfig, Email, Prompt

ASSISTANT_PERSONA = (
    "You are an intelligent email assistant. Help the user manage their emails, "
    "answer questions about them, and perform tasks like summarizing, categorizing, "
    "and drafting replies.\n"
    "Always follow the following internal prompts when reasoning about categorization, "
    "action items, and replies:"
)


def _email_block(email: Email, label: str = "From") -> str:
    return (
        f"{label}: {email.sender_name} <{email.sender}>\n"
        f"Subject: {email.subject}\n"
        f"Body: {email.body}"
    )


def category_summary(emails: Sequence[Email]) -> str:
    """Tally emails per category, e.g. ``Important: 2, Spam: 1``.

    Categories appear in first-seen order; unset categories count as
    Uncategorized.
    """
    counts = Counter(email.category or "Uncategorized" for email in emails)
    return ", ".join(f"{category}: {count}" for category, count in counts.items())


def _inbox_summary(emails: Sequence[Email]) -> str:
    return (
        "Inbox Summary:\n"
        f"Total emails: {len(emails)}\n"
        f"Categories: {category_summary(emails)}"
    )


def build_email_prompt(email: Email, template: Prompt) -> str:
    """Prompt used for categorization and action-item extraction."""
    return f"Email {_email_block(email, 'from')}\n\n{template.content}"


def build_reply_prompt(
    email: Email,
    template: Prompt,
    custom_instructions: str | None = None,
) -> str:
    """Prompt asking for a reply draft to ``email``."""
    extra = f"\nAdditional instructions: {custom_instructions}" if custom_instructions else ""
    return (
        "Original Email:\n"
        f"{_email_block(email)}\n\n"
        f"Instructions: {template.content}\n"
        f"{extra}\n\n"
        "Generate a professional reply email."
    )


def build_behavior_section(behavior: BehaviorConfig) -> str:
    parts = ["\n\n=== Agent Behavior Prompts ===\n"]
    if behavior.categorization:
        parts.append(f"Categorization prompt:\n{behavior.categorization}\n\n")
    if behavior.action_item:
        parts.append(f"Action item extraction prompt:\n{behavior.action_item}\n\n")
    if behavior.auto_reply:
        parts.append(f"Auto-reply drafting prompt:\n{behavior.auto_reply}\n\n")
    return "".join(parts)


def build_chat_system_prompt(
    behavior: BehaviorConfig,
    email: Email | None = None,
    all_emails: Sequence[Email] | None = None,
) -> str:
    """System instruction for free-form chat.

    Args:
        behavior: Stored task templates the assistant must stay consistent with.
        email: Optional focal email.
        all_emails: Optional inbox, summarized as a category tally.

    Returns:
        The composite system message.
    """
    context = ""
    if email is not None:
        context = (
            "\n\nCurrent Email Context:\n"
            f"{_email_block(email)}\n"
            f"Category: {email.category or 'Not categorized'}"
        )
    if all_emails is not None:
        context += f"\n\n{_inbox_summary(all_emails)}"

    return f"{ASSISTANT_PERSONA}{build_behavior_section(behavior)}{context}"


def build_prompt_on_email(
    template: Prompt,
    email: Email | None = None,
    all_emails: Sequence[Email] | None = None,
    user_message: str = "",
) -> str:
    """Run a stored template directly against the focal email."""
    sections = []
    if email is not None:
        sections.append(f"Email {_email_block(email, 'from')}")
    if all_emails is not None:
        sections.append(_inbox_summary(all_emails))
    if user_message:
        sections.append(f"User request: {user_message}")
    sections.append(template.content)
    return "\n\n".join(sections)
