"""Data models for Email Productivity Agent.

This module contains Pydantic models for data validation and serialization.
"""

from enum import Enum

from pydantic import BaseModel, Field

from email_productivity_agent.models.records import ActionItem, Draft, Email, Prompt


class EmailCategory(str, Enum):
    """Email category enumeration."""

    IMPORTANT = "Important"
    TODO = "To-Do"
    NEWSLETTER = "Newsletter"
    SPAM = "Spam"
    UNCATEGORIZED = "Uncategorized"


class PromptName(str, Enum):
    """Names of the task templates the agent relies on."""

    CATEGORIZATION = "categorization"
    ACTION_ITEM = "action_item"
    AUTO_REPLY = "auto_reply"


class ExtractedActionItem(BaseModel):
    """A task extracted from an email, before it is persisted."""

    task: str = Field(min_length=1, description="Description of the task")
    deadline: str = Field(default="", description="Deadline if mentioned, otherwise empty")


class BehaviorConfig(BaseModel):
    """Active behavior configuration embedded into every chat request."""

    categorization: str | None = Field(default=None, description="Categorization prompt")
    action_item: str | None = Field(default=None, description="Action item extraction prompt")
    auto_reply: str | None = Field(default=None, description="Auto-reply drafting prompt")

    @classmethod
    def from_prompts(cls, prompts: list[Prompt]) -> "BehaviorConfig":
        by_name = {p.name: p.content for p in prompts}
        return cls(
            categorization=by_name.get(PromptName.CATEGORIZATION.value),
            action_item=by_name.get(PromptName.ACTION_ITEM.value),
            auto_reply=by_name.get(PromptName.AUTO_REPLY.value),
        )


class BatchSummary(BaseModel):
    """Aggregate outcome of processing the whole inbox."""

    processed: int = Field(default=0, description="Emails processed across all passes")
    failed: int = Field(default=0, description="Per-email failures across all passes")
    remaining: int = Field(default=0, description="Emails still needing processing")
    passes: int = Field(default=0, description="Number of passes performed")

    @property
    def message(self) -> str:
        if self.remaining == 0:
            return "All emails processed successfully!"
        if self.processed > 0:
            return (
                f"Processed {self.processed} emails. "
                f"{self.remaining} still need processing; check the logs for details."
            )
        if self.failed > 0:
            return "All emails failed to process. Please check the logs for error details."
        return "No emails needed processing."


__all__ = [
    "ActionItem",
    "BatchSummary",
    "BehaviorConfig",
    "Draft",
    "Email",
    "EmailCategory",
    "ExtractedActionItem",
    "Prompt",
    "PromptName",
]
