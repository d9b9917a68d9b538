"""Records stored in the four database tables.

Timestamps are kept as ISO-8601 strings, exactly as they are stored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Email(BaseModel):
    """A mock inbox email."""

    id: str = Field(description="Unique email ID")
    sender: str = Field(description="Sender email address")
    sender_name: str = Field(default="", description="Sender display name")
    subject: str = Field(default="", description="Email subject")
    body: str = Field(default="", description="Email body content")
    category: str | None = Field(default=None, description="Assigned category, if any")
    timestamp: str = Field(description="When the email was received")
    is_processed: bool = Field(default=False, description="Whether the agent processed it")
    created_at: str | None = Field(default=None, description="Row creation time")

    @property
    def needs_processing(self) -> bool:
        """Unprocessed, uncategorized, or explicitly Uncategorized."""
        return (
            not self.is_processed
            or not self.category
            or self.category.lower() == "uncategorized"
        )


class Prompt(BaseModel):
    """A named task template driving one kind of model invocation."""

    id: str = Field(description="Unique prompt ID")
    name: str = Field(description="Unique prompt name")
    content: str = Field(description="Instruction text sent to the model")
    description: str = Field(default="", description="Human-readable description")
    created_at: str | None = None
    updated_at: str | None = None


class ActionItem(BaseModel):
    """A persisted task extracted from an email."""

    id: str
    email_id: str
    task: str
    deadline: str = ""
    is_completed: bool = False
    created_at: str | None = None


class Draft(BaseModel):
    """A reply draft, optionally linked to the email it answers."""

    id: str
    email_id: str | None = None
    subject: str = ""
    body: str = ""
    suggested_followups: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None
