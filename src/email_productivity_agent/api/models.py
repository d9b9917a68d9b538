"""API models for the Email Productivity Agent backend."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from email_productivity_agent.models import ActionItem, Email


class StatusResponse(BaseModel):
    initialized: bool
    ai_enabled: bool
    email_count: int
    prompt_count: int


class SetupResponse(BaseModel):
    prompts_created: int
    emails_created: int


class PromptCreate(BaseModel):
    name: str = Field(min_length=1)
    content: str = Field(min_length=1)
    description: str = ""


class PromptUpdate(BaseModel):
    content: str | None = None
    description: str | None = None


class ActionItemUpdate(BaseModel):
    task: str | None = None
    deadline: str | None = None
    is_completed: bool | None = None


class DraftCreate(BaseModel):
    email_id: str | None = None
    subject: str = ""
    body: str = ""
    suggested_followups: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class DraftUpdate(BaseModel):
    email_id: str | None = None
    subject: str | None = None
    body: str | None = None
    suggested_followups: str | None = None
    metadata: dict[str, Any] | None = None


class GenerateDraftRequest(BaseModel):
    email_id: str
    custom_instructions: str | None = None


class ProcessEmailResponse(BaseModel):
    email: Email
    action_items: list[ActionItem]


class BatchResponse(BaseModel):
    processed: int
    failed: int
    remaining: int
    passes: int
    message: str


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    email_id: str | None = None
    include_inbox: bool = True


class ChatResponse(BaseModel):
    response: str
    error: bool = False


class DiagnosticsResponse(BaseModel):
    all_good: bool
    errors: list[str]
    report: str
