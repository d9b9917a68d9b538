"""Request-scoped access to the services wired up by ``create_app``."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request
from sqlalchemy.engine import Engine

from email_productivity_agent.agent import BatchProcessor, EmailAgent
from email_productivity_agent.config import Settings
from email_productivity_agent.llm.client import GeminiClient
from email_productivity_agent.models import Email, Prompt
from email_productivity_agent.repository import (
    ActionItemRepository,
    DraftRepository,
    EmailRepository,
    PromptRepository,
)


@dataclass
class Services:
    settings: Settings
    engine: Engine
    client: GeminiClient
    emails: EmailRepository
    prompts: PromptRepository
    action_items: ActionItemRepository
    drafts: DraftRepository
    agent: EmailAgent
    batch: BatchProcessor

    @classmethod
    def build(cls, settings: Settings, engine: Engine, client: GeminiClient) -> "Services":
        emails = EmailRepository(engine)
        prompts = PromptRepository(engine)
        action_items = ActionItemRepository(engine)
        agent = EmailAgent(emails, prompts, action_items, gemini_client=client, settings=settings)
        return cls(
            settings=settings,
            engine=engine,
            client=client,
            emails=emails,
            prompts=prompts,
            action_items=action_items,
            drafts=DraftRepository(engine),
            agent=agent,
            batch=BatchProcessor(agent, settings),
        )


def get_services(request: Request) -> Services:
    return request.app.state.services


def require_email(services: Services, email_id: str) -> Email:
    email = services.emails.get(email_id)
    if email is None:
        raise HTTPException(status_code=404, detail=f"Email {email_id} not found")
    return email


def require_prompt(services: Services, name: str) -> Prompt:
    prompt = services.prompts.get_by_name(name)
    if prompt is None:
        raise HTTPException(
            status_code=404,
            detail=f"Prompt '{name}' not found. Please configure it first.",
        )
    return prompt
