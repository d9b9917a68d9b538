"""Email productivity agent implementation.

This module provides the agent that turns stored task templates and emails
into Gemini requests and normalized results.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import structlog

from email_productivity_agent.config import Settings
from email_productivity_agent.exceptions import EmailAgentError
from email_productivity_agent.llm import prompts as builder
from email_productivity_agent.llm.client import GeminiClient
from email_productivity_agent.llm.normalize import action_items_from_response, normalize_category
from email_productivity_agent.models import (
    BehaviorConfig,
    Email,
    EmailCategory,
    ExtractedActionItem,
    Prompt,
)
from email_productivity_agent.repository import (
    ActionItemRepository,
    EmailRepository,
    PromptRepository,
)

logger = structlog.get_logger()


class EmailAgent:
    """Main email productivity agent.

    This agent coordinates categorization, action item extraction, reply
    drafting and chat for the stored inbox.
    """

    def __init__(
        self,
        emails: EmailRepository,
        prompts: PromptRepository,
        action_items: ActionItemRepository,
        gemini_client: GeminiClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the email agent.

        Args:
            emails: Email storage.
            prompts: Task template storage.
            action_items: Action item storage.
            gemini_client: Gemini client. If None, creates a new one.
            settings: Application settings. If None, uses default settings.
        """
        from email_productivity_agent.config import get_settings

        self.settings = settings or get_settings()
        self.emails = emails
        self.prompts = prompts
        self.action_items = action_items
        self.gemini_client = gemini_client or GeminiClient(self.settings)
        logger.info("email_agent_initialized")

    async def categorize_email(self, email: Email, template: Prompt) -> EmailCategory:
        """Categorize a single email.

        Returns:
            The normalized category, or Uncategorized when the request failed.
        """
        try:
            raw = await self.gemini_client.send(builder.build_email_prompt(email, template))
        except EmailAgentError as exc:
            logger.error("categorization_failed", email_id=email.id, error=str(exc))
            return EmailCategory.UNCATEGORIZED

        category = normalize_category(raw)
        logger.info("email_categorized", email_id=email.id, category=category.value)
        return category

    async def extract_action_items(self, email: Email, template: Prompt) -> list[ExtractedActionItem]:
        """Extract tasks from an email; failures yield an empty list."""
        try:
            raw = await self.gemini_client.send(builder.build_email_prompt(email, template))
        except EmailAgentError as exc:
            logger.error("action_item_extraction_failed", email_id=email.id, error=str(exc))
            return []

        items = action_items_from_response(raw)
        logger.info("action_items_extracted", email_id=email.id, count=len(items))
        return items

    async def generate_reply(
        self,
        email: Email,
        template: Prompt,
        custom_instructions: str | None = None,
    ) -> str:
        """Draft a reply body. Errors propagate to the caller."""
        prompt = builder.build_reply_prompt(email, template, custom_instructions)
        return await self.gemini_client.send(prompt)

    async def draft_reply(
        self,
        email: Email,
        template: Prompt,
        custom_instructions: str | None = None,
    ) -> dict[str, Any]:
        """Generate an unsaved draft payload answering ``email``."""
        body = await self.generate_reply(email, template, custom_instructions)
        return {
            "email_id": email.id,
            "subject": f"Re: {email.subject}",
            "body": body,
            "metadata": {
                "source": template.name,
                "email_id": email.id,
                "category": email.category,
                "generated_at": datetime.now(timezone.utc).isoformat(),
            },
        }

    def load_behavior(self) -> BehaviorConfig:
        return BehaviorConfig.from_prompts(self.prompts.list_all())

    async def chat(
        self,
        user_message: str,
        email: Email | None = None,
        all_emails: Sequence[Email] | None = None,
        behavior: BehaviorConfig | None = None,
    ) -> str:
        """Answer a free-form chat message.

        A message equal to a stored template name (ignoring case) runs that
        template directly against the focal email.

        Args:
            user_message: What the user typed.
            email: Optional focal email.
            all_emails: Optional inbox used for the category summary.
            behavior: Templates to embed. Loaded from the prompt store if None.

        Returns:
            The assistant's answer.
        """
        message = user_message.strip()
        for template in self.prompts.list_all():
            if template.name.lower() == message.lower():
                return await self.run_prompt_on_email(template, email, all_emails, message)

        if behavior is None:
            behavior = self.load_behavior()

        system_prompt = builder.build_chat_system_prompt(behavior, email, all_emails)
        logger.info("chat_started", has_email=email is not None, message_length=len(message))
        return await self.gemini_client.send(message, system_prompt)

    async def run_prompt_on_email(
        self,
        template: Prompt,
        email: Email | None = None,
        all_emails: Sequence[Email] | None = None,
        user_message: str = "",
    ) -> str:
        logger.info("prompt_run_on_email", prompt=template.name, has_email=email is not None)
        prompt = builder.build_prompt_on_email(template, email, all_emails, user_message)
        return await self.gemini_client.send(prompt)

    async def process_email(
        self,
        email: Email,
        categorization: Prompt,
        action_item: Prompt,
    ) -> Email:
        """Categorize an email, store the result, then store its action items.

        The two writes are not atomic: a failure after the category update
        leaves the email processed without its action items.
        """
        category = await self.categorize_email(email, categorization)
        updated = self.emails.update(email.id, category=category.value, is_processed=True)

        for item in await self.extract_action_items(email, action_item):
            self.action_items.create(email_id=email.id, task=item.task, deadline=item.deadline)

        return updated
