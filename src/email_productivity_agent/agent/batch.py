"""Multi-pass processing of the whole inbox.

Each pass re-reads the inbox and processes every email that still needs it,
pausing between emails to stay under the model's rate limits. Per-email
failures are counted and never abort the batch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from email_productivity_agent.agent.email_agent import EmailAgent
from email_productivity_agent.config import Settings
from email_productivity_agent.exceptions import PromptNotFoundError
from email_productivity_agent.models import BatchSummary, PromptName

logger = structlog.get_logger()

SleepFn = Callable[[float], Awaitable[None]]


class BatchProcessor:
    """Process every email needing it, over up to ``batch_max_passes`` passes."""

    def __init__(
        self,
        agent: EmailAgent,
        settings: Settings | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        self.agent = agent
        self.settings = settings or agent.settings
        self._sleep = sleep or asyncio.sleep

    async def process_all(self) -> BatchSummary:
        """Run the batch and summarize it.

        Returns:
            Aggregate counts; remaining is recomputed from the store at the end.

        Raises:
            PromptNotFoundError: If the categorization or action item template is missing.
        """
        categorization = self.agent.prompts.get_by_name(PromptName.CATEGORIZATION.value)
        action_item = self.agent.prompts.get_by_name(PromptName.ACTION_ITEM.value)
        missing = [
            name.value
            for name, template in (
                (PromptName.CATEGORIZATION, categorization),
                (PromptName.ACTION_ITEM, action_item),
            )
            if template is None
        ]
        if missing:
            raise PromptNotFoundError(*missing)

        summary = BatchSummary()
        for pass_number in range(1, self.settings.batch_max_passes + 1):
            summary.passes = pass_number
            processed_this_pass = 0
            failed_this_pass = 0

            for email in self.agent.emails.list_needing_processing():
                try:
                    await self.agent.process_email(email, categorization, action_item)
                except Exception as exc:  # noqa: BLE001
                    failed_this_pass += 1
                    logger.error(
                        "batch_email_failed",
                        email_id=email.id,
                        pass_number=pass_number,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                    continue

                processed_this_pass += 1
                await self._sleep(self.settings.batch_item_delay)

            summary.processed += processed_this_pass
            summary.failed += failed_this_pass
            logger.info(
                "batch_pass_completed",
                pass_number=pass_number,
                processed=processed_this_pass,
                failed=failed_this_pass,
            )

            # Stop when a pass had no failures or made no progress.
            if failed_this_pass == 0 or processed_this_pass == 0:
                break
            if pass_number < self.settings.batch_max_passes:
                await self._sleep(self.settings.batch_pass_pause)

        summary.remaining = len(self.agent.emails.list_needing_processing())
        logger.info(
            "batch_completed",
            processed=summary.processed,
            failed=summary.failed,
            remaining=summary.remaining,
            passes=summary.passes,
        )
        return summary
