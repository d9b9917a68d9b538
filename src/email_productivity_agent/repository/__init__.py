"""Repositories over the four database tables."""

from .action_items import ActionItemRepository
from .drafts import DraftRepository
from .emails import EmailRepository
from .prompts import PromptRepository

__all__ = ["ActionItemRepository", "DraftRepository", "EmailRepository", "PromptRepository"]
