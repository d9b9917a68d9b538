"""Gemini gateway: request building, transport, and response normalization."""

from email_productivity_agent.llm.client import GeminiClient
from email_productivity_agent.llm.normalize import action_items_from_response, normalize_category

__all__ = ["GeminiClient", "action_items_from_response", "normalize_category"]
