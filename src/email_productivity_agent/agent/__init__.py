"""Agent operations built on top of the Gemini gateway."""

from email_productivity_agent.agent.batch import BatchProcessor
from email_productivity_agent.agent.email_agent import EmailAgent

__all__ = ["BatchProcessor", "EmailAgent"]
