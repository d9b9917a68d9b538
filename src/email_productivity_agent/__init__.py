"""Email Productivity Agent - AI-assisted inbox triage.

This package categorizes emails, extracts action items, drafts replies and
answers chat questions about a stored inbox using the Gemini API.
"""

__version__ = "0.1.0"

from email_productivity_agent.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
