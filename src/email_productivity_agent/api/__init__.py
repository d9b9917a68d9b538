"""HTTP API exposing the agent to the web frontend."""

from email_productivity_agent.api.app import create_app

__all__ = ["create_app"]
