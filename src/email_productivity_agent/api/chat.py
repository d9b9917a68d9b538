"""Chat API."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from email_productivity_agent.api.deps import Services, get_services, require_email
from email_productivity_agent.api.models import ChatRequest, ChatResponse
from email_productivity_agent.exceptions import EmailAgentError

logger = structlog.get_logger()

router = APIRouter(prefix="/api/chat", tags=["chat"])

CHAT_FAILURE_MESSAGE = (
    "Sorry, I encountered an error. Please make sure your API key is configured correctly."
)


@router.post("", response_model=ChatResponse)
async def chat(body: ChatRequest, services: Services = Depends(get_services)):
    email = require_email(services, body.email_id) if body.email_id else None
    all_emails = services.emails.list_all() if body.include_inbox else None

    try:
        response = await services.agent.chat(body.message, email=email, all_emails=all_emails)
    except EmailAgentError as exc:
        logger.error("chat_failed", error=str(exc))
        return ChatResponse(response=CHAT_FAILURE_MESSAGE, error=True)
    return ChatResponse(response=response)
