"""Inbox API: listing, processing, and per-email related records."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from email_productivity_agent.api.deps import Services, get_services, require_email, require_prompt
from email_productivity_agent.api.models import BatchResponse, ProcessEmailResponse
from email_productivity_agent.models import ActionItem, Draft, Email, PromptName

router = APIRouter(prefix="/api/emails", tags=["emails"])


@router.get("", response_model=list[Email])
def list_emails(category: str = "all", services: Services = Depends(get_services)):
    emails = services.emails.list_all()
    if category.lower() == "all":
        return emails
    return [e for e in emails if e.category and e.category.lower() == category.lower()]


@router.delete("", status_code=204)
def clear_inbox(services: Services = Depends(get_services)) -> None:
    services.emails.delete_all()


@router.post("/process-all", response_model=BatchResponse)
async def process_all_emails(services: Services = Depends(get_services)):
    summary = await services.batch.process_all()
    return BatchResponse(**summary.model_dump(), message=summary.message)


@router.get("/{email_id}", response_model=Email)
def get_email(email_id: str, services: Services = Depends(get_services)):
    return require_email(services, email_id)


@router.post("/{email_id}/process", response_model=ProcessEmailResponse)
async def process_email(email_id: str, services: Services = Depends(get_services)):
    email = require_email(services, email_id)
    categorization = require_prompt(services, PromptName.CATEGORIZATION.value)
    action_item = require_prompt(services, PromptName.ACTION_ITEM.value)

    updated = await services.agent.process_email(email, categorization, action_item)
    return ProcessEmailResponse(
        email=updated,
        action_items=services.action_items.list_for_email(email_id),
    )


@router.get("/{email_id}/action-items", response_model=list[ActionItem])
def list_email_action_items(email_id: str, services: Services = Depends(get_services)):
    require_email(services, email_id)
    return services.action_items.list_for_email(email_id)


@router.get("/{email_id}/drafts", response_model=list[Draft])
def list_email_drafts(email_id: str, services: Services = Depends(get_services)):
    require_email(services, email_id)
    return services.drafts.list_for_email(email_id)
