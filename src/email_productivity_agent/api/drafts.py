"""Drafts and action items API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from email_productivity_agent.api.deps import Services, get_services, require_email, require_prompt
from email_productivity_agent.api.models import (
    ActionItemUpdate,
    DraftCreate,
    DraftUpdate,
    GenerateDraftRequest,
)
from email_productivity_agent.models import ActionItem, Draft, PromptName

router = APIRouter(prefix="/api", tags=["drafts"])


def _saved_metadata(metadata: dict[str, Any] | None, email_id: str | None) -> dict[str, Any]:
    return {
        **(metadata or {}),
        "last_saved_at": datetime.now(timezone.utc).isoformat(),
        "has_reply_email": bool(email_id),
    }


@router.get("/drafts", response_model=list[Draft])
def list_drafts(services: Services = Depends(get_services)):
    return services.drafts.list_all()


@router.post("/drafts", response_model=Draft, status_code=201)
def create_draft(body: DraftCreate, services: Services = Depends(get_services)):
    data = body.model_dump()
    data["metadata"] = _saved_metadata(body.metadata, body.email_id)
    return services.drafts.create(**data)


@router.post("/drafts/generate")
async def generate_draft(body: GenerateDraftRequest, services: Services = Depends(get_services)):
    """Generate an unsaved reply draft with the auto-reply prompt."""
    email = require_email(services, body.email_id)
    template = require_prompt(services, PromptName.AUTO_REPLY.value)
    return await services.agent.draft_reply(email, template, body.custom_instructions)


@router.patch("/drafts/{draft_id}", response_model=Draft)
def update_draft(draft_id: str, body: DraftUpdate, services: Services = Depends(get_services)):
    existing = services.drafts.get(draft_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Draft {draft_id} not found")

    changes = body.model_dump(exclude_unset=True)
    email_id = changes.get("email_id", existing.email_id)
    changes["metadata"] = _saved_metadata(changes.get("metadata", existing.metadata), email_id)
    return services.drafts.update(draft_id, **changes)


@router.delete("/drafts/{draft_id}", status_code=204)
def delete_draft(draft_id: str, services: Services = Depends(get_services)) -> None:
    services.drafts.delete(draft_id)


@router.get("/action-items", response_model=list[ActionItem])
def list_action_items(services: Services = Depends(get_services)):
    return services.action_items.list_all()


@router.patch("/action-items/{item_id}", response_model=ActionItem)
def update_action_item(item_id: str, body: ActionItemUpdate, services: Services = Depends(get_services)):
    return services.action_items.update(item_id, **body.model_dump(exclude_none=True))
