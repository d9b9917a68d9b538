"""Prompt management API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from email_productivity_agent.api.deps import Services, get_services
from email_productivity_agent.api.models import PromptCreate, PromptUpdate
from email_productivity_agent.models import Prompt

router = APIRouter(prefix="/api/prompts", tags=["prompts"])


@router.get("", response_model=list[Prompt])
def list_prompts(services: Services = Depends(get_services)):
    return services.prompts.list_all()


@router.post("", response_model=Prompt, status_code=201)
def create_prompt(body: PromptCreate, services: Services = Depends(get_services)):
    if services.prompts.get_by_name(body.name) is not None:
        raise HTTPException(status_code=409, detail=f"Prompt '{body.name}' already exists")
    return services.prompts.create(**body.model_dump())


@router.patch("/{prompt_id}", response_model=Prompt)
def update_prompt(prompt_id: str, body: PromptUpdate, services: Services = Depends(get_services)):
    return services.prompts.update(prompt_id, **body.model_dump(exclude_none=True))


@router.delete("/{prompt_id}", status_code=204)
def delete_prompt(prompt_id: str, services: Services = Depends(get_services)) -> None:
    services.prompts.delete(prompt_id)
