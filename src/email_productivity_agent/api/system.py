"""Health, setup and diagnostics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from email_productivity_agent.api.deps import Services, get_services
from email_productivity_agent.api.models import DiagnosticsResponse, SetupResponse, StatusResponse
from email_productivity_agent.diagnostics import format_diagnostic_report, run_diagnostics
from email_productivity_agent.seed import is_initialized, seed_defaults

router = APIRouter(tags=["system"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/api/status", response_model=StatusResponse)
def status(services: Services = Depends(get_services)) -> StatusResponse:
    return StatusResponse(
        initialized=is_initialized(services.prompts, services.emails),
        ai_enabled=services.settings.ai_enabled,
        email_count=services.emails.count(),
        prompt_count=services.prompts.count(),
    )


@router.post("/api/setup", response_model=SetupResponse)
def setup(services: Services = Depends(get_services)) -> SetupResponse:
    created = seed_defaults(services.prompts, services.emails)
    return SetupResponse(prompts_created=created["prompts"], emails_created=created["emails"])


@router.get("/api/diagnostics", response_model=DiagnosticsResponse)
async def diagnostics(services: Services = Depends(get_services)) -> DiagnosticsResponse:
    results = await run_diagnostics(services.settings, services.engine, services.client)
    return DiagnosticsResponse(
        all_good=results.all_good,
        errors=results.errors,
        report=format_diagnostic_report(results),
    )
