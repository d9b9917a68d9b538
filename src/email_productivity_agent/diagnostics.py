"""Setup diagnostics: configuration, connectivity and table checks.

Every check records its failure instead of raising so the report always
covers all of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog
from sqlalchemy.engine import Engine

from email_productivity_agent.config import Settings
from email_productivity_agent.db import check_connection
from email_productivity_agent.exceptions import EmailAgentError, LLMTimeoutError
from email_productivity_agent.llm.client import GeminiClient
from email_productivity_agent.repository import EmailRepository, PromptRepository

logger = structlog.get_logger()


@dataclass
class EnvironmentStatus:
    database_url: bool = False
    database_key: bool = False
    gemini_key: bool = False


@dataclass
class ConnectivityStatus:
    database: bool = False
    gemini: bool = False


@dataclass
class TableStatus:
    emails_table: bool = False
    prompts_table: bool = False
    email_count: int = 0
    prompt_count: int = 0


@dataclass
class DiagnosticResults:
    environment: EnvironmentStatus = field(default_factory=EnvironmentStatus)
    connectivity: ConnectivityStatus = field(default_factory=ConnectivityStatus)
    database: TableStatus = field(default_factory=TableStatus)
    errors: list[str] = field(default_factory=list)

    @property
    def all_good(self) -> bool:
        return (
            not self.errors
            and self.connectivity.database
            and self.connectivity.gemini
            and self.database.emails_table
            and self.database.prompts_table
        )


@dataclass
class ServiceStatus:
    connected: bool = False
    message: str = "Not tested"


@dataclass
class ApiStatus:
    database: ServiceStatus = field(default_factory=ServiceStatus)
    gemini: ServiceStatus = field(default_factory=ServiceStatus)


async def _probe_gemini(client: GeminiClient) -> str | None:
    """Return None when Gemini answered, else a short failure description."""
    try:
        await client.probe()
    except LLMTimeoutError:
        return "Gemini API connection timed out"
    except EmailAgentError as exc:
        return str(exc)
    return None


async def run_diagnostics(
    settings: Settings,
    engine: Engine | None,
    client: GeminiClient | None = None,
) -> DiagnosticResults:
    """Check configuration, connectivity and the core tables."""
    results = DiagnosticResults()
    results.environment = EnvironmentStatus(
        database_url=bool(settings.database_url),
        database_key=bool(settings.database_key),
        gemini_key=bool(settings.gemini_api_key),
    )

    if not results.environment.database_url:
        results.errors.append("EMAIL_AGENT_DATABASE_URL is not set")
    if not results.environment.database_key:
        results.errors.append("EMAIL_AGENT_DATABASE_KEY is not set")
    if not results.environment.gemini_key:
        results.errors.append("EMAIL_AGENT_GEMINI_API_KEY is not set")

    if engine is not None:
        results.connectivity.database = check_connection(engine)
        if not results.connectivity.database:
            results.errors.append("Cannot connect to the database")

    if results.connectivity.database:
        try:
            results.database.email_count = len(EmailRepository(engine).list_all())
            results.database.emails_table = True
        except EmailAgentError as exc:
            results.errors.append(f"Emails table error: {exc}")

        try:
            results.database.prompt_count = len(PromptRepository(engine).list_all())
            results.database.prompts_table = True
        except EmailAgentError as exc:
            results.errors.append(f"Prompts table error: {exc}")

    if results.environment.gemini_key:
        error = await _probe_gemini(client or GeminiClient(settings))
        results.connectivity.gemini = error is None
        if error is not None:
            results.errors.append(error)

    logger.info("diagnostics_completed", errors=len(results.errors), all_good=results.all_good)
    return results


def _mark(ok: bool, good: str, bad: str) -> str:
    return f"✅ {good}" if ok else f"❌ {bad}"


def format_diagnostic_report(results: DiagnosticResults) -> str:
    lines = ["=== Email Productivity Agent Diagnostics ===", ""]

    lines.append("1. Environment Variables:")
    lines.append(f"   - Database URL: {_mark(results.environment.database_url, 'Set', 'Missing')}")
    lines.append(f"   - Database Key: {_mark(results.environment.database_key, 'Set', 'Missing')}")
    lines.append(f"   - Gemini Key: {_mark(results.environment.gemini_key, 'Set', 'Missing')}")
    lines.append("")

    lines.append("2. API Connectivity:")
    lines.append(f"   - Database: {_mark(results.connectivity.database, 'Connected', 'Failed')}")
    lines.append(f"   - Gemini: {_mark(results.connectivity.gemini, 'Connected', 'Failed')}")
    lines.append("")

    db = results.database
    lines.append("3. Database Tables:")
    lines.append(
        f"   - Emails: {_mark(db.emails_table, f'Available ({db.email_count} records)', 'Not Found')}"
    )
    lines.append(
        f"   - Prompts: {_mark(db.prompts_table, f'Available ({db.prompt_count} records)', 'Not Found')}"
    )
    lines.append("")

    if results.errors:
        lines.append("4. Errors:")
        lines.extend(f"   {idx}. {error}" for idx, error in enumerate(results.errors, start=1))
        lines.append("")

    if results.all_good:
        lines.append("✅ All checks passed! Your application is ready to use.")
    else:
        lines.append("⚠️ Some issues were found. Please fix the errors above.")
    return "\n".join(lines) + "\n"


async def check_api_connections(
    settings: Settings,
    engine: Engine | None,
    client: GeminiClient | None = None,
) -> ApiStatus:
    """Quick connectivity check used at startup."""
    status = ApiStatus()

    if engine is None:
        status.database.message = "Database is not configured"
    elif check_connection(engine):
        status.database = ServiceStatus(True, "Connected successfully")
    else:
        status.database.message = "Unable to connect to database"

    if not settings.gemini_api_key:
        status.gemini.message = "API key not configured"
    else:
        error = await _probe_gemini(client or GeminiClient(settings))
        if error is None:
            status.gemini = ServiceStatus(True, "Connected successfully")
        else:
            status.gemini.message = "Connection timed out" if "timed out" in error else error

    return status


def format_api_status(status: ApiStatus) -> str:
    lines = ["=== API Connection Status ===", ""]
    for label, service in (("Database", status.database), ("Gemini API", status.gemini)):
        lines.append(f"{label}:")
        lines.append(f"  Status: {_mark(service.connected, 'Connected', 'Disconnected')}")
        lines.append(f"  Message: {service.message}")
        lines.append("")

    if status.database.connected and status.gemini.connected:
        lines.append("All APIs are connected and ready! ✅")
        return "\n".join(lines)

    lines.append("=== Troubleshooting Tips ===")
    if not status.database.connected:
        lines.append("- Check your internet connection")
        lines.append("- Verify EMAIL_AGENT_DATABASE_URL and EMAIL_AGENT_DATABASE_KEY")
        lines.append("- Ensure your database project is active")
        lines.append("- Check that the schema has been applied")
        lines.append("")
    if not status.gemini.connected:
        lines.append("- Check your internet connection")
        lines.append("- Verify EMAIL_AGENT_GEMINI_API_KEY")
        lines.append("- Ensure your API key has sufficient quota")
        lines.append("- Check that the API key is valid and not expired")
    return "\n".join(lines)
