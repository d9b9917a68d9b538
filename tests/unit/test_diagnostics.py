"""Unit tests for setup diagnostics."""

import pytest
from sqlalchemy import create_engine

from email_productivity_agent.config import Settings
from email_productivity_agent.diagnostics import (
    check_api_connections,
    format_api_status,
    format_diagnostic_report,
    run_diagnostics,
)
from email_productivity_agent.exceptions import LLMAPIError, LLMTimeoutError


class TestRunDiagnostics:
    """Test suite for run_diagnostics."""

    @pytest.mark.asyncio
    async def test_everything_healthy(self, mock_settings, engine, fake_gemini, default_prompts) -> None:
        results = await run_diagnostics(mock_settings, engine, fake_gemini(["ok"]))

        assert results.all_good
        assert results.database.prompt_count == 3
        assert results.database.email_count == 0
        report = format_diagnostic_report(results)
        assert "Available (3 records)" in report
        assert "All checks passed!" in report

    @pytest.mark.asyncio
    async def test_missing_tables_are_reported(self, mock_settings, tmp_path, fake_gemini) -> None:
        bare = create_engine(f"sqlite:///{tmp_path / 'empty.sqlite3'}")

        results = await run_diagnostics(mock_settings, bare, fake_gemini(["ok"]))

        assert results.connectivity.database is True
        assert results.database.emails_table is False
        assert any("Emails table error" in e and "table not found" in e for e in results.errors)
        assert not results.all_good
        bare.dispose()

    @pytest.mark.asyncio
    async def test_missing_configuration(self, monkeypatch, fake_gemini) -> None:
        monkeypatch.delenv("EMAIL_AGENT_GEMINI_API_KEY", raising=False)
        client = fake_gemini([])

        results = await run_diagnostics(Settings(_env_file=None), None, client)

        assert results.errors == [
            "EMAIL_AGENT_DATABASE_URL is not set",
            "EMAIL_AGENT_DATABASE_KEY is not set",
            "EMAIL_AGENT_GEMINI_API_KEY is not set",
        ]
        assert client.calls == []
        assert "❌ Missing" in format_diagnostic_report(results)

    @pytest.mark.asyncio
    async def test_gemini_timeout(self, mock_settings, engine, fake_gemini) -> None:
        results = await run_diagnostics(
            mock_settings, engine, fake_gemini([LLMTimeoutError("Request timed out after 10 seconds.")])
        )

        assert results.connectivity.gemini is False
        assert "Gemini API connection timed out" in results.errors


class TestApiConnections:
    """Test suite for the startup connectivity check."""

    @pytest.mark.asyncio
    async def test_all_connected(self, mock_settings, engine, fake_gemini) -> None:
        status = await check_api_connections(mock_settings, engine, fake_gemini(["ok"]))

        assert status.database.connected
        assert status.gemini.connected
        assert "All APIs are connected and ready!" in format_api_status(status)

    @pytest.mark.asyncio
    async def test_gemini_error_message(self, mock_settings, engine, fake_gemini) -> None:
        client = fake_gemini([LLMAPIError("Gemini API error: API key not valid", status_code=400)])

        status = await check_api_connections(mock_settings, engine, client)

        assert status.gemini.connected is False
        assert status.gemini.message == "Gemini API error: API key not valid"
        text = format_api_status(status)
        assert "Troubleshooting Tips" in text
        assert "Verify EMAIL_AGENT_GEMINI_API_KEY" in text

    @pytest.mark.asyncio
    async def test_unconfigured(self, monkeypatch) -> None:
        monkeypatch.delenv("EMAIL_AGENT_GEMINI_API_KEY", raising=False)

        status = await check_api_connections(Settings(_env_file=None), None)

        assert status.database.message == "Database is not configured"
        assert status.gemini.message == "API key not configured"
