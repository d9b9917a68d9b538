"""Command-line interface for Email Productivity Agent.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from email_productivity_agent import __version__
from email_productivity_agent.config import Settings, get_settings
from email_productivity_agent.exceptions import ConfigurationError, EmailAgentError
from email_productivity_agent.utils import configure_logging

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="email-agent", description="Email Productivity Agent")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup", help="Create the tables and seed default prompts and mock emails")
    subparsers.add_parser("process", help="Categorize and extract action items for the whole inbox")

    diagnose_parser = subparsers.add_parser("diagnose", help="Check configuration and connectivity")
    diagnose_parser.add_argument(
        "--quick",
        action="store_true",
        help="Only test the database and Gemini connections",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser


def _cmd_setup(settings: Settings) -> int:
    from email_productivity_agent.db import build_engine, ensure_schema
    from email_productivity_agent.repository import EmailRepository, PromptRepository
    from email_productivity_agent.seed import seed_defaults

    engine = build_engine(settings)
    ensure_schema(engine)
    created = seed_defaults(PromptRepository(engine), EmailRepository(engine))
    print(f"Seeded {created['prompts']} prompts and {created['emails']} emails")
    return 0


async def _cmd_process(settings: Settings) -> int:
    from email_productivity_agent.agent import BatchProcessor, EmailAgent
    from email_productivity_agent.db import build_engine
    from email_productivity_agent.repository import (
        ActionItemRepository,
        EmailRepository,
        PromptRepository,
    )

    engine = build_engine(settings)
    agent = EmailAgent(
        EmailRepository(engine),
        PromptRepository(engine),
        ActionItemRepository(engine),
        settings=settings,
    )
    summary = await BatchProcessor(agent, settings).process_all()
    print(summary.message)
    print(
        f"processed={summary.processed} failed={summary.failed} "
        f"remaining={summary.remaining} passes={summary.passes}"
    )
    return 0 if summary.remaining == 0 else 1


async def _cmd_diagnose(settings: Settings, quick: bool) -> int:
    from email_productivity_agent import diagnostics
    from email_productivity_agent.db import build_engine

    try:
        engine = build_engine(settings)
    except ConfigurationError:
        engine = None

    if quick:
        status = await diagnostics.check_api_connections(settings, engine)
        print(diagnostics.format_api_status(status))
        return 0 if status.database.connected and status.gemini.connected else 1

    results = await diagnostics.run_diagnostics(settings, engine)
    print(diagnostics.format_diagnostic_report(results))
    return 0 if results.all_good else 1


def _cmd_serve(settings: Settings, host: str, port: int) -> int:
    import uvicorn

    from email_productivity_agent.api import create_app

    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Email Productivity Agent CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()
    configure_logging(settings)

    logger.info("email_productivity_agent_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    try:
        if parsed.command == "setup":
            return _cmd_setup(settings)
        if parsed.command == "process":
            return asyncio.run(_cmd_process(settings))
        if parsed.command == "diagnose":
            return asyncio.run(_cmd_diagnose(settings, parsed.quick))
        if parsed.command == "serve":
            return _cmd_serve(settings, parsed.host, parsed.port)
    except EmailAgentError as exc:
        logger.error("command_failed", command=parsed.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.error("unknown_command", command=parsed.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
