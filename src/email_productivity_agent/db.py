"""Database connector and schema bootstrap.

The hosted database is plain Postgres; every table is created idempotently so
a fresh project can be used without running migrations. The DDL sticks to
types both Postgres and SQLite accept: ids are UUID strings, timestamps are
ISO-8601 text, and draft metadata is JSON text.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError, ProgrammingError, SQLAlchemyError

from email_productivity_agent.config import Settings
from email_productivity_agent.exceptions import DatabaseError

logger = structlog.get_logger()

TABLES = ("emails", "prompts", "action_items", "drafts")

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS emails (
        id TEXT PRIMARY KEY,
        sender TEXT NOT NULL,
        sender_name TEXT NOT NULL DEFAULT '',
        subject TEXT NOT NULL DEFAULT '',
        body TEXT NOT NULL DEFAULT '',
        category TEXT,
        "timestamp" TEXT NOT NULL,
        is_processed BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS prompts (
        id TEXT PRIMARY KEY,
        name TEXT UNIQUE NOT NULL,
        content TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS action_items (
        id TEXT PRIMARY KEY,
        email_id TEXT NOT NULL REFERENCES emails(id) ON DELETE CASCADE,
        task TEXT NOT NULL,
        deadline TEXT NOT NULL DEFAULT '',
        is_completed BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS drafts (
        id TEXT PRIMARY KEY,
        email_id TEXT REFERENCES emails(id) ON DELETE SET NULL,
        subject TEXT NOT NULL DEFAULT '',
        body TEXT NOT NULL DEFAULT '',
        suggested_followups TEXT NOT NULL DEFAULT '',
        metadata TEXT NOT NULL DEFAULT '{}',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_action_items_email_id ON action_items(email_id)",
    "CREATE INDEX IF NOT EXISTS idx_drafts_email_id ON drafts(email_id)",
)


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_engine(settings: Settings) -> Engine:
    """Create an engine for the configured database.

    The access credential is injected as the connection password so it never
    has to be embedded in the URL.

    Raises:
        ConfigurationError: If the database settings are missing.
    """
    settings.require_database()

    url = make_url(settings.database_url)
    if settings.database_key and url.get_backend_name() != "sqlite":
        url = url.set(password=settings.database_key)

    engine = create_engine(url, pool_pre_ping=True)
    logger.info("database_engine_created", backend=url.get_backend_name(), host=url.host)
    return engine


def check_connection(engine: Engine) -> bool:
    """Return True when the database answers a trivial query."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database_connection_failed", error=str(exc))
        return False
    return True


def ensure_schema(engine: Engine) -> None:
    """Ensure the four tables exist (idempotent)."""
    with translate_errors("ensure_schema"), engine.begin() as conn:
        for statement in _SCHEMA:
            conn.execute(text(statement))
    logger.info("database_schema_ensured", tables=list(TABLES))


@contextmanager
def translate_errors(context: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as DatabaseError with a user-facing message."""
    try:
        yield
    except SQLAlchemyError as exc:
        detail = str(getattr(exc, "orig", None) or exc)
        lowered = detail.lower()
        logger.error("database_error", context=context, error=detail)

        if "password authentication failed" in lowered or "jwt" in lowered:
            message = "Invalid database credentials. Please check your database configuration."
        elif "no such table" in lowered or (
            isinstance(exc, ProgrammingError) and "does not exist" in lowered
        ):
            message = "Database table not found. Please ensure the schema has been applied."
        elif isinstance(exc, OperationalError):
            message = "Unable to connect to database. Please check your internet connection."
        else:
            message = f"Database error: {detail or 'Unknown error'}"
        raise DatabaseError(message) from exc
