"""Repository for the ``emails`` table."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Row

from email_productivity_agent.db import new_id, now_iso, translate_errors
from email_productivity_agent.models import Email
from email_productivity_agent.repository.base import TableRepository


class EmailRepository(TableRepository):
    """Inbox storage. Newest emails come first."""

    table = "emails"
    writable = frozenset(
        {"sender", "sender_name", "subject", "body", "category", "timestamp", "is_processed"}
    )

    def _to_model(self, row: Row) -> Email:
        return Email.model_validate(dict(row._mapping))

    def list_all(self) -> list[Email]:
        return self._select(order_by='"timestamp" DESC')

    def list_needing_processing(self) -> list[Email]:
        return [email for email in self.list_all() if email.needs_processing]

    def create(
        self,
        *,
        sender: str,
        subject: str,
        body: str,
        timestamp: str,
        sender_name: str = "",
    ) -> Email:
        """Insert a new, unprocessed and uncategorized email."""
        return self._insert(
            {
                "id": new_id(),
                "sender": sender,
                "sender_name": sender_name,
                "subject": subject,
                "body": body,
                "category": None,
                "timestamp": timestamp,
                "is_processed": False,
                "created_at": now_iso(),
            }
        )

    def delete_all(self) -> None:
        with translate_errors("emails.delete_all"), self._engine.begin() as conn:
            conn.execute(text("DELETE FROM action_items"))
            conn.execute(text("UPDATE drafts SET email_id = NULL WHERE email_id IS NOT NULL"))
            conn.execute(text("DELETE FROM emails"))
