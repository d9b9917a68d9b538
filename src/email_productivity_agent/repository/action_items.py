"""Repository for the ``action_items`` table."""

from __future__ import annotations

from sqlalchemy.engine import Row

from email_productivity_agent.db import new_id, now_iso
from email_productivity_agent.models import ActionItem
from email_productivity_agent.repository.base import TableRepository


class ActionItemRepository(TableRepository):
    table = "action_items"
    writable = frozenset({"task", "deadline", "is_completed"})

    def _to_model(self, row: Row) -> ActionItem:
        return ActionItem.model_validate(dict(row._mapping))

    def list_all(self) -> list[ActionItem]:
        return self._select(order_by="created_at DESC")

    def list_for_email(self, email_id: str) -> list[ActionItem]:
        return self._select("email_id = :email_id", order_by="created_at", email_id=email_id)

    def create(self, *, email_id: str, task: str, deadline: str = "") -> ActionItem:
        return self._insert(
            {
                "id": new_id(),
                "email_id": email_id,
                "task": task,
                "deadline": deadline,
                "is_completed": False,
                "created_at": now_iso(),
            }
        )
