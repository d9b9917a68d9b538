"""Task template storage.

The agent only reads templates (``list_all`` / ``get_by_name``); creating,
editing and deleting them is left to whoever manages the prompts.
"""

from __future__ import annotations

from sqlalchemy.engine import Row

from email_productivity_agent.db import new_id, now_iso
from email_productivity_agent.models import Prompt
from email_productivity_agent.repository.base import TableRepository


class PromptRepository(TableRepository):
    table = "prompts"
    # ``name`` is the template's identity and never changes after creation.
    writable = frozenset({"content", "description"})
    touches_updated_at = True

    def _to_model(self, row: Row) -> Prompt:
        return Prompt.model_validate(dict(row._mapping))

    def list_all(self) -> list[Prompt]:
        return self._select(order_by="name")

    def get_by_name(self, name: str) -> Prompt | None:
        rows = self._select("name = :name", name=name)
        return rows[0] if rows else None

    def create(self, *, name: str, content: str, description: str = "") -> Prompt:
        now = now_iso()
        return self._insert(
            {
                "id": new_id(),
                "name": name,
                "content": content,
                "description": description,
                "created_at": now,
                "updated_at": now,
            }
        )
