"""Repository for the ``drafts`` table.

Draft metadata is a free-form JSON object stored as text.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from sqlalchemy.engine import Row

from email_productivity_agent.db import new_id, now_iso
from email_productivity_agent.models import Draft
from email_productivity_agent.repository.base import TableRepository


class DraftRepository(TableRepository):
    table = "drafts"
    writable = frozenset({"email_id", "subject", "body", "suggested_followups", "metadata"})
    touches_updated_at = True

    def _to_model(self, row: Row) -> Draft:
        data = dict(row._mapping)
        raw = data.get("metadata")
        data["metadata"] = json.loads(raw) if isinstance(raw, str) and raw else (raw or {})
        return Draft.model_validate(data)

    def _to_params(self, values: Mapping[str, Any]) -> dict[str, Any]:
        params = dict(values)
        if "metadata" in params:
            params["metadata"] = json.dumps(params["metadata"] or {})
        return params

    def list_all(self) -> list[Draft]:
        return self._select(order_by="created_at DESC")

    def list_for_email(self, email_id: str) -> list[Draft]:
        return self._select("email_id = :email_id", order_by="created_at DESC", email_id=email_id)

    def create(
        self,
        *,
        subject: str = "",
        body: str = "",
        email_id: str | None = None,
        suggested_followups: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> Draft:
        now = now_iso()
        return self._insert(
            {
                "id": new_id(),
                "email_id": email_id,
                "subject": subject,
                "body": body,
                "suggested_followups": suggested_followups,
                "metadata": metadata or {},
                "created_at": now,
                "updated_at": now,
            }
        )
