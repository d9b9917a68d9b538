"""Shared plumbing for table repositories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine, Row

from email_productivity_agent.db import now_iso, translate_errors
from email_productivity_agent.exceptions import RecordNotFoundError


class TableRepository:
    """Generic get/insert/update/delete over one table.

    Subclasses name the table, the columns callers may write, and how a row
    becomes a model.
    """

    table: str
    writable: frozenset[str]
    # Tables whose rows carry an updated_at column refreshed on every write.
    touches_updated_at: bool = False

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _to_model(self, row: Row) -> Any:
        raise NotImplementedError

    def _to_params(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return dict(values)

    def _select(self, where: str = "", order_by: str = "", **params: Any) -> list[Any]:
        sql = f"SELECT * FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        if order_by:
            sql += f" ORDER BY {order_by}"

        with translate_errors(f"{self.table}.select"), self._engine.connect() as conn:
            rows = conn.execute(text(sql), params).fetchall()
        return [self._to_model(row) for row in rows]

    def get(self, record_id: str) -> Any | None:
        rows = self._select("id = :id", id=record_id)
        return rows[0] if rows else None

    def count(self) -> int:
        with translate_errors(f"{self.table}.count"), self._engine.connect() as conn:
            return int(conn.execute(text(f"SELECT COUNT(*) FROM {self.table}")).scalar_one())

    def _insert(self, values: Mapping[str, Any]) -> Any:
        params = self._to_params(values)
        columns = ", ".join(f'"{c}"' for c in params)
        placeholders = ", ".join(f":{c}" for c in params)
        query = text(f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})")

        with translate_errors(f"{self.table}.insert"), self._engine.begin() as conn:
            conn.execute(query, params)
        return self.get(params["id"])

    def update(self, record_id: str, **changes: Any) -> Any:
        """Update writable columns of one row and return the fresh record.

        Raises:
            ValueError: If a non-writable column is passed.
            RecordNotFoundError: If no row has ``record_id``.
        """
        unknown = set(changes) - self.writable
        if unknown:
            raise ValueError(f"Cannot update {self.table} columns: {', '.join(sorted(unknown))}")

        params = self._to_params(changes)
        if self.touches_updated_at:
            params["updated_at"] = now_iso()
        if not params:
            record = self.get(record_id)
            if record is None:
                raise RecordNotFoundError(f"{self.table} row {record_id} not found")
            return record

        assignments = ", ".join(f'"{c}" = :{c}' for c in params)
        query = text(f"UPDATE {self.table} SET {assignments} WHERE id = :id")

        with translate_errors(f"{self.table}.update"), self._engine.begin() as conn:
            result = conn.execute(query, {**params, "id": record_id})
        if result.rowcount == 0:
            raise RecordNotFoundError(f"{self.table} row {record_id} not found")
        return self.get(record_id)

    def delete(self, record_id: str) -> None:
        query = text(f"DELETE FROM {self.table} WHERE id = :id")
        with translate_errors(f"{self.table}.delete"), self._engine.begin() as conn:
            conn.execute(query, {"id": record_id})
