"""Storage gateway - generic table access over an AsyncSession."""

from typing import Any

from sqlalchemy import Table, insert, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from supplier_performance.models import sequences_table

# Dialects whose INSERT supports ON CONFLICT .. DO UPDATE .. RETURNING
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class PerformanceStore:
    """
    Thin data-access layer used by the performance service.

    Never commits: the caller owns the session and therefore the transaction.
    Every statement is a SQLAlchemy expression with bound parameters.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, table: Table, fields: dict[str, Any]) -> int:
        """Insert one row and return its generated primary key."""
        result = await self.db.execute(insert(table).values(**fields))
        return result.inserted_primary_key[0]

    async def update(self, table: Table, fields: dict[str, Any], match: dict[str, Any]) -> int:
        """Update rows matching every column in ``match``; return the affected row count."""
        stmt = update(table).values(**fields)
        for column, value in match.items():
            stmt = stmt.where(table.c[column] == value)
        result = await self.db.execute(stmt)
        return result.rowcount

    async def fetch_one(self, stmt: Executable) -> dict[str, Any] | None:
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(self, stmt: Executable) -> list[dict[str, Any]]:
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def upsert(
        self,
        table: Table,
        fields: dict[str, Any],
        conflict_keys: list[str],
        update_keys: list[str],
    ) -> dict[str, Any]:
        """
        Insert a row, or overwrite ``update_keys`` of the row that already holds
        ``conflict_keys`` (which must be backed by a unique index). Single
        statement; returns the resulting row.
        """
        stmt = self._upsert_insert()(table).values(**fields)
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_keys,
            set_={key: stmt.excluded[key] for key in update_keys},
        ).returning(*table.c)
        result = await self.db.execute(stmt)
        return dict(result.mappings().one())

    async def next_sequence(self, key: str) -> int:
        """Atomically increment and return the counter for ``key`` (starting at 1)."""
        table = sequences_table
        stmt = self._upsert_insert()(table).values(sequence_key=key, last_value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=["sequence_key"],
            set_={"last_value": table.c.last_value + 1},
        ).returning(table.c.last_value)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    def _upsert_insert(self):
        dialect = self.db.bind.dialect.name
        try:
            return _UPSERT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Upsert is not supported on dialect '{dialect}'") from None
