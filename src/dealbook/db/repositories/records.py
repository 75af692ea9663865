"""
dealbook.db.repositories.records

Repository for owner-scoped records (deals, surveys).

Responsibilities:
- Insert a mapped record of a given kind.
- List an owner's records as a column projection.
- Fetch one record by its system-assigned id.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from dealbook.db.models import MODELS, Deal, Survey
from dealbook.records.mapping import RecordKind


class RecordRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, kind: RecordKind, record: dict[str, Any]) -> Deal | Survey:
        row = MODELS[kind](**record)
        self._session.add(row)
        await self._session.flush()
        return row

    async def list_by_owner(
        self, kind: RecordKind, owner_id: str, columns: Sequence[str]
    ) -> list[dict[str, Any]]:
        model = MODELS[kind]
        stmt = (
            select(*(getattr(model, name) for name in columns))
            .where(model.user_id == owner_id)
            .order_by(desc(model.created_at))
        )
        return [dict(m) for m in (await self._session.execute(stmt)).mappings().all()]

    async def get_by_id(self, kind: RecordKind, record_id: uuid.UUID) -> Deal | Survey | None:
        return await self._session.get(MODELS[kind], record_id)


# --- Module Notes -----------------------------------------------------------
# Ownership is not checked here; callers compare `user_id` against the principal.
