"""SQL Record Store — RecordStore implementation over the shared SQLAlchemy pool.

Invariants:
    - One AsyncSession per operation: concurrent list/create/delete never share a session
    - create() assigns the id; any "id" in the payload is ignored
    - delete() re-composes the id with its collection before lookup; absent record = no-op
    - Records leave this module as dicts whose "id" is the "<collection>:<key>" wire form

Design Decisions:
    - Explicit collection -> model map: every collection visible in one place
    - No extra transaction discipline: a delete racing a list may or may not be observed
    - Rows returned in creation order; callers must not rely on it
"""

import logging

from sqlalchemy import delete as sql_delete, select

from portfolio.core.domain_types import Collection, RecordId
from portfolio.infrastructure.database import DatabaseSessionManager
from portfolio.models.blog_post import BlogPost
from portfolio.models.project import Project

logger = logging.getLogger(__name__)

_MODELS = {
    Collection.BLOG_POST: BlogPost,
    Collection.PROJECT: Project,
}

_FIELDS = {
    Collection.BLOG_POST: ("title", "content"),
    Collection.PROJECT: ("title", "content", "link"),
}


def _to_record(collection: Collection, row) -> dict:
    record = {"id": str(RecordId(collection, row.key))}
    for name in _FIELDS[collection]:
        record[name] = getattr(row, name)
    return record


class SqlRecordStore:
    """Document-style CRUD over one table per collection."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def create(self, collection: Collection, payload: dict) -> dict:
        record_id = RecordId.new(collection)
        values = {name: payload.get(name, "") for name in _FIELDS[collection]}
        row = _MODELS[collection](key=record_id.key, **values)
        async with self._manager.session() as db:
            db.add(row)
            await db.commit()
        logger.info(
            "Record created",
            extra={"collection": collection.value, "record_id": str(record_id)},
        )
        return _to_record(collection, row)

    async def delete(self, collection: Collection, record_id: str) -> None:
        rid = RecordId.parse(record_id, collection)
        model = _MODELS[collection]
        async with self._manager.session() as db:
            result = await db.execute(
                sql_delete(model).where(model.key == rid.key),
            )
            await db.commit()
        if result.rowcount:
            logger.info(
                "Record deleted",
                extra={"collection": collection.value, "record_id": str(rid)},
            )
        else:
            logger.info(
                "Delete of absent record ignored",
                extra={"collection": collection.value, "record_id": str(rid)},
            )

    async def list(self, collection: Collection) -> list[dict]:
        model = _MODELS[collection]
        async with self._manager.session() as db:
            result = await db.execute(
                select(model).order_by(model.created_at),
            )
            rows = result.scalars().all()
        return [_to_record(collection, row) for row in rows]
