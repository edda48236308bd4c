"""
Document-style collection adapter.

Each collection is a SQLAlchemy Core table with a string primary key, read and
written through an async ``databases.Database``. Documents go in and come out
as plain dicts keyed by column name. Keys that are not columns of the table are
dropped on write, so response-only fields never reach storage.
"""
import uuid
import logging
from typing import Any, Dict, List, Optional

from databases import Database
from sqlalchemy import Table

logger = logging.getLogger("store")


def new_object_id() -> str:
    """Store-assigned identity for documents saved without one."""
    return uuid.uuid4().hex


class DocumentCollection:
    def __init__(self, database: Database, table: Table, id_field: str):
        if id_field not in table.c:
            raise ValueError(f"Table '{table.name}' has no column '{id_field}'")
        self.database = database
        self.table = table
        self.id_field = id_field

    @property
    def name(self) -> str:
        return self.table.name

    def _column(self, field: str):
        if field not in self.table.c:
            raise ValueError(f"Collection '{self.name}' has no field '{field}'")
        return self.table.c[field]

    def _to_row(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {c.name: document[c.name] for c in self.table.columns if c.name in document}

    def _to_document(self, record) -> Dict[str, Any]:
        return {c.name: record[c.name] for c in self.table.columns}

    async def save(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert ``document``, or replace the stored one carrying the same id.

        A document without an id gets a fresh one. Returns the stored document.
        """
        row = self._to_row(document)
        doc_id = row.get(self.id_field)
        id_column = self._column(self.id_field)

        if doc_id and await self.find_by_id(doc_id) is not None:
            changes = {k: v for k, v in row.items() if k != self.id_field}
            if changes:
                await self.database.execute(
                    self.table.update().where(id_column == doc_id).values(**changes)
                )
            logger.debug(f"[{self.name}] updated {doc_id}")
        else:
            if not doc_id:
                doc_id = new_object_id()
                row[self.id_field] = doc_id
            await self.database.execute(self.table.insert().values(**row))
            logger.debug(f"[{self.name}] inserted {doc_id}")

        return await self.find_by_id(doc_id)

    async def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        query = self.table.select().where(self._column(self.id_field) == doc_id)
        record = await self.database.fetch_one(query)
        if record is None:
            return None
        return self._to_document(record)

    async def find_all(self) -> List[Dict[str, Any]]:
        records = await self.database.fetch_all(self.table.select())
        return [self._to_document(r) for r in records]

    async def find_by_field(self, field: str, value: Any) -> List[Dict[str, Any]]:
        query = self.table.select().where(self._column(field) == value)
        records = await self.database.fetch_all(query)
        return [self._to_document(r) for r in records]

    async def delete_by_id(self, doc_id: str) -> bool:
        """Remove the document; False if there was nothing to remove."""
        if await self.find_by_id(doc_id) is None:
            return False
        await self.database.execute(
            self.table.delete().where(self._column(self.id_field) == doc_id)
        )
        return True
