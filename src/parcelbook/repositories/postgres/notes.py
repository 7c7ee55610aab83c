"""PostgreSQL developer note repository."""

from __future__ import annotations

from sqlalchemy import func, select

from parcelbook.core.types import NoteStatus
from parcelbook.db.engine import DatabaseManager
from parcelbook.db.models import NoteRow
from parcelbook.ledger.models import Note


class PostgresNoteRepository:
    """Postgres-backed developer note storage."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def add(self, note: Note) -> Note:
        async with self._db.session() as db:
            db.add(NoteRow(
                id=note.id,
                content=note.content,
                status=note.status.value,
                created_at=note.created_at,
            ))
            await db.commit()
        return note

    async def list_all(self) -> list[Note]:
        async with self._db.session() as db:
            result = await db.execute(select(NoteRow).order_by(NoteRow.created_at.desc()))
            return [self._row_to_note(r) for r in result.scalars().all()]

    async def delete(self, note_id: str) -> bool:
        async with self._db.session() as db:
            row = await db.get(NoteRow, note_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
        return True

    async def count(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(NoteRow))
            return result.scalar_one()

    @staticmethod
    def _row_to_note(row: NoteRow) -> Note:
        return Note(
            id=row.id,
            content=row.content,
            status=NoteStatus(row.status),
            created_at=row.created_at,
        )
