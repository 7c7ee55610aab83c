"""PostgreSQL project repository."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy import select

from parcelbook.db.engine import DatabaseManager
from parcelbook.db.models import ProjectRow
from parcelbook.ledger.models import Project
from parcelbook.projects.store import SubscriberSet

logger = logging.getLogger(__name__)


class PostgresProjectRepository:
    """Postgres-backed project storage, one JSON document per project."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db
        self._subscribers = SubscriberSet()

    async def load_projects(self) -> list[Project]:
        async with self._db.session() as db:
            result = await db.execute(select(ProjectRow).order_by(ProjectRow.name, ProjectRow.id))
            return [self._row_to_project(r) for r in result.scalars().all()]

    async def get_project(self, project_id: str) -> Project | None:
        async with self._db.session() as db:
            row = await db.get(ProjectRow, project_id)
            if row is None:
                return None
            return self._row_to_project(row)

    async def save_project(self, project: Project) -> Project:
        document = project.to_document()
        async with self._db.session() as db:
            existing = await db.get(ProjectRow, project.id)
            if existing:
                existing.name = project.name
                existing.document = document
                existing.updated_at = project.updated_at
            else:
                db.add(ProjectRow(
                    id=project.id,
                    name=project.name,
                    document=document,
                    updated_at=project.updated_at,
                ))
            await db.commit()
        logger.debug("Saved project %s", project.id)
        await self._publish()
        return project

    async def delete_project(self, project_id: str) -> bool:
        async with self._db.session() as db:
            row = await db.get(ProjectRow, project_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
        logger.debug("Deleted project %s", project_id)
        await self._publish()
        return True

    def subscribe(self, on_change: Callable[[list[Project]], None]) -> Callable[[], None]:
        """Register ``on_change``; call the returned handle to stop listening."""
        return self._subscribers.add(on_change)

    async def _publish(self) -> None:
        if len(self._subscribers):
            self._subscribers.publish(await self.load_projects())

    @staticmethod
    def _row_to_project(row: ProjectRow) -> Project:
        return Project.model_validate({**row.document, "id": row.id})
