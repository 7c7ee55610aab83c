"""Protocol definitions for the persistence ports.

Each protocol mirrors the public methods of the corresponding in-memory
store exactly, so both the sync in-memory stores and the async SQL
repositories satisfy the same interface (see ``resolve()``).
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from parcelbook.ledger.models import Note, Project


@runtime_checkable
class ProjectRepository(Protocol):
    """Persistence port for project documents."""

    def load_projects(self) -> list[Project]: ...

    def get_project(self, project_id: str) -> Project | None: ...

    def save_project(self, project: Project) -> Project: ...

    def delete_project(self, project_id: str) -> bool: ...

    def subscribe(
        self, on_change: Callable[[list[Project]], None]
    ) -> Callable[[], None]: ...


@runtime_checkable
class NoteRepository(Protocol):
    """Persistence port for developer notes."""

    def add(self, note: Note) -> Note: ...

    def list_all(self) -> list[Note]: ...

    def delete(self, note_id: str) -> bool: ...

    def count(self) -> int: ...
