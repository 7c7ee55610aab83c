"""In-memory project and note stores."""

from __future__ import annotations

import logging
from typing import Callable

from parcelbook.ledger.models import Note, Project

logger = logging.getLogger(__name__)

ProjectListener = Callable[[list[Project]], None]


class SubscriberSet:
    """Listeners notified with the full project list after every write."""

    def __init__(self) -> None:
        self._listeners: list[ProjectListener] = []

    def add(self, on_change: ProjectListener) -> Callable[[], None]:
        self._listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in self._listeners:
                self._listeners.remove(on_change)

        return unsubscribe

    def publish(self, projects: list[Project]) -> None:
        for listener in list(self._listeners):
            try:
                listener([p.model_copy(deep=True) for p in projects])
            except Exception:
                logger.exception("Project listener %r failed", listener)

    def __len__(self) -> int:
        return len(self._listeners)


class InMemoryProjectStore:
    """In-memory dict store for projects.

    Suitable for a single-instance deployment and for tests. Stored and
    returned projects are copies, so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._projects: dict[str, Project] = {}
        self._subscribers = SubscriberSet()

    def load_projects(self) -> list[Project]:
        """All projects, ordered by name."""
        ordered = sorted(self._projects.values(), key=lambda p: (p.name, p.id))
        return [p.model_copy(deep=True) for p in ordered]

    def get_project(self, project_id: str) -> Project | None:
        project = self._projects.get(project_id)
        return project.model_copy(deep=True) if project else None

    def save_project(self, project: Project) -> Project:
        self._projects[project.id] = project.model_copy(deep=True)
        self._subscribers.publish(self.load_projects())
        return project

    def delete_project(self, project_id: str) -> bool:
        if self._projects.pop(project_id, None) is None:
            return False
        self._subscribers.publish(self.load_projects())
        return True

    def subscribe(self, on_change: ProjectListener) -> Callable[[], None]:
        """Register ``on_change``; call the returned handle to stop listening."""
        return self._subscribers.add(on_change)

    @property
    def count(self) -> int:
        return len(self._projects)


class NoteStore:
    """In-memory store for developer notes."""

    def __init__(self) -> None:
        self._notes: dict[str, Note] = {}

    def add(self, note: Note) -> Note:
        self._notes[note.id] = note
        return note

    def list_all(self) -> list[Note]:
        """Return all notes, newest first."""
        return sorted(self._notes.values(), key=lambda n: n.created_at, reverse=True)

    def delete(self, note_id: str) -> bool:
        return self._notes.pop(note_id, None) is not None

    def count(self) -> int:
        return len(self._notes)
