"""Tests for the in-memory project and note stores."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from parcelbook.ledger.models import Note
from parcelbook.projects.store import InMemoryProjectStore, NoteStore

from tests.conftest import make_project


class TestInMemoryProjectStore:
    def test_save_and_get(self, project):
        store = InMemoryProjectStore()
        store.save_project(project)
        assert store.get_project(project.id).to_document() == project.to_document()
        assert store.get_project("missing") is None
        assert store.count == 1

    def test_load_ordered_by_name(self):
        store = InMemoryProjectStore()
        for name in ("Station Plaza", "Amber Court", "Riverside Lots"):
            store.save_project(make_project(name))
        names = [p.name for p in store.load_projects()]
        assert names == ["Amber Court", "Riverside Lots", "Station Plaza"]

    def test_returns_copies(self, project):
        store = InMemoryProjectStore()
        store.save_project(project)
        loaded = store.get_project(project.id)
        loaded.buyers.clear()
        assert len(store.get_project(project.id).buyers) == 1

    def test_delete(self, project):
        store = InMemoryProjectStore()
        store.save_project(project)
        assert store.delete_project(project.id) is True
        assert store.delete_project(project.id) is False
        assert store.load_projects() == []


class TestSubscriptions:
    def test_listener_gets_full_list(self, project):
        store = InMemoryProjectStore()
        received = []
        store.subscribe(received.append)
        store.save_project(project)
        store.delete_project(project.id)
        assert [len(projects) for projects in received] == [1, 0]

    def test_unsubscribe(self, project):
        store = InMemoryProjectStore()
        received = []
        unsubscribe = store.subscribe(received.append)
        unsubscribe()
        unsubscribe()
        store.save_project(project)
        assert received == []

    def test_failing_listener_does_not_break_others(self, project, caplog):
        store = InMemoryProjectStore()
        received = []

        def broken(projects):
            raise RuntimeError("listener crashed")

        store.subscribe(broken)
        store.subscribe(received.append)
        store.save_project(project)
        assert len(received) == 1
        assert "listener" in caplog.text


class TestNoteStore:
    def test_newest_first(self):
        store = NoteStore()
        now = datetime.now(timezone.utc)
        old = store.add(Note(content="old", created_at=now - timedelta(days=1)))
        new = store.add(Note(content="new", created_at=now))
        assert [n.id for n in store.list_all()] == [new.id, old.id]
        assert store.count() == 2

    def test_delete(self):
        store = NoteStore()
        note = store.add(Note(content="Export is slow"))
        assert store.delete(note.id) is True
        assert store.delete(note.id) is False
        assert store.count() == 0
