"""Tests for app factory wiring with in-memory and SQL storage."""

from __future__ import annotations

from fastapi.testclient import TestClient

from parcelbook.core.config import Settings
from parcelbook.projects.store import InMemoryProjectStore, NoteStore
from parcelbook.web.app import create_app


def test_create_app_defaults_to_memory():
    app = create_app(settings=Settings())
    assert isinstance(app.state.project_store, InMemoryProjectStore)
    assert isinstance(app.state.note_store, NoteStore)
    assert not hasattr(app.state, "db_manager")


def test_create_app_with_injected_stores():
    store = InMemoryProjectStore()
    app = create_app(project_store=store)
    assert app.state.project_store is store


def test_create_app_with_sql_backend():
    from parcelbook.repositories.postgres.notes import PostgresNoteRepository
    from parcelbook.repositories.postgres.projects import PostgresProjectRepository

    settings = Settings()
    settings.storage.backend = "sql"
    settings.storage.database_url = "sqlite+aiosqlite:///:memory:"
    app = create_app(settings=settings)
    assert isinstance(app.state.project_store, PostgresProjectRepository)
    assert isinstance(app.state.note_store, PostgresNoteRepository)
    assert hasattr(app.state, "db_manager")


def test_sql_backend_end_to_end(tmp_path):
    settings = Settings()
    settings.storage.backend = "sql"
    settings.storage.database_url = f"sqlite+aiosqlite:///{tmp_path / 'parcelbook.db'}"
    with TestClient(create_app(settings=settings)) as client:
        assert client.get("/api/health").json()["storage"] == "sql"
        created = client.post("/api/projects", json={"name": "Riverside Lots"}).json()
        client.put(f"/api/projects/{created['id']}/buyers", json={"name": "Harbor Logistics"})
        loaded = client.get(f"/api/projects/{created['id']}").json()
        assert loaded["buyers"][0]["name"] == "Harbor Logistics"
        assert client.post("/api/notes", json={"content": "Works"}).status_code == 200
        assert len(client.get("/api/notes").json()) == 1


def test_cors_allows_all_origins():
    app = create_app()
    cors = next(m for m in app.user_middleware if m.cls.__name__ == "CORSMiddleware")
    assert cors.kwargs.get("allow_origins") == ["*"]


async def test_editing_session_uses_configured_debounce(project):
    settings = Settings()
    settings.autosave.debounce_ms = 250
    app = create_app(settings=settings)
    session = app.state.open_editing_session(project)
    assert session.autosave.delay_ms == 250
    await session.flush()
    assert app.state.project_store.get_project(project.id) is None
    session.apply(lambda p: p.model_copy(update={"zone": "Industrial"}))
    await session.flush()
    assert app.state.project_store.get_project(project.id).zone == "Industrial"


def test_debounce_from_environment(monkeypatch, project):
    monkeypatch.setenv("PARCELBOOK_AUTOSAVE_DEBOUNCE_MS", "40")
    app = create_app()
    assert app.state.open_editing_session(project).autosave.delay_ms == 40


def test_environment_and_debug_settings(monkeypatch):
    monkeypatch.setenv("PARCELBOOK_ENVIRONMENT", "staging")
    monkeypatch.setenv("PARCELBOOK_DEBUG", "true")
    app = create_app()
    assert app.debug is True
    health = TestClient(app).get("/api/health").json()
    assert health["environment"] == "staging"
