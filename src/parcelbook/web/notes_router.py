"""Developer notes API router: bug reports and feature requests left in the app."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from parcelbook.ledger.models import Note
from parcelbook.repositories import resolve


router = APIRouter()


class NoteRequest(BaseModel):
    """Request body for recording a note."""

    content: str


def _get_note_store(request: Request):
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Note store not available")
    return store


@router.get("/api/notes")
async def api_list_notes(request: Request) -> list[dict[str, Any]]:
    """List notes, newest first."""
    notes = await resolve(_get_note_store(request).list_all())
    return [n.to_document() for n in notes]


@router.post("/api/notes")
async def api_add_note(body: NoteRequest, request: Request) -> dict[str, Any]:
    content = body.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="Note content must not be empty")
    note = await resolve(_get_note_store(request).add(Note(content=content)))
    return note.to_document()


@router.delete("/api/notes/{note_id}")
async def api_delete_note(note_id: str, request: Request) -> dict[str, Any]:
    """Remove a note once its issue is fixed."""
    deleted = await resolve(_get_note_store(request).delete(note_id))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Note {note_id!r} not found")
    return {"deleted": True, "id": note_id}
