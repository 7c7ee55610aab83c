"""Project API router: projects, their nested entities, stats and export."""

from __future__ import annotations

from typing import Any, Callable
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request, Response

from parcelbook.core.types import LinkedType
from parcelbook.ledger.errors import EntityNotFoundError, LedgerValidationError
from parcelbook.ledger.holdings import apply_lot_item_changes, compute_holdings
from parcelbook.ledger.linkage import resolve_linked_label
from parcelbook.ledger.models import (
    Building,
    Buyer,
    LandLotItem,
    LandParcel,
    LedgerModel,
    Project,
    Transaction,
)
from parcelbook.ledger.stats import compute_ledger_stats
from parcelbook.projects import editor
from parcelbook.repositories import resolve


router = APIRouter()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ProjectCreateRequest(LedgerModel):
    """Request body for creating a project."""

    name: str | None = None
    site: str = ""
    zone: str = ""


class ProjectInfoRequest(LedgerModel):
    """Request body for renaming a project or changing its site and zone."""

    name: str | None = None
    site: str | None = None
    zone: str | None = None


class LotItemChangeRequest(LedgerModel):
    """Request body for editing one lot item in a parcel form."""

    item: LandLotItem
    changes: dict[str, Any]


# ---------------------------------------------------------------------------
# Helpers to get services from app state
# ---------------------------------------------------------------------------


def _get_project_store(request: Request):
    store = getattr(request.app.state, "project_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Project store not available")
    return store


def _get_catalog(request: Request):
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(status_code=503, detail="Ledger catalog not available")
    return catalog


def _get_renderer(request: Request):
    renderer = getattr(request.app.state, "report_renderer", None)
    if renderer is None:
        raise HTTPException(status_code=503, detail="Report renderer not available")
    return renderer


async def _load_project(request: Request, project_id: str) -> Project:
    store = _get_project_store(request)
    project = await resolve(store.get_project(project_id))
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project {project_id!r} not found")
    return project


async def _edit_project(
    request: Request,
    project_id: str,
    operation: Callable[..., Project],
    *args: Any,
) -> dict[str, Any]:
    """Load a project, apply an editor operation and persist the result."""
    project = await _load_project(request, project_id)
    try:
        updated = operation(project, *args)
    except LedgerValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await resolve(_get_project_store(request).save_project(updated))
    return updated.to_document()


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@router.get("/api/projects")
async def api_list_projects(request: Request) -> list[dict[str, Any]]:
    """List all projects ordered by name."""
    store = _get_project_store(request)
    projects = await resolve(store.load_projects())
    return [p.to_document() for p in projects]


@router.post("/api/projects")
async def api_create_project(body: ProjectCreateRequest, request: Request) -> dict[str, Any]:
    """Create a project with empty buyer, land, building and transaction lists."""
    store = _get_project_store(request)
    project = editor.new_project(name=body.name, site=body.site, zone=body.zone)
    await resolve(store.save_project(project))
    return project.to_document()


@router.get("/api/projects/{project_id}")
async def api_get_project(project_id: str, request: Request) -> dict[str, Any]:
    project = await _load_project(request, project_id)
    return project.to_document()


@router.patch("/api/projects/{project_id}")
async def api_update_project(
    project_id: str, body: ProjectInfoRequest, request: Request
) -> dict[str, Any]:
    return await _edit_project(
        request,
        project_id,
        lambda p: editor.update_project_info(p, name=body.name, site=body.site, zone=body.zone),
    )


@router.delete("/api/projects/{project_id}")
async def api_delete_project(project_id: str, request: Request) -> dict[str, Any]:
    """Delete a project together with everything recorded under it."""
    store = _get_project_store(request)
    deleted = await resolve(store.delete_project(project_id))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Project {project_id!r} not found")
    return {"deleted": True, "id": project_id}


# ---------------------------------------------------------------------------
# Buyers
# ---------------------------------------------------------------------------


@router.put("/api/projects/{project_id}/buyers")
async def api_save_buyer(project_id: str, body: Buyer, request: Request) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.save_buyer, body)


@router.delete("/api/projects/{project_id}/buyers/{buyer_id}")
async def api_delete_buyer(project_id: str, buyer_id: str, request: Request) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.delete_buyer, buyer_id)


# ---------------------------------------------------------------------------
# Land parcels
# ---------------------------------------------------------------------------


@router.post("/api/lands/preview")
async def api_preview_land(body: LandParcel) -> dict[str, Any]:
    """Live holding figures for a parcel form that has not been saved yet."""
    return compute_holdings(body.items).to_document()


@router.post("/api/lands/lot-items/apply")
async def api_apply_lot_item_changes(body: LotItemChangeRequest) -> dict[str, Any]:
    """Apply form edits to a lot item, re-deriving its subtotal when needed."""
    return apply_lot_item_changes(body.item, body.changes).to_document()


@router.put("/api/projects/{project_id}/lands")
async def api_save_land(project_id: str, body: LandParcel, request: Request) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.save_land, body)


@router.delete("/api/projects/{project_id}/lands/{land_id}")
async def api_delete_land(project_id: str, land_id: str, request: Request) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.delete_land, land_id)


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------


@router.put("/api/projects/{project_id}/buildings")
async def api_save_building(
    project_id: str, body: Building, request: Request
) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.save_building, body)


@router.delete("/api/projects/{project_id}/buildings/{building_id}")
async def api_delete_building(
    project_id: str, building_id: str, request: Request
) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.delete_building, building_id)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def _transaction_rows(project: Project, transactions: list[Transaction]) -> list[dict[str, Any]]:
    return [
        {
            **t.to_document(),
            "linkedLabel": resolve_linked_label(t, project.lands, project.buildings),
        }
        for t in transactions
    ]


@router.get("/api/projects/{project_id}/transactions")
async def api_list_transactions(project_id: str, request: Request) -> list[dict[str, Any]]:
    """List a project's transactions with the label of their linked asset."""
    project = await _load_project(request, project_id)
    return _transaction_rows(project, project.transactions)


@router.put("/api/projects/{project_id}/transactions")
async def api_save_transaction(
    project_id: str, body: Transaction, request: Request
) -> dict[str, Any]:
    catalog = _get_catalog(request)
    return await _edit_project(request, project_id, editor.save_transaction, body, catalog)


@router.delete("/api/projects/{project_id}/transactions/{tx_id}")
async def api_delete_transaction(
    project_id: str, tx_id: str, request: Request
) -> dict[str, Any]:
    return await _edit_project(request, project_id, editor.delete_transaction, tx_id)


@router.get("/api/projects/{project_id}/ledger/{linked_type}/{linked_id}")
async def api_linked_ledger(
    project_id: str, linked_type: LinkedType, linked_id: str, request: Request
) -> list[dict[str, Any]]:
    """Transactions attributed to a single land parcel or building."""
    project = await _load_project(request, project_id)
    return _transaction_rows(project, editor.transactions_for(project, linked_type, linked_id))


# ---------------------------------------------------------------------------
# Derived figures and export
# ---------------------------------------------------------------------------


@router.get("/api/projects/{project_id}/stats")
async def api_project_stats(project_id: str, request: Request) -> dict[str, Any]:
    project = await _load_project(request, project_id)
    return compute_ledger_stats(project.transactions).to_document()


@router.get("/api/projects/{project_id}/export.csv")
async def api_export_csv(project_id: str, request: Request) -> Response:
    """Download the master report of a project."""
    project = await _load_project(request, project_id)
    renderer = _get_renderer(request)
    filename = quote(renderer.csv_filename(project))
    return Response(
        content=renderer.render_csv_bytes(project),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )


@router.get("/api/catalog")
async def api_catalog(request: Request) -> dict[str, Any]:
    """Transaction categories per type and predefined seller names."""
    return _get_catalog(request).as_dict()
