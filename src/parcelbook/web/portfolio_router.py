"""Portfolio API router: totals across a selection of projects."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response

from parcelbook.ledger.models import LedgerModel, PortfolioSummary
from parcelbook.ledger.portfolio import summarize_portfolio
from parcelbook.repositories import resolve


router = APIRouter()


class PortfolioRequest(LedgerModel):
    """Request body selecting projects; omit ``projectIds`` to include all."""

    project_ids: list[str] | None = None


async def _summarize(body: PortfolioRequest, request: Request) -> PortfolioSummary:
    store = getattr(request.app.state, "project_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Project store not available")
    projects = await resolve(store.load_projects())
    return summarize_portfolio(projects, body.project_ids)


@router.post("/api/portfolio/summary")
async def api_portfolio_summary(body: PortfolioRequest, request: Request) -> dict[str, Any]:
    """Finance, land and building totals of the selected projects."""
    summary = await _summarize(body, request)
    return summary.to_document()


@router.post("/api/portfolio/summary.pdf")
async def api_portfolio_summary_pdf(body: PortfolioRequest, request: Request) -> Response:
    """Printable portfolio summary."""
    renderer = getattr(request.app.state, "report_renderer", None)
    if renderer is None:
        raise HTTPException(status_code=503, detail="Report renderer not available")
    summary = await _summarize(body, request)
    return Response(content=renderer.render_summary_pdf(summary), media_type="application/pdf")
