"""Project report renderer for CSV, JSON and PDF export."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from typing import Any

from parcelbook.core.config import ReportConfig
from parcelbook.core.types import TransactionType
from parcelbook.ledger.holdings import effective_held_area
from parcelbook.ledger.linkage import resolve_linked_label, seller_names
from parcelbook.ledger.models import PortfolioSummary, Project
from parcelbook.ledger.units import format_amount, format_area, to_ping

BOM = "\ufeff"

BUYER_HEADER = ["Name", "Phone", "Address"]
LAND_HEADER = [
    "Sellers",
    "Section",
    "Lot number",
    "Held area (m2)",
    "Held area (ping)",
    "Price per ping",
    "Subtotal",
]
BUILDING_HEADER = [
    "Sellers",
    "Permit number",
    "Address",
    "License",
    "Build number",
    "Area (m2)",
    "Price per unit",
    "Total price",
]
TRANSACTION_HEADER = ["Date", "Type", "Category", "Linkage", "Linked to", "Amount", "Note"]


def _section(title: str) -> list[str]:
    return [f"=== {title} ==="]


class ReportRenderer:
    """Renders projects and portfolio summaries for export."""

    def __init__(self, config: ReportConfig | None = None) -> None:
        self._config = config or ReportConfig()

    # -- CSV --

    def csv_rows(self, project: Project, exported_at: datetime | None = None) -> list[list[str]]:
        """Rows of the master report; blank rows separate the sections."""
        exported_at = exported_at or datetime.now(timezone.utc)
        rows: list[list[str]] = [
            _section(f"Project report: {project.name}"),
            ["Exported at", exported_at.isoformat(timespec="seconds")],
            ["Site", project.site],
            ["Zone", project.zone],
            [],
            _section("Buyers"),
            BUYER_HEADER,
        ]
        rows.extend([b.name, b.phone, b.address] for b in project.buyers)

        rows += [[], _section("Land lots"), LAND_HEADER]
        for parcel in project.lands:
            sellers = seller_names(parcel.sellers, separator=";")
            for item in parcel.items:
                held_m2 = effective_held_area(item)
                rows.append([
                    sellers,
                    parcel.section,
                    item.lot_number,
                    format_area(held_m2),
                    format_area(to_ping(held_m2)),
                    format_amount(item.price_per_ping),
                    format_amount(item.subtotal),
                ])

        rows += [[], _section("Buildings"), BUILDING_HEADER]
        for building in project.buildings:
            rows.append([
                seller_names(building.sellers, separator=";"),
                building.permit_number,
                building.address,
                building.license,
                building.build_number,
                format_area(building.area_m2),
                format_amount(building.price_per_unit),
                format_amount(building.total_price),
            ])

        rows += [[], _section("Transactions"), TRANSACTION_HEADER]
        for tx in project.transactions:
            rows.append([
                tx.date.isoformat(),
                "Income" if tx.type == TransactionType.INCOME else "Expense",
                tx.category,
                tx.linked_type.value,
                resolve_linked_label(tx, project.lands, project.buildings),
                format_amount(tx.amount),
                tx.note,
            ])
        return rows

    def render_csv(self, project: Project, exported_at: datetime | None = None) -> str:
        """Master report as text, prefixed with a byte-order mark."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows(self.csv_rows(project, exported_at))
        return BOM + buffer.getvalue()

    def render_csv_bytes(self, project: Project, exported_at: datetime | None = None) -> bytes:
        return self.render_csv(project, exported_at).encode("utf-8")

    @staticmethod
    def csv_filename(project: Project) -> str:
        return f"[Full report]_{project.name}.csv"

    # -- JSON --

    def render_json(self, project: Project) -> str:
        return json.dumps(project.to_document(), ensure_ascii=False, indent=2)

    # -- PDF --

    def render_summary_pdf(
        self, summary: PortfolioSummary, generated_at: datetime | None = None
    ) -> bytes:
        """Render a portfolio summary as a PDF document using fpdf2."""
        from fpdf import FPDF

        generated_at = generated_at or datetime.now(timezone.utc)
        pdf = FPDF()
        font = self._setup_font(pdf)
        text = self._text
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=15)

        pdf.set_font(font, "B" if font == "Helvetica" else "", 16)
        pdf.cell(0, 10, text(self._config.title), new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(font, "", 10)
        pdf.cell(0, 8, f"Generated: {generated_at.date().isoformat()}", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 8, f"Projects included: {summary.project_count}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(5)

        self._heading(pdf, font, "Finance")
        for label, value in (
            ("Total income", format_amount(summary.total_income)),
            ("Total expense", format_amount(summary.total_expense)),
            ("Net profit", format_amount(summary.net_profit)),
            ("ROI", f"{summary.roi:.2f}%"),
        ):
            pdf.cell(0, 7, f"  {label}: {value}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(3)

        self._heading(pdf, font, "Assets")
        for label, value in (
            ("Land held (m2)", format_area(summary.total_land_area_m2)),
            ("Land held (ping)", format_area(summary.total_land_area_ping)),
            ("Land price", format_amount(summary.total_land_price)),
            ("Building price", format_amount(summary.total_building_price)),
            ("Buildings", str(len(summary.buildings))),
        ):
            pdf.cell(0, 7, f"  {label}: {value}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(3)

        self._heading(pdf, font, f"Buyers ({len(summary.buyers)})")
        self._table(pdf, ["Project", "Name", "Phone", "Address"], [
            [b.project_name, b.name, b.phone, b.address] for b in summary.buyers
        ])

        self._heading(pdf, font, f"Land ({len(summary.lands)})")
        self._table(pdf, ["Project", "Sellers", "Section", "Lots", "Area (m2)", "Total price"], [
            [
                land.project_name,
                seller_names(land.sellers, separator=", "),
                land.section,
                ", ".join(i.lot_number for i in land.items),
                format_area(land.holding_area_m2),
                format_amount(land.total_price),
            ]
            for land in summary.lands
        ])

        self._heading(pdf, font, f"Buildings ({len(summary.buildings)})")
        self._table(pdf, ["Project", "Owners", "Permit", "Address", "Area (m2)", "Total price"], [
            [
                b.project_name,
                seller_names(b.sellers, separator=", "),
                b.permit_number or "-",
                b.address,
                format_area(b.area_m2),
                format_amount(b.total_price),
            ]
            for b in summary.buildings
        ])

        return bytes(pdf.output())

    def _setup_font(self, pdf: Any) -> str:
        if self._config.font_path:
            pdf.add_font("Report", "", self._config.font_path)
            return "Report"
        return "Helvetica"

    def _text(self, value: str) -> str:
        # Core PDF fonts only cover Latin-1.
        if self._config.font_path:
            return value
        return value.encode("latin-1", errors="replace").decode("latin-1")

    def _heading(self, pdf: Any, font: str, title: str) -> None:
        pdf.set_font(font, "B" if font == "Helvetica" else "", 12)
        pdf.cell(0, 10, self._text(title), new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(font, "", 9)

    def _table(self, pdf: Any, header: list[str], rows: list[list[str]]) -> None:
        if not rows:
            pdf.cell(0, 7, "  No records", new_x="LMARGIN", new_y="NEXT")
            pdf.ln(3)
            return
        with pdf.table() as table:
            for values in [header, *rows]:
                row = table.row()
                for value in values:
                    row.cell(self._text(value))
        pdf.ln(3)
