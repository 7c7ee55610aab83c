"""Tests for CSV and PDF report rendering."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone

import pytest

from parcelbook.core.config import ReportConfig
from parcelbook.export.renderer import BOM, ReportRenderer
from parcelbook.ledger.models import Buyer
from parcelbook.ledger.portfolio import summarize_portfolio
from parcelbook.projects import editor

EXPORTED_AT = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def renderer():
    return ReportRenderer(ReportConfig())


def _parse(text: str) -> list[list[str]]:
    assert text.startswith(BOM)
    return list(csv.reader(io.StringIO(text[len(BOM):])))


class TestCsvReport:
    def test_starts_with_bom(self, renderer, project):
        assert renderer.render_csv_bytes(project).startswith(b"\xef\xbb\xbf")

    def test_sections_in_order(self, renderer, project):
        rows = _parse(renderer.render_csv(project, EXPORTED_AT))
        titles = [r[0] for r in rows if r and r[0].startswith("===")]
        assert titles == [
            "=== Project report: Riverside Lots ===",
            "=== Buyers ===",
            "=== Land lots ===",
            "=== Buildings ===",
            "=== Transactions ===",
        ]
        assert ["Exported at", "2026-03-01T09:30:00+00:00"] in rows

    def test_land_rows_use_held_area(self, renderer, project):
        rows = _parse(renderer.render_csv(project, EXPORTED_AT))
        land_row = next(r for r in rows if r and r[2:3] == ["101"])
        assert land_row == [
            "A. Lin;B. Chen",
            "Riverside Sec. 3",
            "101",
            "50.000",
            "15.125",
            "50000",
            "756250",
        ]

    def test_commas_are_quoted(self, renderer, project):
        project = editor.save_buyer(project, Buyer(name="Lee, Wong & Co", address="3 Pier, Unit 2"))
        text = renderer.render_csv(project, EXPORTED_AT)
        assert '"Lee, Wong & Co"' in text
        assert ["Lee, Wong & Co", "", "3 Pier, Unit 2"] in _parse(text)

    def test_transactions_show_linked_label(self, renderer, project):
        project = editor.delete_land(project, project.lands[0].id)
        rows = _parse(renderer.render_csv(project, EXPORTED_AT))
        tx_row = next(r for r in rows if r and r[0] == "2026-01-05")
        assert tx_row == [
            "2026-01-05", "Income", "Sale deposit", "land", "Unknown land", "100000", "",
        ]

    def test_filename(self, renderer, project):
        assert renderer.csv_filename(project) == "[Full report]_Riverside Lots.csv"


class TestJsonReport:
    def test_json_document(self, renderer, project):
        assert '"holdingAreaM2": 50.0' in renderer.render_json(project)


class TestSummaryPdf:
    def test_renders_pdf(self, renderer, project):
        pdf = renderer.render_summary_pdf(summarize_portfolio([project]), EXPORTED_AT)
        assert pdf.startswith(b"%PDF-")

    def test_empty_summary(self, renderer):
        assert renderer.render_summary_pdf(summarize_portfolio([])).startswith(b"%PDF-")

    def test_non_latin_text_without_font(self, renderer, project):
        project = project.model_copy(update={"name": "河岸案"})
        pdf = renderer.render_summary_pdf(summarize_portfolio([project]))
        assert pdf.startswith(b"%PDF-")
