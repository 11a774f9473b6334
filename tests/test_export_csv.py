"""Tests for CSV export of printable reports."""

from __future__ import annotations

import csv
from pathlib import Path

from ptaledger.services import export_csv, reports


def _read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8-sig") as fh:
        return list(csv.reader(fh))


def test_summary_csv_contains_both_sections(tmp_path, scenario_records):
    report = reports.build_summary_report(records=scenario_records, fiscal_year="2024")

    path = reports.export_report_csv(report, tmp_path)

    assert path.name == "2024年度_収支報告書.csv"
    rows = _read_rows(path)
    assert rows[0] == ["2024年度 収支報告書"]
    assert ["収入の部"] in rows
    assert ["支出の部"] in rows
    assert ["本年度会費", "5,000"] in rows
    assert rows[-1] == ["差引残高: 3,000円"]


def test_csv_is_written_with_bom_for_spreadsheets(tmp_path, scenario_records):
    report = reports.build_summary_report(records=scenario_records, fiscal_year="2024")
    output = tmp_path / "nested" / "summary.csv"

    export_csv.export_report_csv(report=report, output_path=output)

    assert output.read_bytes().startswith(b"\xef\xbb\xbf")


def test_detail_csv_rows_match_print_cells(tmp_path, scenario_records):
    report = reports.build_detail_report(
        records=scenario_records, filter_key="ALL", sort_order="asc", fiscal_year="2024"
    )

    rows = _read_rows(reports.export_report_csv(report, tmp_path))

    assert ["日付", "項目", "内訳", "金額", "支払先", "備考"] in rows
    assert ["2024/5/1", "本年度会費", "", "5,000", "", ""] in rows
    assert ["選択計 収入: 5,000円 / 支出: 2,000円 (残高: 3,000円)"] in rows


def test_report_csv_delegates_to_csv_writer(tmp_path, scenario_records, monkeypatch):
    calls = []
    monkeypatch.setattr(
        export_csv, "export_report_csv", lambda *, report, output_path: calls.append(output_path) or output_path
    )
    report = reports.build_summary_report(records=scenario_records, fiscal_year="2024")

    path = reports.export_report_csv(report, tmp_path)

    assert calls == [tmp_path / "2024年度_収支報告書.csv"]
    assert path == calls[0]
