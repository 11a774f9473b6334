"""Tests for printable reports and their HTML/PNG exports."""

from __future__ import annotations

from pathlib import Path

from ptaledger.constants.categories import FILTER_ALL, FILTER_EXPENSES_ONLY, SORT_ASC, SORT_DESC
from ptaledger.services import reports
from ptaledger.services.ledger_service import calculate_summary


def test_detail_report_lists_filtered_rows_and_totals_ticked_ones(scenario_records):
    report = reports.build_detail_report(
        records=scenario_records,
        filter_key=FILTER_ALL,
        sort_order=SORT_DESC,
        fiscal_year="2024",
        checked_rows=[2],
    )

    assert report.title == "2024年度_全項目"
    assert report.heading == "2024年度 全項目"
    section = report.sections[0]
    assert section.headers == ("日付", "項目", "内訳", "金額", "支払先", "備考")
    assert [row[0] for row in section.rows] == ["2024/5/2", "2024/5/1"]
    assert section.footer == ["選択計 収入: 0円 / 支出: 2,000円 (残高: -2,000円)"]


def test_detail_report_defaults_to_every_row_ticked(scenario_records):
    report = reports.build_detail_report(
        records=scenario_records, filter_key=FILTER_EXPENSES_ONLY, sort_order=SORT_ASC, fiscal_year="2024"
    )

    assert report.title == "2024年度_支出のみ"
    assert len(report.sections[0].rows) == 1
    assert report.sections[0].footer == ["選択支出合計: 2,000円"]


def test_summary_report_sections(scenario_records):
    report = reports.build_summary_report(records=scenario_records, fiscal_year="2024")

    assert report.title == "2024年度_収支報告書"
    assert [s.heading for s in report.sections] == ["収入の部", "支出の部"]
    income, expense = report.sections
    assert ("本年度会費", "5,000") in income.rows
    assert ("前年度繰越金", "0") in income.rows
    assert income.footer == ["収入合計: 5,000円"]
    assert expense.footer == ["支出合計: 2,000円"]
    assert report.footer == ["差引残高: 3,000円"]


def test_report_filename_strips_unsafe_characters():
    assert reports.report_filename("2024年度_収支報告書", ".html") == "2024年度_収支報告書.html"
    assert reports.report_filename('a/b:c "d"', ".csv") == "a_b_c_d.csv"
    assert reports.report_filename("///", ".csv") == "report.csv"


def test_html_export_is_print_ready_and_escaped(tmp_path: Path, record_factory):
    records = [record_factory(row_number=1, item="通信費", amount="300", memo="<b>急ぎ</b>")]
    report = reports.build_detail_report(
        records=records, filter_key=FILTER_ALL, sort_order=SORT_ASC, fiscal_year="2024"
    )

    path = reports.export_report_html(report, tmp_path / "exports")
    html = path.read_text(encoding="utf-8")

    assert path.name == "2024年度_全項目.html"
    assert "<title>2024年度_全項目</title>" in html
    assert "window.print()" in html
    assert '<td class="amount">300</td>' in html
    assert "&lt;b&gt;急ぎ&lt;/b&gt;" in html
    assert "<b>急ぎ</b>" not in html


def test_summary_chart_png_export(tmp_path: Path, scenario_records):
    summary = calculate_summary(scenario_records)
    output = tmp_path / "charts" / "summary.png"

    path = reports.export_summary_png(summary=summary, output_path=output, title="2024")

    assert path == output
    assert output.exists()
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
