"""Printable detail and summary reports.

Reports are built as plain data first (``PrintableReport``) and then written
as print-ready HTML, CSV, or a matplotlib chart of the summary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from jinja2 import Environment
from matplotlib.figure import Figure

from ..constants.categories import DEFAULT_CATEGORIES, CategorySets, filter_label
from ..models.record import LedgerRecord
from . import export_csv
from .ledger_service import (
    SummaryReport,
    calculate_selection_totals,
    calculate_summary,
    selection_entries,
)
from .presentation import (
    TABLE_HEADERS,
    build_ledger_rows,
    detail_print_title,
    format_amount,
    format_print_total,
    summary_heading,
    summary_print_title,
)

SUMMARY_HEADERS = ("項目", "金額")


@dataclass
class ReportSection:
    heading: str
    headers: tuple[str, ...]
    rows: list[tuple[str, ...]] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)


@dataclass
class PrintableReport:
    """A titled stack of table sections ready for printing or export."""

    title: str
    heading: str
    sections: list[ReportSection] = field(default_factory=list)
    footer: list[str] = field(default_factory=list)


_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="ja">
<head>
<meta charset="utf-8">
<title>{{ report.title }}</title>
<style>
  body { font-family: "Hiragino Kaku Gothic ProN", "Meiryo", sans-serif; margin: 16mm; }
  h1 { font-size: 18pt; text-align: center; }
  h2 { font-size: 13pt; margin-top: 12mm; }
  table { width: 100%; border-collapse: collapse; font-size: 10pt; }
  th, td { border: 1px solid #333; padding: 3px 6px; }
  th { background: #eee; }
  td.amount { text-align: right; }
  p.footer { text-align: right; font-weight: bold; }
  @media print { body { margin: 0; } }
</style>
</head>
<body onload="window.print()">
<h1>{{ report.heading }}</h1>
{% for section in report.sections %}
{% if section.heading %}<h2>{{ section.heading }}</h2>{% endif %}
<table>
  <thead><tr>{% for header in section.headers %}<th>{{ header }}</th>{% endfor %}</tr></thead>
  <tbody>
  {% for row in section.rows %}
    <tr>{% for cell in row %}<td{% if loop.index0 == section.amount_column %} class="amount"{% endif %}>{{ cell }}</td>{% endfor %}</tr>
  {% endfor %}
  </tbody>
</table>
{% for line in section.footer %}<p class="footer">{{ line }}</p>{% endfor %}
{% endfor %}
{% for line in report.footer %}<p class="footer">{{ line }}</p>{% endfor %}
</body>
</html>
"""

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)
_template = _env.from_string(_HTML_TEMPLATE)


def build_detail_report(
    *,
    records: Iterable[LedgerRecord],
    filter_key: str,
    sort_order: str,
    fiscal_year: str,
    categories: CategorySets = DEFAULT_CATEGORIES,
    checked_rows: Optional[Iterable[object]] = None,
) -> PrintableReport:
    """Detail listing of the filtered rows; the footer totals only ticked rows."""

    rows = build_ledger_rows(records, filter_key, sort_order, categories)
    totals = calculate_selection_totals(
        selection_entries([row.record for row in rows], checked_rows, categories)
    )
    section = ReportSection(
        heading="",
        headers=TABLE_HEADERS,
        rows=[row.print_cells for row in rows],
        footer=[format_print_total(totals, filter_key, categories)],
    )
    return PrintableReport(
        title=detail_print_title(fiscal_year, filter_key),
        heading=f"{fiscal_year}年度 {filter_label(filter_key)}",
        sections=[section],
    )


def build_summary_report(
    *,
    records: Iterable[LedgerRecord],
    fiscal_year: str,
    categories: CategorySets = DEFAULT_CATEGORIES,
    summary: Optional[SummaryReport] = None,
) -> PrintableReport:
    """Category summary (収支報告書) over every record, selection ignored."""

    summary = summary or calculate_summary(records, categories)
    income = ReportSection(
        heading="収入の部",
        headers=SUMMARY_HEADERS,
        rows=[(c.item_name, format_amount(c.total_amount)) for c in summary.income_summary],
        footer=[f"収入合計: {format_amount(summary.total_income)}円"],
    )
    expense = ReportSection(
        heading="支出の部",
        headers=SUMMARY_HEADERS,
        rows=[(c.item_name, format_amount(c.total_amount)) for c in summary.expense_summary],
        footer=[f"支出合計: {format_amount(summary.total_expense)}円"],
    )
    return PrintableReport(
        title=summary_print_title(fiscal_year),
        heading=summary_heading(fiscal_year),
        sections=[income, expense],
        footer=[f"差引残高: {format_amount(summary.final_balance)}円"],
    )


def report_filename(title: str, suffix: str) -> str:
    """File-system safe name derived from the print title."""

    safe = re.sub(r'[\\/:*?"<>|\s]+', "_", title).strip("_") or "report"
    return f"{safe}{suffix}"


def render_report_html(report: PrintableReport) -> str:
    sections = [
        {
            "heading": s.heading,
            "headers": s.headers,
            "rows": s.rows,
            "footer": s.footer,
            "amount_column": s.headers.index("金額") if "金額" in s.headers else -1,
        }
        for s in report.sections
    ]
    return _template.render(
        report={
            "title": report.title,
            "heading": report.heading,
            "sections": sections,
            "footer": report.footer,
        }
    )


def export_report_html(report: PrintableReport, output_dir: Path) -> Path:
    """Write a print-ready HTML file and return its path."""

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / report_filename(report.title, ".html")
    output_path.write_text(render_report_html(report), encoding="utf-8")
    return output_path


def export_report_csv(report: PrintableReport, output_dir: Path) -> Path:
    """Write the report tables to CSV and return the path."""

    output_path = output_dir / report_filename(report.title, ".csv")
    return export_csv.export_report_csv(report=report, output_path=output_path)


def build_summary_chart(summary: SummaryReport, *, title: str = "") -> Figure:
    """Horizontal bar chart of per-category totals, income above expense."""

    entries = [(c.item_name, float(c.total_amount), "#1565C0") for c in summary.income_summary]
    entries += [(c.item_name, float(c.total_amount), "#C62828") for c in summary.expense_summary]

    fig, ax = plt.subplots(figsize=(9, max(3.0, 0.35 * len(entries) + 1.5)))
    if not entries:
        ax.text(0.5, 0.5, "No categories configured", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    labels = [name for name, _, _ in entries]
    values = [value for _, value, _ in entries]
    colors = [color for _, _, color in entries]
    positions = list(range(len(entries)))

    ax.barh(positions, values, color=colors)
    ax.set_yticks(positions)
    ax.set_yticklabels(labels, fontsize=9)
    ax.invert_yaxis()
    ax.xaxis.set_major_formatter(mticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))
    ax.set_title(title or "Summary", fontsize=14, fontweight="bold")
    ax.grid(axis="x", alpha=0.3)
    ax.text(
        0.99,
        0.02,
        f"Income {float(summary.total_income):,.0f} / Expense {float(summary.total_expense):,.0f}"
        f" / Balance {float(summary.final_balance):,.0f}",
        transform=ax.transAxes,
        ha="right",
        va="bottom",
        fontsize=9,
        color="#374151",
    )
    fig.tight_layout()
    return fig


def export_summary_png(
    *,
    summary: SummaryReport,
    output_path: Path,
    title: str = "",
) -> Path:
    """Render the summary chart to PNG and return the path."""

    fig = build_summary_chart(summary, title=title)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return output_path
