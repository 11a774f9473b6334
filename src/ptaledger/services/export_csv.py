"""CSV export helpers for printable reports."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .reports import PrintableReport


def export_report_csv(*, report: PrintableReport, output_path: Path) -> Path:
    """Write every report section to one CSV at `output_path`.

    Layout: heading line, then per section an optional heading row, the header
    row, body rows and footer lines, separated by a blank row.
    Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # utf-8-sig so spreadsheet apps on Windows detect the encoding
    with output_path.open("w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow([report.heading])
        for section in report.sections:
            writer.writerow([])
            if section.heading:
                writer.writerow([section.heading])
            writer.writerow(section.headers)
            writer.writerows(section.rows)
            for line in section.footer:
                writer.writerow([line])
        if report.footer:
            writer.writerow([])
            for line in report.footer:
                writer.writerow([line])

    return output_path
