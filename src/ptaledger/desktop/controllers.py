"""Controller helpers for login, record mutations, and printing."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ..devtools import dev_log
from ..logging_config import get_logger
from ..models.session import LedgerSession
from ..services import reports
from ..services.ledger_service import (
    RecordValidationError,
    calculate_summary,
    find_record,
    validate_new_record,
)
from ..services.presentation import build_ledger_rows, format_amount
from .components.dialogs import show_confirm_dialog, show_error_dialog

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

Refresh = Optional[Callable[[], None]]


def show_snack(page: ft.Page, message: str) -> None:
    """Display a snack bar message."""

    snack = ft.SnackBar(content=ft.Text(message))
    if callable(getattr(page, "open", None)):
        page.open(snack)
        return
    page.snack_bar = snack
    page.snack_bar.open = True
    page.update()


def notify_error(page: ft.Page, message: str) -> None:
    """Blocking notification for validation and remote errors."""

    show_error_dialog(page, "エラー", message)


def _schedule(delay: float, callback: Callable[[], None]) -> None:
    """Run ``callback`` once after ``delay`` seconds on a daemon timer."""

    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


def navigate(page: ft.Page, route: str) -> None:
    """Navigate to a route and update the page."""

    clean = route if route.startswith("/") else f"/{route}"
    page.go(clean)
    page.update()


def login(ctx: AppContext, page: ft.Page, passcode: str, fiscal_year: str) -> bool:
    """Authenticate by reading the year's records with the given passcode.

    The context only takes the new session once the read succeeds.
    """

    passcode = (passcode or "").strip()
    if not passcode:
        notify_error(page, "合言葉を入力してください")
        return False
    if not fiscal_year:
        notify_error(page, "年度を選択してください")
        return False

    candidate = LedgerSession(passcode=passcode, fiscal_year=str(fiscal_year))
    client = ctx.client_factory(ctx.config, candidate)
    result = client.fetch_all_records()
    if not result.ok:
        client.close()
        logger.info("Login rejected", extra={"year": candidate.fiscal_year})
        notify_error(page, result.error or "ログインに失敗しました")
        return False

    if ctx.api_client is not None:
        ctx.api_client.close()
    candidate.replace_records(result.records, result.editable)
    ctx.session = candidate
    ctx.api_client = client
    ctx.reset_selection()
    logger.info(
        "Logged in",
        extra={"year": candidate.fiscal_year, "records": len(candidate.records), "editable": candidate.editable},
    )
    navigate(page, "/ledger")
    return True


def logout(ctx: AppContext, page: ft.Page) -> None:
    """Drop the session and return to the login screen."""

    ctx.end_session()
    logger.info("Logged out")
    navigate(page, "/login")


def reload_records(ctx: AppContext, page: ft.Page, on_refresh: Refresh = None) -> bool:
    """Replace the record cache with a fresh server read."""

    session = ctx.require_session()
    result = ctx.require_client().fetch_all_records()
    if not result.ok:
        notify_error(page, result.error or "読み込みに失敗しました")
        return False
    session.replace_records(result.records, result.editable)
    ctx.reset_selection()
    if on_refresh:
        on_refresh()
    return True


def save_new_record(
    ctx: AppContext,
    page: ft.Page,
    *,
    occurred_on: Optional[str],
    item: Optional[str],
    amount: Optional[str],
    details: Optional[str] = None,
    payee: Optional[str] = None,
    memo: Optional[str] = None,
    on_saved: Refresh = None,
) -> bool:
    """Validate the form, post it, and reload on success."""

    try:
        record = validate_new_record(
            occurred_on=occurred_on,
            item=item,
            amount=amount,
            details=details,
            payee=payee,
            memo=memo,
        )
    except RecordValidationError as exc:
        notify_error(page, str(exc))
        return False

    result = ctx.require_client().post_new_record(record)
    if not result.ok:
        notify_error(page, result.error or "保存に失敗しました。")
        return False

    logger.info("Record saved", extra={"item": record.item, "amount": str(record.amount)})
    show_snack(page, "保存しました")
    reload_records(ctx, page, on_saved)
    return True


def delete_record(ctx: AppContext, page: ft.Page, row_number: int | str, on_deleted: Refresh = None) -> bool:
    """Delete one row by its server row number and reload on success."""

    result = ctx.require_client().delete_record_by_row_number(row_number)
    if not result.ok:
        notify_error(page, result.error or "削除に失敗しました。")
        return False
    logger.info("Record deleted", extra={"row_number": row_number})
    reload_records(ctx, page, on_deleted)
    return True


def request_delete(ctx: AppContext, page: ft.Page, row_number: int | str, on_deleted: Refresh = None) -> None:
    """Ask for confirmation before deleting a row."""

    record = find_record(ctx.require_session().records, row_number)
    message = "この行を削除してもよろしいですか？"
    if record is not None:
        message += f"\n{record.occurred_on:%Y/%m/%d} {record.item} {format_amount(record.amount)}円"
    show_confirm_dialog(
        page,
        "削除の確認",
        message,
        on_confirm=lambda: delete_record(ctx, page, row_number, on_deleted),
    )


def toggle_row(ctx: AppContext, row_number: int | str, checked: bool) -> None:
    """Record a checkbox change; totals are recomputed from this state."""

    if checked:
        ctx.unchecked_rows.discard(row_number)
    else:
        ctx.unchecked_rows.add(row_number)


def checked_rows(ctx: AppContext) -> list[int | str]:
    """Row numbers currently ticked in the filtered view."""

    session = ctx.require_session()
    rows = build_ledger_rows(session.records, ctx.filter_key, ctx.sort_order, ctx.categories)
    return [row.row_number for row in rows if row.row_number not in ctx.unchecked_rows]


def _print(ctx: AppContext, page: ft.Page, report: reports.PrintableReport) -> Path:
    """Write the printable HTML and hand it to the host for printing.

    The window title doubles as the suggested PDF file name, so it is swapped
    for the report title and restored shortly after.
    """

    output = reports.export_report_html(report, ctx.config.exports_dir)
    original_title = page.title
    page.title = report.title
    page.update()
    try:
        page.launch_url(output.resolve().as_uri())
    except Exception as exc:  # pragma: no cover - host-specific
        dev_log(ctx.config, "Print hand-off failed", exc=exc, context={"path": output})
        logger.error("Could not open printable report", exc_info=True)
        notify_error(page, f"印刷用ファイルを開けませんでした: {output}")

    def _restore() -> None:
        page.title = original_title
        page.update()

    _schedule(ctx.config.PRINT_TITLE_RESTORE_SECONDS, _restore)
    logger.info("Report printed", extra={"title": report.title, "path": str(output)})
    return output


def print_detail_report(ctx: AppContext, page: ft.Page) -> Path:
    """Print the detail listing for the current filter, sort and selection."""

    session = ctx.require_session()
    report = reports.build_detail_report(
        records=session.records,
        filter_key=ctx.filter_key,
        sort_order=ctx.sort_order,
        fiscal_year=session.fiscal_year,
        categories=ctx.categories,
        checked_rows=checked_rows(ctx),
    )
    return _print(ctx, page, report)


def print_summary_report(ctx: AppContext, page: ft.Page) -> Path:
    """Print the category summary over every cached record."""

    session = ctx.require_session()
    report = reports.build_summary_report(
        records=session.records,
        fiscal_year=session.fiscal_year,
        categories=ctx.categories,
    )
    return _print(ctx, page, report)


def export_summary(ctx: AppContext, page: ft.Page, fmt: str) -> Path:
    """Save the summary as ``csv`` or ``png`` into the exports folder."""

    session = ctx.require_session()
    report = reports.build_summary_report(
        records=session.records, fiscal_year=session.fiscal_year, categories=ctx.categories
    )
    if fmt == "csv":
        path = reports.export_report_csv(report, ctx.config.exports_dir)
    elif fmt == "png":
        path = reports.export_summary_png(
            summary=calculate_summary(session.records, ctx.categories),
            output_path=ctx.config.exports_dir / reports.report_filename(report.title, ".png"),
            title=report.heading,
        )
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
    show_snack(page, f"保存しました: {path}")
    return path
