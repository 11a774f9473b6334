"""Command line entry points for the PTA ledger."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .constants.categories import FILTER_ALL, SORT_ASC, SORT_DESC
from .logging_config import setup_logging
from .models.session import LedgerSession
from .services import reports
from .services.api_client import LedgerApiClient
from .services.ledger_service import calculate_summary


def _load_session(config: BaseConfig, year: str, passcode: str) -> LedgerSession:
    """Fetch one fiscal year's records or abort with the server's message."""

    session = LedgerSession(passcode=passcode, fiscal_year=year)
    client = LedgerApiClient(config, session)
    try:
        result = client.fetch_all_records()
    finally:
        client.close()
    if not result.ok:
        raise click.ClickException(result.error or "読み込みに失敗しました")
    session.replace_records(result.records, result.editable)
    return session


def _write(report: reports.PrintableReport, fmt: str, output: Path) -> Path:
    if fmt == "csv":
        return reports.export_report_csv(report, output)
    return reports.export_report_html(report, output)


def _echo_report(report: reports.PrintableReport) -> None:
    click.echo(report.heading)
    for section in report.sections:
        if section.heading:
            click.echo(f"[{section.heading}]")
        click.echo("\t".join(section.headers))
        for row in section.rows:
            click.echo("\t".join(row))
        for line in section.footer:
            click.echo(line)
    for line in report.footer:
        click.echo(line)


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """PTA ledger front-end over the remote ledger sheet."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


@main.command()
def desktop() -> None:
    """Launch the Flet desktop application."""

    import flet as ft

    from .desktop.app import main as desktop_main

    ft.app(target=desktop_main)


year_option = click.option("--year", required=True, help="Fiscal year, e.g. 2024")
passcode_option = click.option(
    "--passcode",
    envvar="PTALEDGER_PASSCODE",
    prompt=True,
    hide_input=True,
    help="Shared passcode (合言葉)",
)
output_option = click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination folder (defaults to the exports directory)",
)


@main.command()
@year_option
@passcode_option
@click.option(
    "--format", "fmt", type=click.Choice(["text", "csv", "html", "png"]), default="text", show_default=True
)
@output_option
@click.pass_obj
def summary(config: BaseConfig, year: str, passcode: str, fmt: str, output: Optional[Path]) -> None:
    """Write the 収支報告書 for one fiscal year."""

    session = _load_session(config, year, passcode)
    totals = calculate_summary(session.records, config.CATEGORIES)
    report = reports.build_summary_report(
        records=session.records, fiscal_year=year, categories=config.CATEGORIES, summary=totals
    )
    if fmt == "text":
        _echo_report(report)
        return
    target = output or config.exports_dir
    if fmt == "png":
        path = reports.export_summary_png(
            summary=totals,
            output_path=target / reports.report_filename(report.title, ".png"),
            title=report.heading,
        )
    else:
        path = _write(report, fmt, target)
    click.echo(f"Report written: {path}")


@main.command()
@year_option
@passcode_option
@click.option("--filter", "filter_key", default=FILTER_ALL, show_default=True, help="ALL, _INCOME_ONLY_, _EXPENSES_ONLY_ or a category name")
@click.option("--sort", "sort_order", type=click.Choice([SORT_ASC, SORT_DESC]), default=SORT_ASC, show_default=True)
@click.option("--format", "fmt", type=click.Choice(["text", "csv", "html"]), default="text", show_default=True)
@output_option
@click.pass_obj
def details(
    config: BaseConfig,
    year: str,
    passcode: str,
    filter_key: str,
    sort_order: str,
    fmt: str,
    output: Optional[Path],
) -> None:
    """Write the filtered detail listing for one fiscal year."""

    session = _load_session(config, year, passcode)
    report = reports.build_detail_report(
        records=session.records,
        filter_key=filter_key,
        sort_order=sort_order,
        fiscal_year=year,
        categories=config.CATEGORIES,
    )
    if fmt == "text":
        _echo_report(report)
        return
    path = _write(report, fmt, output or config.exports_dir)
    click.echo(f"Report written: {path}")


if __name__ == "__main__":
    main()
