"""Service module exports."""

from . import api_client, export_csv, ledger_service, presentation, reports

__all__ = [
    "api_client",
    "export_csv",
    "ledger_service",
    "presentation",
    "reports",
]
