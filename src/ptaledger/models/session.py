"""Per-login session state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .record import LedgerRecord


@dataclass
class LedgerSession:
    """Credential, fiscal year and record cache for one logged-in session."""

    passcode: str
    fiscal_year: str
    editable: bool = False
    records: list[LedgerRecord] = field(default_factory=list)

    def replace_records(self, records: list[LedgerRecord], editable: bool) -> None:
        """Swap in a fresh server snapshot; the cache is never patched in place."""

        self.records = list(records)
        self.editable = bool(editable)
