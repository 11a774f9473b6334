"""Model exports."""

from .record import LedgerRecord, NewRecord
from .session import LedgerSession

__all__ = [
    "LedgerRecord",
    "LedgerSession",
    "NewRecord",
]
