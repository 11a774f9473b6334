"""Data models for ledger rows exchanged with the remote sheet service."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlmodel import Field, SQLModel

# Wire order of a read row: [行番号, 日付, 項目, 内訳, 金額, 支払先, 備考]
WIRE_FIELDS = ("row_number", "occurred_on", "item", "details", "amount", "payee", "memo")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_wire_date(value: Any, tz_name: str = "Asia/Tokyo") -> date:
    """Return the calendar date for a sheet value.

    Plain ``YYYY-MM-DD`` (or ``YYYY/M/D``) strings are taken as-is. Timestamps
    with an offset, which is how Apps Script serialises date cells, are moved
    into ``tz_name`` before the date is taken.
    """

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    else:
        raw = _text(value).strip()
        if not raw:
            raise ValueError("date is empty")
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            return datetime.strptime(raw, "%Y/%m/%d").date()
        except ValueError:
            pass
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if moment.tzinfo is not None:
        try:
            zone = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone: {tz_name!r}") from exc
        moment = moment.astimezone(zone)
    return moment.date()


def parse_amount(value: Any) -> Decimal:
    """Parse a non-negative amount; legacy negative expense rows are folded to abs."""

    if isinstance(value, bool):
        raise ValueError("amount must be numeric")
    raw = _text(value).strip().replace(",", "")
    if not raw:
        raise ValueError("amount is empty")
    try:
        amount = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"amount is not numeric: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"amount is not finite: {value!r}")
    return abs(amount)


class LedgerRecord(SQLModel):
    """One ledger entry as read from the remote sheet."""

    row_number: Union[int, str] = Field(description="Server-assigned row id, used for deletion only")
    occurred_on: date
    item: str = Field(description="Category name (項目)")
    details: str = ""
    amount: Decimal = Field(ge=0)
    payee: str = ""
    memo: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], *, tz_name: str = "Asia/Tokyo") -> "LedgerRecord":
        """Build a record from the positional wire tuple."""

        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise ValueError(f"record row must be a list, got {type(row).__name__}")
        if len(row) < 5:
            raise ValueError(f"record row needs at least 5 fields, got {len(row)}")
        padded = list(row) + [None] * (len(WIRE_FIELDS) - len(row))
        row_number, raw_date, item, details, raw_amount, payee, memo = padded[: len(WIRE_FIELDS)]
        if row_number is None or row_number == "":
            raise ValueError("record row is missing its row number")
        return cls.model_validate(
            {
                "row_number": row_number,
                "occurred_on": parse_wire_date(raw_date, tz_name),
                "item": _text(item),
                "details": _text(details),
                "amount": parse_amount(raw_amount),
                "payee": _text(payee),
                "memo": _text(memo),
            }
        )

    def to_row(self) -> list[Any]:
        """Positional wire form, for exports that mirror the sheet layout."""

        return [
            self.row_number,
            self.occurred_on.isoformat(),
            self.item,
            self.details,
            str(self.amount),
            self.payee,
            self.memo,
        ]


class NewRecord(SQLModel):
    """Fields submitted by the input form for a write request."""

    occurred_on: date
    item: str
    details: str = ""
    amount: Decimal
    payee: str = ""
    memo: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Action fields for ``{"action": "write", ...}``."""

        amount = abs(self.amount)
        wire_amount: int | float = (
            int(amount) if amount == amount.to_integral_value() else float(amount)
        )
        return {
            "date": self.occurred_on.isoformat(),
            "item": self.item,
            "details": self.details,
            "amount": wire_amount,
            "payee": self.payee,
            "memo": self.memo,
        }
