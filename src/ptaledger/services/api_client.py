"""Client for the remote ledger sheet service (Google Apps Script web app).

Every call is a single POST carrying the session passcode and fiscal year plus
an ``action`` discriminator. Transport problems and server-reported errors
both come back as ``ApiResult.failure(...)``; nothing here raises to callers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from ..config import BaseConfig
from ..logging_config import get_logger
from ..models.record import LedgerRecord, NewRecord
from ..models.session import LedgerSession

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "通信に失敗しました。ネットワーク接続を確認してください。"
MALFORMED_RESPONSE_MESSAGE = "サーバーからの応答の形式が正しくありません。"
SAVE_FAILED_MESSAGE = "保存に失敗しました。"
DELETE_FAILED_MESSAGE = "削除に失敗しました。"


@dataclass
class ApiResult:
    """Uniform outcome of a remote call."""

    success: bool = False
    records: list[LedgerRecord] = field(default_factory=list)
    editable: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> "ApiResult":
        return cls(success=False, error=message)


class LedgerApiClient:
    """Read/write/delete requests scoped to one ``LedgerSession``."""

    def __init__(
        self,
        config: BaseConfig,
        session: LedgerSession,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session
        self.http = http or requests.Session()

    def _request(self, action: str, payload: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """POST one action; returns the decoded body or ``{"error": ...}``."""

        body = {
            "action": action,
            "passcode": self.session.passcode,
            "year": self.session.fiscal_year,
            **(payload or {}),
        }
        try:
            response = self.http.post(
                self.config.API_URL,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                # text/plain keeps Apps Script from demanding a CORS preflight
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.config.API_TIMEOUT,
            )
            response.raise_for_status()
            decoded = response.json()
        except requests.JSONDecodeError as exc:
            logger.warning(
                "Ledger service returned a non-JSON body",
                extra={"action": action, "error": str(exc)},
            )
            return {"error": MALFORMED_RESPONSE_MESSAGE}
        except requests.RequestException as exc:
            logger.warning(
                "Ledger service request failed",
                extra={"action": action, "year": self.session.fiscal_year, "error": str(exc)},
            )
            return {"error": NETWORK_ERROR_MESSAGE}
        except ValueError as exc:
            logger.warning(
                "Ledger service returned a non-JSON body",
                extra={"action": action, "error": str(exc)},
            )
            return {"error": MALFORMED_RESPONSE_MESSAGE}

        if not isinstance(decoded, dict):
            logger.warning("Ledger service returned %s instead of an object", type(decoded).__name__)
            return {"error": MALFORMED_RESPONSE_MESSAGE}
        return decoded

    def fetch_all_records(self) -> ApiResult:
        """Read every row for the session's fiscal year."""

        body = self._request("read")
        if body.get("error"):
            return ApiResult.failure(str(body["error"]))
        rows = body.get("data")
        if not isinstance(rows, list):
            return ApiResult.failure(MALFORMED_RESPONSE_MESSAGE)
        try:
            records = [LedgerRecord.from_row(row, tz_name=self.config.TIMEZONE) for row in rows]
        except ValueError as exc:
            logger.warning("Ledger row could not be parsed", extra={"error": str(exc)})
            return ApiResult.failure(f"{MALFORMED_RESPONSE_MESSAGE} ({exc})")
        editable = bool(body.get("editable", False))
        logger.info(
            "Ledger records fetched",
            extra={"year": self.session.fiscal_year, "count": len(records), "editable": editable},
        )
        return ApiResult(success=True, records=records, editable=editable)

    def post_new_record(self, record: NewRecord) -> ApiResult:
        """Append one row to the sheet."""

        body = self._request("write", record.to_payload())
        return self._mutation_result(body, SAVE_FAILED_MESSAGE)

    def delete_record_by_row_number(self, row_number: int | str) -> ApiResult:
        """Delete the sheet row with the server-assigned ``row_number``."""

        body = self._request("delete", {"rowNum": row_number})
        return self._mutation_result(body, DELETE_FAILED_MESSAGE)

    @staticmethod
    def _mutation_result(body: dict[str, Any], fallback: str) -> ApiResult:
        if body.get("error"):
            return ApiResult.failure(str(body["error"]))
        if body.get("success") is True:
            return ApiResult(success=True)
        return ApiResult.failure(fallback)

    def close(self) -> None:
        self.http.close()
