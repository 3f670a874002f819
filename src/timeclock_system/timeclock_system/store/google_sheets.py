from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, TypeVar

import gspread
import requests
from google.auth import exceptions as gauth_exceptions
from google.oauth2.service_account import Credentials
from gspread import exceptions as gsex

from ..core.exceptions import ConfigurationError, SheetNotFoundError, UpstreamUnavailableError
from .record_store import Record, RecordStore, header_range, values_to_records

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

T = TypeVar("T")


@dataclass(frozen=True)
class SheetsConfig:
    spreadsheet_id: str
    service_account_file: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    timeout_seconds: float = 10.0


class SheetsConnection:
    """Singleton-like gspread client factory.

    Note: The client is created lazily on first use and shared by every
    repository; it holds no business state.
    """

    _instance: Optional["SheetsConnection"] = None

    def __init__(self, config: SheetsConfig):
        self._config = config
        self._spreadsheet: Optional[gspread.Spreadsheet] = None

    @classmethod
    def get_instance(cls, config: SheetsConfig) -> "SheetsConnection":
        if cls._instance is None:
            cls._instance = SheetsConnection(config)
        return cls._instance

    def _credentials(self) -> Credentials:
        if self._config.service_account_file:
            return Credentials.from_service_account_file(self._config.service_account_file, scopes=SCOPES)
        if self._config.client_email and self._config.private_key:
            info = {
                "type": "service_account",
                "client_email": self._config.client_email,
                "private_key": self._config.private_key.replace("\\n", "\n"),
                "token_uri": TOKEN_URI,
            }
            return Credentials.from_service_account_info(info, scopes=SCOPES)
        raise ConfigurationError("No Google credentials configured (GOOGLE_SERVICE_ACCOUNT_FILE or client email/key)")

    def spreadsheet(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            client = gspread.authorize(self._credentials())
            client.set_timeout(self._config.timeout_seconds)
            self._spreadsheet = client.open_by_key(self._config.spreadsheet_id)
        return self._spreadsheet


class GoogleSheetsRecordStore(RecordStore):
    def __init__(self, conn: SheetsConnection):
        self._conn = conn

    def _call(self, operation: str, sheet_name: str, fn: Callable[[], T]) -> T:
        """Run one remote call and classify its failure.

        Missing worksheets become SheetNotFoundError; transport errors, API
        errors, token refresh failures and timeouts become
        UpstreamUnavailableError. Nothing is retried.
        """
        try:
            return fn()
        except gsex.WorksheetNotFound:
            raise SheetNotFoundError(sheet_name)
        except gsex.APIError as e:
            logger.error("Sheets API error during %s on %s: %s", operation, sheet_name, e)
            raise UpstreamUnavailableError(f"Record store error during {operation}", operation=operation) from e
        except requests.exceptions.RequestException as e:
            logger.error("Sheets transport error during %s on %s: %s", operation, sheet_name, e)
            raise UpstreamUnavailableError(f"Record store unreachable during {operation}", operation=operation) from e
        except gauth_exceptions.GoogleAuthError as e:
            logger.error("Sheets credential refresh failed during %s on %s: %s", operation, sheet_name, e)
            raise UpstreamUnavailableError(f"Record store unreachable during {operation}", operation=operation) from e
        except gsex.GSpreadException as e:
            logger.error("Sheets client error during %s on %s: %s", operation, sheet_name, e)
            raise UpstreamUnavailableError(f"Record store error during {operation}", operation=operation) from e

    def _worksheet(self, name: str) -> gspread.Worksheet:
        return self._conn.spreadsheet().worksheet(name)

    def read_sheet(self, name: str) -> List[Record]:
        values = self._call("read", name, lambda: self._worksheet(name).get_all_values())
        return values_to_records(values)

    def read_headers(self, name: str) -> List[str]:
        return self._call("read_headers", name, lambda: self._worksheet(name).row_values(1))

    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        self._call(
            "append",
            name,
            lambda: self._worksheet(name).append_rows(
                [list(r) for r in rows],
                value_input_option="RAW",
                insert_data_option="INSERT_ROWS",
            ),
        )

    def update_range(self, name: str, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        self._call(
            "update",
            name,
            lambda: self._worksheet(name).update(
                range_name=range_ref,
                values=[list(r) for r in rows],
                value_input_option="RAW",
            ),
        )

    def find_row_number(self, name: str, column: str, value: str) -> Optional[int]:
        for index, record in enumerate(self.read_sheet(name)):
            if record.get(column) == value:
                return index + 2
        return None

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> bool:
        try:
            self.read_headers(name)
            return False
        except SheetNotFoundError:
            pass

        def _create():
            ws = self._conn.spreadsheet().add_worksheet(title=name, rows=1000, cols=max(len(headers), 1))
            ws.update(range_name=header_range(len(headers)), values=[list(headers)], value_input_option="RAW")

        self._call("create_sheet", name, _create)
        logger.info("Created sheet %s with %d columns", name, len(headers))
        return True
