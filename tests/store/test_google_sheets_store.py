from __future__ import annotations

import pytest
import requests
from google.auth import exceptions as gauth_exceptions
from gspread import exceptions as gsex

from src.timeclock_system.timeclock_system.core.exceptions import SheetNotFoundError, UpstreamUnavailableError
from src.timeclock_system.timeclock_system.store.google_sheets import GoogleSheetsRecordStore


class FakeWorksheet:
    def __init__(self, values, error: Exception | None = None):
        self.values = [list(r) for r in values]
        self.error = error
        self.calls = []

    def get_all_values(self):
        if self.error:
            raise self.error
        return [list(r) for r in self.values]

    def row_values(self, row):
        return list(self.values[row - 1]) if len(self.values) >= row else []

    def append_rows(self, rows, value_input_option=None, insert_data_option=None):
        self.calls.append(("append_rows", rows, value_input_option, insert_data_option))
        self.values.extend(rows)

    def update(self, range_name=None, values=None, value_input_option=None):
        self.calls.append(("update", range_name, values, value_input_option))


class FakeSpreadsheet:
    def __init__(self, sheets):
        self.sheets = sheets
        self.added = []

    def worksheet(self, name):
        if name not in self.sheets:
            raise gsex.WorksheetNotFound(name)
        return self.sheets[name]

    def add_worksheet(self, title, rows, cols):
        ws = FakeWorksheet([])
        self.sheets[title] = ws
        self.added.append((title, rows, cols))
        return ws


class FakeConnection:
    def __init__(self, spreadsheet, error: Exception | None = None):
        self._spreadsheet = spreadsheet
        self.error = error

    def spreadsheet(self):
        if self.error:
            raise self.error
        return self._spreadsheet


def test_reads_rows_as_header_keyed_records():
    ws = FakeWorksheet([["id", "name"], ["john-smith", "John Smith"]])
    store = GoogleSheetsRecordStore(FakeConnection(FakeSpreadsheet({"Employees": ws})))

    assert store.read_sheet("Employees") == [{"id": "john-smith", "name": "John Smith"}]
    assert store.find_row_number("Employees", "id", "john-smith") == 2


def test_missing_worksheet_maps_to_sheet_not_found():
    store = GoogleSheetsRecordStore(FakeConnection(FakeSpreadsheet({})))

    with pytest.raises(SheetNotFoundError):
        store.read_sheet("AllowedNetworks")


def test_transport_timeout_maps_to_upstream_unavailable():
    ws = FakeWorksheet([["id"]], error=requests.exceptions.ReadTimeout("slow"))
    store = GoogleSheetsRecordStore(FakeConnection(FakeSpreadsheet({"Employees": ws})))

    with pytest.raises(UpstreamUnavailableError) as exc:
        store.read_sheet("Employees")
    assert exc.value.operation == "read"


def test_writes_are_raw_and_insert_rows():
    ws = FakeWorksheet([["id", "name"]])
    store = GoogleSheetsRecordStore(FakeConnection(FakeSpreadsheet({"Employees": ws})))

    store.append_rows("Employees", [("a", "A")])
    store.update_range("Employees", "A2:B2", [["a", "B"]])

    assert ws.calls[0] == ("append_rows", [["a", "A"]], "RAW", "INSERT_ROWS")
    assert ws.calls[1] == ("update", "A2:B2", [["a", "B"]], "RAW")


def test_ensure_sheet_creates_missing_sheet_with_headers():
    spreadsheet = FakeSpreadsheet({})
    store = GoogleSheetsRecordStore(FakeConnection(spreadsheet))

    assert store.ensure_sheet("AuditLog", ["timestamp", "adminUser"]) is True
    assert spreadsheet.added == [("AuditLog", 1000, 2)]
    assert spreadsheet.sheets["AuditLog"].calls == [("update", "A1:B1", [["timestamp", "adminUser"]], "RAW")]
    assert store.ensure_sheet("AuditLog", ["timestamp", "adminUser"]) is False


@pytest.mark.parametrize(
    "error",
    [
        gauth_exceptions.RefreshError("503 from token endpoint"),
        gauth_exceptions.TransportError("connection reset"),
    ],
)
def test_credential_refresh_failure_maps_to_upstream_unavailable(error):
    store = GoogleSheetsRecordStore(FakeConnection(FakeSpreadsheet({}), error=error))

    with pytest.raises(UpstreamUnavailableError) as exc:
        store.read_sheet("TimeEntries")
    assert exc.value.operation == "read"
