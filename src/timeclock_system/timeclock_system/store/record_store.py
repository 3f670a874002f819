from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

Record = Dict[str, str]

_RANGE_RE = re.compile(r"^([A-Z]+)(\d+)(?::([A-Z]+)(\d+))?$")


class RecordStore(Protocol):
    """Giao diện kho dữ liệu dạng bảng (spreadsheet).

    Lưu ý: mỗi collection có dòng 1 là header; dòng được đánh địa chỉ theo số
    thứ tự 1-based. Không có transaction, không có compare-and-swap.
    """

    def read_sheet(self, name: str) -> List[Record]:
        raise NotImplementedError

    def read_headers(self, name: str) -> List[str]:
        raise NotImplementedError

    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        raise NotImplementedError

    def update_range(self, name: str, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        raise NotImplementedError

    def find_row_number(self, name: str, column: str, value: str) -> Optional[int]:
        raise NotImplementedError

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> bool:
        """Create the sheet with a header row if missing; returns True when created."""

        raise NotImplementedError


def column_letter(index: int) -> str:
    """1 -> 'A', 26 -> 'Z', 27 -> 'AA'."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1: {index}")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def column_index(letters: str) -> int:
    """'A' -> 1, 'AA' -> 27."""
    index = 0
    for ch in letters:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index


def row_range(row_number: int, width: int) -> str:
    """Full-row range reference, e.g. row_range(5, 11) -> 'A5:K5'."""
    return f"A{row_number}:{column_letter(width)}{row_number}"


def header_range(width: int) -> str:
    return row_range(1, width)


def parse_range(range_ref: str) -> Tuple[int, int, int, int]:
    """'B2:D4' -> (row_start, col_start, row_end, col_end), all 1-based."""
    m = _RANGE_RE.match(range_ref.strip().upper())
    if not m:
        raise ValueError(f"Unsupported range reference: {range_ref!r}")
    col_a, row_a, col_b, row_b = m.groups()
    start_col, start_row = column_index(col_a), int(row_a)
    if col_b is None:
        return start_row, start_col, start_row, start_col
    return start_row, start_col, int(row_b), column_index(col_b)


def values_to_records(values: Sequence[Sequence[Any]]) -> List[Record]:
    """Map raw grid values (header + data rows) to header-keyed records.

    Short rows are padded with ''; blank rows are kept so that list index + 2
    is always the sheet row number.
    """
    if not values:
        return []
    headers = [str(h) for h in values[0]]
    out: List[Record] = []
    for row in values[1:]:
        out.append({h: (str(row[i]) if i < len(row) and row[i] is not None else "") for i, h in enumerate(headers)})
    return out


def record_to_row(headers: Sequence[str], record: Dict[str, Any]) -> List[str]:
    """Encode a record in header order so writes always cover the full row."""
    return [_cell(record.get(h)) for h in headers]


def is_blank(record: Record) -> bool:
    return not any((v or "").strip() for v in record.values())


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def locate(store: RecordStore, name: str, predicate) -> Optional[Tuple[int, Record]]:
    """Full scan for the first record matching `predicate`.

    Returns (row_number, record); row numbers are only valid until the next
    writer touches the sheet, so callers must re-locate before every write.
    """
    for index, record in enumerate(store.read_sheet(name)):
        if not is_blank(record) and predicate(record):
            return index + 2, record
    return None


def write_record(store: RecordStore, name: str, row_number: int, record: Dict[str, Any]) -> None:
    """Overwrite a whole row in the sheet's live header order (never sparse cells)."""
    headers = store.read_headers(name)
    store.update_range(name, row_range(row_number, len(headers)), [record_to_row(headers, record)])


def append_record(store: RecordStore, name: str, record: Dict[str, Any]) -> None:
    headers = store.read_headers(name)
    store.append_rows(name, [record_to_row(headers, record)])


def clear_row(store: RecordStore, name: str, row_number: int) -> None:
    """Blank a row in place (tombstone); the row itself is never removed."""
    headers = store.read_headers(name)
    store.update_range(name, row_range(row_number, len(headers)), [[""] * len(headers)])
