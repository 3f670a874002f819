from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import SheetNotFoundError
from .record_store import Record, RecordStore, parse_range, values_to_records


class InMemoryRecordStore(RecordStore):
    """Process-local grid store with the same addressing rules as the spreadsheet.

    Used by the testing settings and the test-suite. Like the remote store it
    offers no transactions: every call is an independent read or write.
    """

    def __init__(self, sheets: Optional[Dict[str, List[List[Any]]]] = None):
        self._lock = threading.Lock()
        self._sheets: Dict[str, List[List[str]]] = {}
        for name, values in (sheets or {}).items():
            self._sheets[name] = [[("" if v is None else str(v)) for v in row] for row in values]

    def _grid(self, name: str) -> List[List[str]]:
        grid = self._sheets.get(name)
        if grid is None:
            raise SheetNotFoundError(name)
        return grid

    def read_sheet(self, name: str) -> List[Record]:
        with self._lock:
            return values_to_records(copy.deepcopy(self._grid(name)))

    def read_headers(self, name: str) -> List[str]:
        with self._lock:
            grid = self._grid(name)
            return list(grid[0]) if grid else []

    def append_rows(self, name: str, rows: Sequence[Sequence[Any]]) -> None:
        with self._lock:
            grid = self._grid(name)
            for row in rows:
                grid.append([("" if v is None else str(v)) for v in row])

    def update_range(self, name: str, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        row_start, col_start, _, _ = parse_range(range_ref)
        with self._lock:
            grid = self._grid(name)
            for r_offset, row in enumerate(rows):
                r = row_start - 1 + r_offset
                while len(grid) <= r:
                    grid.append([])
                target = grid[r]
                for c_offset, value in enumerate(row):
                    c = col_start - 1 + c_offset
                    while len(target) <= c:
                        target.append("")
                    target[c] = "" if value is None else str(value)

    def find_row_number(self, name: str, column: str, value: str) -> Optional[int]:
        for index, record in enumerate(self.read_sheet(name)):
            if record.get(column) == value:
                return index + 2
        return None

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> bool:
        with self._lock:
            if name in self._sheets:
                return False
            self._sheets[name] = [list(headers)]
            return True

    def raw_values(self, name: str) -> List[List[str]]:
        """Snapshot of the raw grid (header included)."""
        with self._lock:
            return copy.deepcopy(self._grid(name))
