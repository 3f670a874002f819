from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_open_for_employee(self, employee_id: str) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def find(self, employee_id: str, clock_in: datetime) -> Optional[TimeEntry]:
        """Locate by natural key (employee id + clock-in instant)."""

        raise NotImplementedError

    def append(self, entry: TimeEntry) -> None:
        raise NotImplementedError

    def replace(self, employee_id: str, original_clock_in: datetime, entry: TimeEntry) -> TimeEntry:
        """Full-row overwrite of the entry matching the natural key.

        Returns the prior state; raises NotFoundError when nothing matches.
        """

        raise NotImplementedError

    def clear(self, employee_id: str, clock_in: datetime) -> TimeEntry:
        """Tombstone the matching row; returns the prior state."""

        raise NotImplementedError
