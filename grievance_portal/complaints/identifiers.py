"""
Human-readable complaint identifiers: ``GRP-<year>-<sequence>``.

The sequence is zero-padded to four digits. By default one counter is
shared by every year and only the printed year follows the calendar, so
``GRP-2024-0042`` may be followed by ``GRP-2025-0043``. With
``yearly_reset`` the counter restarts at ``0001`` for each new year.
"""

from __future__ import annotations

import re
import threading
from typing import NamedTuple

from django.db.models import Max

HUMAN_ID_PREFIX = "GRP"
HUMAN_ID_PATTERN = re.compile(r"^GRP-(\d{4})-(\d{4,})$")


class AllocatedId(NamedTuple):
    year: int
    sequence: int
    human_id: str


def format_human_id(year: int, sequence: int) -> str:
    return f"{HUMAN_ID_PREFIX}-{year:04d}-{sequence:04d}"


def normalize_human_id(value: str) -> str:
    return value.strip().upper()


def parse_human_id(value: str) -> tuple[int, int] | None:
    match = HUMAN_ID_PATTERN.match(normalize_human_id(value))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


class CounterAllocator:
    """In-process counter. Restarting the process starts again at 0001."""

    def __init__(self, *, yearly_reset: bool = False, start: int = 0):
        self.yearly_reset = yearly_reset
        self._counter = start
        self._year: int | None = None
        self._lock = threading.Lock()

    def allocate(self, year: int) -> AllocatedId:
        with self._lock:
            if self.yearly_reset and self._year is not None and year != self._year:
                self._counter = 0
            self._year = year
            self._counter += 1
            sequence = self._counter
        return AllocatedId(year, sequence, format_human_id(year, sequence))


class DatabaseAllocator:
    """
    Reads the highest issued sequence and returns the next one.

    There is no isolation between the read and the caller's insert; two
    concurrent callers may be handed the same id. The unique constraint on
    ``Complaint.human_id`` turns that into an ``IntegrityError`` which the
    store retries.
    """

    def __init__(self, *, yearly_reset: bool = False):
        self.yearly_reset = yearly_reset

    def last_sequence(self, year: int) -> int:
        from .models import Complaint

        queryset = Complaint.objects.all()
        if self.yearly_reset:
            queryset = queryset.filter(human_id__startswith=f"{HUMAN_ID_PREFIX}-{year:04d}-")
        return queryset.aggregate(last=Max("sequence"))["last"] or 0

    def allocate(self, year: int) -> AllocatedId:
        sequence = self.last_sequence(year) + 1
        return AllocatedId(year, sequence, format_human_id(year, sequence))
