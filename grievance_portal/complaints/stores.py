from __future__ import annotations

import abc
import functools
from datetime import datetime, timedelta
from typing import NamedTuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

from .exceptions import InvalidInput
from .models import Complaint

CATEGORIES = Complaint.Category.values
STATUSES = Complaint.Status.values


def validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise InvalidInput("category", f'"{category}" is not a valid category.')
    return str(category)


def validate_status(status: str) -> str:
    if status not in STATUSES:
        raise InvalidInput("status", "Invalid status")
    return str(status)


def next_timestamp(previous: datetime | None = None) -> datetime:
    now = timezone.now()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class ComplaintStore(abc.ABC):
    @abc.abstractmethod
    def create(self, category, location, description, citizen_id):
        """Mint a human id and persist a new ``submitted`` complaint."""

    @abc.abstractmethod
    def get_by_id(self, complaint_id):
        ...

    @abc.abstractmethod
    def get_by_human_id(self, human_id):
        """Case-insensitive lookup; ``None`` when never issued."""

    @abc.abstractmethod
    def list_by_citizen(self, citizen_id):
        ...

    @abc.abstractmethod
    def list_by_department(self, category):
        ...

    @abc.abstractmethod
    def list_all(self):
        ...

    @abc.abstractmethod
    def update_status(self, complaint_id, status):
        """Set ``status`` and move ``updated_at`` forward; ``None`` if unknown."""


class NoteStore(abc.ABC):
    @abc.abstractmethod
    def create(self, complaint_id, officer_id, officer_name, text):
        ...

    @abc.abstractmethod
    def list_by_complaint(self, complaint_id):
        """Newest first."""


class Storage(NamedTuple):
    complaints: ComplaintStore
    notes: NoteStore


@functools.lru_cache(maxsize=None)
def _build_storage(backend: str) -> Storage:
    yearly_reset = settings.COMPLAINT_ID_YEARLY_RESET
    if backend == "memory":
        from .memory_store import MemoryComplaintStore, MemoryNoteStore

        return Storage(MemoryComplaintStore(yearly_reset=yearly_reset), MemoryNoteStore())
    if backend == "database":
        from .db_store import DatabaseComplaintStore, DatabaseNoteStore

        return Storage(
            DatabaseComplaintStore(
                yearly_reset=yearly_reset,
                max_attempts=settings.COMPLAINT_ID_MAX_ATTEMPTS,
            ),
            DatabaseNoteStore(),
        )
    raise ImproperlyConfigured(f"Unknown COMPLAINT_STORE backend: {backend!r}")


def get_storage() -> Storage:
    return _build_storage(settings.COMPLAINT_STORE)


def reset_storage() -> None:
    _build_storage.cache_clear()
