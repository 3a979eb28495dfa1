"""
Non-durable stores kept in process memory.

Every read and write goes through one lock per store, so readers always see
the latest committed write. Records handed out are copies; mutating them
does not touch the stored state. Restarting the process loses everything,
including the identifier counter.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
from collections import defaultdict
from datetime import datetime

from django.utils import timezone

from .exceptions import AllocationConflict
from .identifiers import CounterAllocator, normalize_human_id
from .models import Complaint
from .stores import ComplaintStore, NoteStore, next_timestamp, validate_category, validate_status

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ComplaintRecord:
    id: uuid.UUID
    human_id: str
    sequence: int
    citizen_id: object
    category: str
    location: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime

    def can_be_viewed_by(self, user) -> bool:
        return user.is_officer or self.citizen_id == user.id


@dataclasses.dataclass
class NoteRecord:
    id: uuid.UUID
    complaint_id: uuid.UUID
    officer_id: object
    officer_name: str
    note: str
    created_at: datetime


def _newest_first(records):
    # reversed() first so that equal timestamps keep the later insert on top
    return [dataclasses.replace(r) for r in sorted(reversed(records), key=lambda r: r.created_at, reverse=True)]


class MemoryComplaintStore(ComplaintStore):
    def __init__(self, *, yearly_reset: bool = False, allocator: CounterAllocator | None = None):
        self.allocator = allocator or CounterAllocator(yearly_reset=yearly_reset)
        self._complaints: dict[uuid.UUID, ComplaintRecord] = {}
        self._by_human_id: dict[str, uuid.UUID] = {}
        self._lock = threading.RLock()

    def create(self, category, location, description, citizen_id):
        category = validate_category(category)
        with self._lock:
            now = timezone.now()
            allocated = self.allocator.allocate(timezone.localtime(now).year)
            if allocated.human_id in self._by_human_id:
                raise AllocationConflict(allocated.human_id)
            record = ComplaintRecord(
                id=uuid.uuid4(),
                human_id=allocated.human_id,
                sequence=allocated.sequence,
                citizen_id=citizen_id,
                category=category,
                location=location,
                description=description,
                status=Complaint.Status.SUBMITTED.value,
                created_at=now,
                updated_at=now,
            )
            self._complaints[record.id] = record
            self._by_human_id[record.human_id] = record.id
        logger.info("Complaint %s created for citizen %s", record.human_id, citizen_id)
        return dataclasses.replace(record)

    def get_by_id(self, complaint_id):
        with self._lock:
            record = self._complaints.get(complaint_id)
            return dataclasses.replace(record) if record else None

    def get_by_human_id(self, human_id):
        wanted = normalize_human_id(human_id)
        with self._lock:
            complaint_id = self._by_human_id.get(wanted)
            return self.get_by_id(complaint_id) if complaint_id else None

    def _filtered(self, predicate):
        with self._lock:
            return _newest_first([r for r in self._complaints.values() if predicate(r)])

    def list_by_citizen(self, citizen_id):
        return self._filtered(lambda r: r.citizen_id == citizen_id)

    def list_by_department(self, category):
        return self._filtered(lambda r: r.category == category)

    def list_all(self):
        return self._filtered(lambda r: True)

    def update_status(self, complaint_id, status):
        status = validate_status(status)
        with self._lock:
            record = self._complaints.get(complaint_id)
            if record is None:
                return None
            previous = record.status
            record.status = status
            record.updated_at = next_timestamp(record.updated_at)
            updated = dataclasses.replace(record)
        logger.info("Complaint %s moved from %s to %s", updated.human_id, previous, status)
        return updated


class MemoryNoteStore(NoteStore):
    def __init__(self):
        self._notes: dict[uuid.UUID, NoteRecord] = {}
        self._by_complaint: dict[uuid.UUID, list[uuid.UUID]] = defaultdict(list)
        self._lock = threading.RLock()

    def create(self, complaint_id, officer_id, officer_name, text):
        with self._lock:
            note = NoteRecord(
                id=uuid.uuid4(),
                complaint_id=complaint_id,
                officer_id=officer_id,
                officer_name=officer_name,
                note=text,
                created_at=timezone.now(),
            )
            self._notes[note.id] = note
            self._by_complaint[complaint_id].append(note.id)
        logger.info("Note added to complaint %s by officer %s", complaint_id, officer_id)
        return dataclasses.replace(note)

    def list_by_complaint(self, complaint_id):
        with self._lock:
            note_ids = self._by_complaint.get(complaint_id, [])
            return _newest_first([self._notes[note_id] for note_id in note_ids])
