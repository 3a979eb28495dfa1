from __future__ import annotations

import contextlib
import logging

from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.utils import timezone

from .exceptions import AllocationConflict, AllocationExhausted, StoreUnavailable
from .identifiers import DatabaseAllocator, normalize_human_id
from .models import Complaint, ComplaintNote
from .stores import ComplaintStore, NoteStore, next_timestamp, validate_category, validate_status

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_db_errors():
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("Complaint database unavailable: %s", exc)
        raise StoreUnavailable() from exc


class DatabaseComplaintStore(ComplaintStore):
    def __init__(self, *, yearly_reset: bool = False, max_attempts: int = 3, allocator: DatabaseAllocator | None = None):
        self.allocator = allocator or DatabaseAllocator(yearly_reset=yearly_reset)
        self.max_attempts = max(1, max_attempts)

    def create(self, category, location, description, citizen_id):
        category = validate_category(category)
        for attempt in range(1, self.max_attempts + 1):
            try:
                complaint = self._insert(category, location, description, citizen_id)
            except AllocationConflict as exc:
                logger.warning(
                    "Complaint id %s already taken (attempt %d of %d)",
                    exc.human_id,
                    attempt,
                    self.max_attempts,
                )
                continue
            logger.info("Complaint %s created for citizen %s", complaint.human_id, citizen_id)
            return complaint
        logger.error("Giving up on complaint id allocation after %d attempts", self.max_attempts)
        raise AllocationExhausted(self.max_attempts)

    def _insert(self, category, location, description, citizen_id):
        now = timezone.now()
        with translate_db_errors():
            allocated = self.allocator.allocate(timezone.localtime(now).year)
            try:
                with transaction.atomic():
                    return Complaint.objects.create(
                        human_id=allocated.human_id,
                        sequence=allocated.sequence,
                        citizen_id=citizen_id,
                        category=category,
                        location=location,
                        description=description,
                        status=Complaint.Status.SUBMITTED,
                        created_at=now,
                        updated_at=now,
                    )
            except IntegrityError as exc:
                if Complaint.objects.filter(human_id=allocated.human_id).exists():
                    raise AllocationConflict(allocated.human_id) from exc
                raise

    def get_by_id(self, complaint_id):
        with translate_db_errors():
            return Complaint.objects.filter(pk=complaint_id).first()

    def get_by_human_id(self, human_id):
        with translate_db_errors():
            return Complaint.objects.filter(human_id=normalize_human_id(human_id)).first()

    def _list(self, **filters):
        with translate_db_errors():
            return list(Complaint.objects.filter(**filters).order_by("-created_at", "-sequence"))

    def list_by_citizen(self, citizen_id):
        return self._list(citizen_id=citizen_id)

    def list_by_department(self, category):
        return self._list(category=category)

    def list_all(self):
        return self._list()

    def update_status(self, complaint_id, status):
        status = validate_status(status)
        with translate_db_errors(), transaction.atomic():
            complaint = Complaint.objects.select_for_update().filter(pk=complaint_id).first()
            if complaint is None:
                return None
            previous = complaint.status
            complaint.status = status
            complaint.updated_at = next_timestamp(complaint.updated_at)
            complaint.save(update_fields=["status", "updated_at"])
        logger.info("Complaint %s moved from %s to %s", complaint.human_id, previous, status)
        return complaint


class DatabaseNoteStore(NoteStore):
    def create(self, complaint_id, officer_id, officer_name, text):
        with translate_db_errors():
            note = ComplaintNote.objects.create(
                complaint_id=complaint_id,
                officer_id=officer_id,
                officer_name=officer_name,
                note=text,
                created_at=timezone.now(),
            )
        logger.info("Note added to complaint %s by officer %s", complaint_id, officer_id)
        return note

    def list_by_complaint(self, complaint_id):
        with translate_db_errors():
            return list(ComplaintNote.objects.filter(complaint_id=complaint_id).order_by("-created_at"))
