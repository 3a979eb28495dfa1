import uuid
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import OperationalError
from django.test import TestCase

from complaints.db_store import DatabaseComplaintStore, DatabaseNoteStore
from complaints.exceptions import AllocationExhausted, InvalidInput, StoreUnavailable
from complaints.identifiers import DatabaseAllocator
from complaints.models import Complaint, ComplaintNote

from .clock import TickingClock, patch_now, utc

User = get_user_model()


class DatabaseComplaintStoreTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.citizen = User.objects.create_user(username="citizen", password="StrongPass123!")
        cls.other_citizen = User.objects.create_user(username="othercitizen", password="StrongPass123!")

    def setUp(self):
        self.store = DatabaseComplaintStore()

    def create(self, category="roads", citizen=None, store=None):
        store = store or self.store
        return store.create(
            category=category,
            location="5th Avenue",
            description="Pothole near the school crossing is getting worse.",
            citizen_id=(citizen or self.citizen).id,
        )

    def test_create_persists_submitted_complaint(self):
        complaint = self.create()
        stored = Complaint.objects.get(pk=complaint.id)
        self.assertEqual(stored.status, Complaint.Status.SUBMITTED)
        self.assertEqual(stored.citizen_id, self.citizen.id)
        self.assertEqual(stored.created_at, stored.updated_at)
        self.assertRegex(stored.human_id, r"^GRP-\d{4}-\d{4}$")
        self.assertEqual(stored.human_id[4:8], str(stored.created_at.year))

    def test_successive_creations_increase_sequence(self):
        ids = [self.create().human_id for _ in range(3)]
        self.assertEqual([int(i.rsplit("-", 1)[1]) for i in ids], [1, 2, 3])

    def test_sequence_is_shared_across_years(self):
        clock = TickingClock(utc(2024, 12, 31, 23, 59))
        with patch_now(clock):
            self.create()
            clock.jump_to(utc(2025, 1, 1, 0, 1))
            complaint = self.create()
        self.assertEqual(complaint.human_id, "GRP-2025-0002")

    def test_yearly_reset_restarts_sequence(self):
        store = DatabaseComplaintStore(yearly_reset=True)
        clock = TickingClock(utc(2024, 12, 31, 23, 59))
        with patch_now(clock):
            self.create(store=store)
            self.create(store=store)
            clock.jump_to(utc(2025, 1, 1, 0, 1))
            first_of_year = self.create(store=store)
            second_of_year = self.create(store=store)
        self.assertEqual(first_of_year.human_id, "GRP-2025-0001")
        self.assertEqual(second_of_year.human_id, "GRP-2025-0002")

    def test_allocation_conflict_is_retried(self):
        existing = self.create()
        with mock.patch.object(DatabaseAllocator, "last_sequence", side_effect=[0, 1]):
            with self.assertLogs("complaints.db_store", level="WARNING") as logs:
                complaint = self.create()
        self.assertEqual(existing.human_id[-4:], "0001")
        self.assertEqual(complaint.human_id[-4:], "0002")
        self.assertIn(existing.human_id, logs.output[0])
        self.assertEqual(Complaint.objects.count(), 2)

    def test_allocation_gives_up_after_max_attempts(self):
        self.create()
        store = DatabaseComplaintStore(max_attempts=3)
        with mock.patch.object(DatabaseAllocator, "last_sequence", return_value=0) as last_sequence:
            with self.assertLogs("complaints.db_store", level="WARNING"):
                with self.assertRaises(AllocationExhausted):
                    self.create(store=store)
        self.assertEqual(last_sequence.call_count, 3)
        self.assertEqual(Complaint.objects.count(), 1)

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(InvalidInput):
            self.create(category="electrical")
        self.assertFalse(Complaint.objects.exists())

    def test_get_by_human_id_is_case_insensitive(self):
        complaint = self.create()
        self.assertEqual(self.store.get_by_human_id(complaint.human_id.lower()).pk, complaint.pk)
        self.assertIsNone(self.store.get_by_human_id("GRP-2099-9999"))

    def test_lists_are_scoped_and_newest_first(self):
        with patch_now(TickingClock()):
            water_old = self.create(category="water")
            roads = self.create(category="roads", citizen=self.other_citizen)
            water_new = self.create(category="water")
        self.assertEqual(
            [c.pk for c in self.store.list_by_department("water")],
            [water_new.pk, water_old.pk],
        )
        self.assertEqual(
            [c.pk for c in self.store.list_by_citizen(self.citizen.id)],
            [water_new.pk, water_old.pk],
        )
        self.assertEqual(
            [c.pk for c in self.store.list_all()],
            [water_new.pk, roads.pk, water_old.pk],
        )

    def test_update_status(self):
        with patch_now(TickingClock()):
            complaint = self.create()
            updated = self.store.update_status(complaint.id, "resolved")
        self.assertEqual(updated.status, "resolved")
        self.assertGreater(updated.updated_at, complaint.updated_at)
        complaint.refresh_from_db()
        self.assertEqual(complaint.status, "resolved")

    def test_same_status_refreshes_updated_at(self):
        frozen = utc(2024, 6, 1, 9, 0)
        with patch_now(lambda: frozen):
            complaint = self.create()
            updated = self.store.update_status(complaint.id, "submitted")
        self.assertGreater(updated.updated_at, complaint.updated_at)

    def test_update_status_unknown_and_invalid(self):
        self.assertIsNone(self.store.update_status(uuid.uuid4(), "resolved"))
        complaint = self.create()
        with self.assertRaises(InvalidInput):
            self.store.update_status(complaint.id, "archived")

    def test_database_failure_is_not_reported_as_missing(self):
        with mock.patch.object(Complaint.objects, "filter", side_effect=OperationalError("connection lost")):
            with self.assertLogs("complaints.db_store", level="ERROR"):
                with self.assertRaises(StoreUnavailable):
                    self.store.get_by_human_id("GRP-2024-0001")


class DatabaseNoteStoreTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.citizen = User.objects.create_user(username="citizen", password="StrongPass123!")
        cls.officer = User.objects.create_user(
            username="officer",
            password="StrongPass123!",
            name="Officer Rao",
            role=User.Role.OFFICER,
            department="roads",
        )

    def setUp(self):
        self.complaint = DatabaseComplaintStore().create(
            "roads", "5th Avenue", "Pothole near the school crossing is getting worse.", self.citizen.id
        )
        self.notes = DatabaseNoteStore()

    def test_notes_listed_newest_first(self):
        with patch_now(TickingClock()):
            for text in ["Inspection booked", "Crew dispatched", "Repair completed"]:
                self.notes.create(self.complaint.id, self.officer.id, self.officer.display_name, text)
        listed = self.notes.list_by_complaint(self.complaint.id)
        self.assertEqual(
            [n.note for n in listed],
            ["Repair completed", "Crew dispatched", "Inspection booked"],
        )

    def test_note_keeps_officer_name_snapshot(self):
        note = self.notes.create(self.complaint.id, self.officer.id, self.officer.display_name, "Crew dispatched")
        self.officer.name = "Officer Renamed"
        self.officer.save()
        self.assertEqual(ComplaintNote.objects.get(pk=note.pk).officer_name, "Officer Rao")

    def test_adding_note_does_not_touch_complaint_updated_at(self):
        before = Complaint.objects.get(pk=self.complaint.pk).updated_at
        self.notes.create(self.complaint.id, self.officer.id, self.officer.display_name, "Crew dispatched")
        self.assertEqual(Complaint.objects.get(pk=self.complaint.pk).updated_at, before)
