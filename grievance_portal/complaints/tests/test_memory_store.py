import re
import uuid
from concurrent.futures import ThreadPoolExecutor

from django.test import SimpleTestCase

from complaints.exceptions import InvalidInput
from complaints.memory_store import MemoryComplaintStore, MemoryNoteStore

from .clock import TickingClock, patch_now, utc

HUMAN_ID_RE = re.compile(r"^GRP-\d{4}-\d{4}$")


class MemoryComplaintStoreTests(SimpleTestCase):
    def setUp(self):
        self.store = MemoryComplaintStore()

    def create(self, category="roads", citizen_id=1, **kwargs):
        data = {
            "location": "5th Avenue",
            "description": "Pothole near the school crossing is getting worse.",
        }
        data.update(kwargs)
        return self.store.create(category=category, citizen_id=citizen_id, **data)

    def test_new_complaint_is_submitted_with_equal_timestamps(self):
        complaint = self.create()
        self.assertEqual(complaint.status, "submitted")
        self.assertEqual(complaint.created_at, complaint.updated_at)
        self.assertIsInstance(complaint.id, uuid.UUID)

    def test_human_id_format_uses_creation_year(self):
        with patch_now(TickingClock(utc(2023, 3, 4, 10, 0))):
            complaint = self.create()
        self.assertRegex(complaint.human_id, HUMAN_ID_RE)
        self.assertEqual(complaint.human_id, "GRP-2023-0001")
        self.assertEqual(complaint.created_at.year, 2023)

    def test_sequence_continues_across_year_boundary(self):
        clock = TickingClock(utc(2024, 12, 31, 23, 59))
        with patch_now(clock):
            self.create()
            clock.jump_to(utc(2025, 1, 1, 0, 5))
            complaint = self.create()
        self.assertEqual(complaint.human_id, "GRP-2025-0002")

    def test_yearly_reset_policy(self):
        store = MemoryComplaintStore(yearly_reset=True)
        clock = TickingClock(utc(2024, 12, 31, 23, 59))
        with patch_now(clock):
            store.create("water", "Ward 7 pump", "No water supply for three days now.", 1)
            clock.jump_to(utc(2025, 1, 1, 0, 5))
            complaint = store.create("water", "Ward 7 pump", "No water supply for three days now.", 1)
        self.assertEqual(complaint.human_id, "GRP-2025-0001")

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(InvalidInput) as ctx:
            self.create(category="electrical")
        self.assertEqual(ctx.exception.field, "category")
        self.assertEqual(self.store.list_all(), [])

    def test_lookup_by_human_id_is_case_insensitive(self):
        complaint = self.create()
        lower = self.store.get_by_human_id(complaint.human_id.lower())
        upper = self.store.get_by_human_id(complaint.human_id)
        self.assertEqual(lower.id, complaint.id)
        self.assertEqual(upper.id, complaint.id)

    def test_lookup_of_unissued_id_returns_none(self):
        self.create()
        self.assertIsNone(self.store.get_by_human_id("GRP-2099-9999"))
        self.assertIsNone(self.store.get_by_id(uuid.uuid4()))

    def test_list_by_department_filters_and_orders_newest_first(self):
        with patch_now(TickingClock()):
            first = self.create(category="water")
            self.create(category="roads")
            second = self.create(category="water")
        listed = self.store.list_by_department("water")
        self.assertEqual([c.id for c in listed], [second.id, first.id])
        self.assertTrue(all(c.category == "water" for c in listed))

    def test_list_by_citizen_and_list_all(self):
        mine = self.create(citizen_id=1)
        theirs = self.create(citizen_id=2)
        self.assertEqual([c.id for c in self.store.list_by_citizen(1)], [mine.id])
        self.assertEqual([c.id for c in self.store.list_all()], [theirs.id, mine.id])

    def test_update_status_moves_updated_at_forward(self):
        with patch_now(TickingClock()):
            complaint = self.create()
            updated = self.store.update_status(complaint.id, "in_progress")
        self.assertEqual(updated.status, "in_progress")
        self.assertGreater(updated.updated_at, complaint.updated_at)
        self.assertEqual(updated.created_at, complaint.created_at)

    def test_same_status_still_refreshes_updated_at_with_frozen_clock(self):
        frozen = utc(2024, 6, 1, 9, 0)
        with patch_now(lambda: frozen):
            complaint = self.create()
            updated = self.store.update_status(complaint.id, "submitted")
        self.assertEqual(updated.status, "submitted")
        self.assertGreater(updated.updated_at, complaint.updated_at)

    def test_any_transition_is_allowed(self):
        complaint = self.create()
        self.store.update_status(complaint.id, "resolved")
        reopened = self.store.update_status(complaint.id, "submitted")
        self.assertEqual(reopened.status, "submitted")

    def test_update_status_rejects_unknown_status(self):
        complaint = self.create()
        with self.assertRaises(InvalidInput):
            self.store.update_status(complaint.id, "closed")
        self.assertEqual(self.store.get_by_id(complaint.id).status, "submitted")

    def test_update_status_of_unknown_complaint_returns_none(self):
        self.assertIsNone(self.store.update_status(uuid.uuid4(), "resolved"))

    def test_returned_records_are_copies(self):
        complaint = self.create()
        complaint.status = "resolved"
        self.assertEqual(self.store.get_by_id(complaint.id).status, "submitted")

    def test_concurrent_creations_get_unique_ids(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            complaints = list(pool.map(lambda n: self.create(citizen_id=n), range(100)))
        self.assertEqual(len({c.human_id for c in complaints}), 100)
        self.assertEqual(len(self.store.list_all()), 100)


class MemoryNoteStoreTests(SimpleTestCase):
    def setUp(self):
        self.notes = MemoryNoteStore()
        self.complaint_id = uuid.uuid4()

    def test_notes_are_listed_newest_first(self):
        with patch_now(TickingClock()):
            texts = ["Inspection booked", "Crew dispatched", "Repair completed"]
            for text in texts:
                self.notes.create(self.complaint_id, 7, "Officer Rao", text)
        listed = self.notes.list_by_complaint(self.complaint_id)
        self.assertEqual([n.note for n in listed], list(reversed(texts)))

    def test_equal_timestamps_keep_latest_insert_first(self):
        frozen = utc(2024, 6, 1, 9, 0)
        with patch_now(lambda: frozen):
            self.notes.create(self.complaint_id, 7, "Officer Rao", "First note")
            self.notes.create(self.complaint_id, 7, "Officer Rao", "Second note")
        listed = self.notes.list_by_complaint(self.complaint_id)
        self.assertEqual([n.note for n in listed], ["Second note", "First note"])

    def test_notes_are_scoped_to_their_complaint(self):
        other_id = uuid.uuid4()
        self.notes.create(self.complaint_id, 7, "Officer Rao", "Crew dispatched")
        self.notes.create(other_id, 7, "Officer Rao", "Unrelated note")
        listed = self.notes.list_by_complaint(self.complaint_id)
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0].officer_name, "Officer Rao")
        self.assertEqual(self.notes.list_by_complaint(uuid.uuid4()), [])
