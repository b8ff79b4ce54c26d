import threading

from django.test import SimpleTestCase

from strings_api.exceptions import RecordConflict, RecordNotFound
from strings_api.models import StringRecord
from strings_api.repository import StringRepository
from strings_api.utils import compute_sha256


class StringRepositoryTests(SimpleTestCase):
    def setUp(self):
        self.repo = StringRepository()

    def test_insert_then_get_by_id_and_value(self):
        record = self.repo.insert(StringRecord.create("hello"))
        self.assertIs(self.repo.get_by_id(record.id), record)
        self.assertIs(self.repo.get_by_value("hello"), record)

    def test_duplicate_insert_conflicts(self):
        self.repo.insert(StringRecord.create("hello"))
        with self.assertRaises(RecordConflict) as ctx:
            self.repo.insert(StringRecord.create("hello"))
        self.assertEqual(ctx.exception.record_id, compute_sha256("hello"))
        self.assertEqual(len(self.repo), 1)

    def test_get_missing_raises_not_found(self):
        with self.assertRaises(RecordNotFound):
            self.repo.get_by_value("missing")

    def test_delete_removes_record(self):
        self.repo.insert(StringRecord.create("hello"))
        removed = self.repo.delete("hello")
        self.assertEqual(removed.value, "hello")
        self.assertNotIn(compute_sha256("hello"), self.repo)
        with self.assertRaises(RecordNotFound):
            self.repo.get_by_value("hello")

    def test_delete_missing_raises_not_found(self):
        with self.assertRaises(RecordNotFound):
            self.repo.delete("nonexistent")

    def test_all_is_insertion_ordered_snapshot(self):
        for value in ("b", "a", "c"):
            self.repo.insert(StringRecord.create(value))
        snapshot = self.repo.all()
        self.repo.delete("a")
        self.assertEqual([r.value for r in snapshot], ["b", "a", "c"])
        self.assertEqual([r.value for r in self.repo.all()], ["b", "c"])

    def test_clear(self):
        self.repo.insert(StringRecord.create("x"))
        self.repo.clear()
        self.assertEqual(len(self.repo), 0)

    def test_concurrent_inserts_of_same_value_store_one_record(self):
        conflicts = []
        barrier = threading.Barrier(8)

        def worker():
            record = StringRecord.create("same")
            barrier.wait()
            try:
                self.repo.insert(record)
            except RecordConflict:
                conflicts.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(self.repo), 1)
        self.assertEqual(len(conflicts), 7)
