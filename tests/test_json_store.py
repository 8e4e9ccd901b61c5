"""Unit tests for JsonFolderStore."""
import json
import os
import tempfile
import unittest
from unittest.mock import patch
from foldertime.errors import PersistenceReadCorrupt, PersistenceWriteFailed
from foldertime.models import FolderRecord
from foldertime.store import JsonFolderStore, MemoryFolderStore

FOLDER = "/home/user/projects/site"


class TestJsonFolderStore(unittest.TestCase):
    """Test on-disk folder records."""

    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.records_dir = os.path.join(self.tmp.name, "records")
        self.store = JsonFolderStore(self.records_dir)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _write_raw(self, content: str) -> None:
        os.makedirs(self.records_dir, exist_ok=True)
        with open(self.store.record_path(FOLDER), 'w') as f:
            f.write(content)

    def test_missing_record_is_absent(self) -> None:
        self.assertIsNone(self.store.get(FOLDER))

    def test_put_then_get(self) -> None:
        record = FolderRecord(7000, "2025-01-01T12:00:00.000Z")
        self.assertTrue(self.store.put(FOLDER, record))
        self.assertEqual(self.store.get(FOLDER), record)

    def test_file_format(self) -> None:
        self.store.put(FOLDER, FolderRecord(1234, "2025-01-01T12:00:00.000Z"))
        with open(self.store.record_path(FOLDER)) as f:
            data = json.load(f)
        self.assertEqual(data, {"totalTime": 1234, "updated": "2025-01-01T12:00:00.000Z"})

    def test_file_named_by_md5_of_path(self) -> None:
        path = self.store.record_path(FOLDER)
        self.assertEqual(os.path.dirname(path), self.records_dir)
        self.assertRegex(os.path.basename(path), r"^[0-9a-f]{32}\.json$")
        self.assertNotEqual(path, self.store.record_path(FOLDER + "-other"))

    def test_corrupt_json_is_absent(self) -> None:
        self._write_raw("{not json")
        self.assertIsNone(self.store.get(FOLDER))
        with self.assertRaises(PersistenceReadCorrupt):
            self.store.load(FOLDER)

    def test_invalid_total_is_absent(self) -> None:
        self._write_raw(json.dumps({"totalTime": "lots"}))
        self.assertIsNone(self.store.get(FOLDER))
        self._write_raw(json.dumps({"totalTime": -5}))
        self.assertIsNone(self.store.get(FOLDER))
        self._write_raw(json.dumps([1, 2]))
        self.assertIsNone(self.store.get(FOLDER))

    def test_non_numeric_falsy_total_is_absent(self) -> None:
        """Falsy values of the wrong type are corrupt, not zero."""
        for raw in (False, "", [], {}):
            self._write_raw(json.dumps({"totalTime": raw}))
            self.assertIsNone(self.store.get(FOLDER), raw)

    def test_missing_total_reads_as_zero(self) -> None:
        self._write_raw(json.dumps({"updated": "x"}))
        self.assertEqual(self.store.get(FOLDER), FolderRecord(0, "x"))
        self._write_raw(json.dumps({"totalTime": None, "updated": "x"}))
        self.assertEqual(self.store.get(FOLDER), FolderRecord(0, "x"))

    def test_float_total_is_accepted(self) -> None:
        self._write_raw(json.dumps({"totalTime": 5000.0}))
        self.assertEqual(self.store.get(FOLDER).total_time_ms, 5000)
        self._write_raw(json.dumps({"totalTime": 1234.9}))
        self.assertEqual(self.store.get(FOLDER).total_time_ms, 1234)

    def test_overwrite_leaves_no_temp_files(self) -> None:
        self.store.put(FOLDER, FolderRecord(1))
        self.store.put(FOLDER, FolderRecord(2))
        self.assertEqual(self.store.get(FOLDER).total_time_ms, 2)
        self.assertEqual(len(os.listdir(self.records_dir)), 1)

    def test_write_failure_returns_false(self) -> None:
        with patch("foldertime.store.json_store.os.makedirs", side_effect=PermissionError("denied")):
            self.assertFalse(self.store.put(FOLDER, FolderRecord(1)))
            with self.assertRaises(PersistenceWriteFailed):
                self.store.save(FOLDER, FolderRecord(1))


class TestMemoryFolderStore(unittest.TestCase):

    def test_returns_copies(self) -> None:
        store = MemoryFolderStore()
        record = FolderRecord(10, "t")
        store.put(FOLDER, record)
        record.total_time_ms = 99
        self.assertEqual(store.get(FOLDER), FolderRecord(10, "t"))


if __name__ == "__main__":
    unittest.main()
