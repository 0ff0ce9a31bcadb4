import json
import tempfile
import unittest
from pathlib import Path

from downhill.core.errors import PersistenceUnavailable
from downhill.storage.highscore import KEY, JsonHighScoreStore, MemoryHighScoreStore


class TestMemoryHighScoreStore(unittest.TestCase):
    def test_given_nothing_saved_then_none(self):
        self.assertIsNone(MemoryHighScoreStore().get())

    def test_given_set_then_get_returns_value(self):
        store = MemoryHighScoreStore()
        store.set(12)
        self.assertEqual(store.get(), 12)


class TestJsonHighScoreStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_given_missing_file_then_none(self):
        self.assertIsNone(JsonHighScoreStore(self.dir / "nope.json").get())

    def test_given_set_then_file_holds_camel_case_key(self):
        path = self.dir / "nested" / "highscore.json"
        store = JsonHighScoreStore(path)
        store.set(37)
        self.assertEqual(json.loads(path.read_text()), {KEY: 37})
        self.assertEqual(KEY, "allTimeHighScore")
        self.assertEqual(JsonHighScoreStore(path).get(), 37)
        self.assertFalse(path.with_suffix(".json.tmp").exists())

    def test_given_file_without_key_then_none(self):
        path = self.dir / "highscore.json"
        path.write_text("{}")
        self.assertIsNone(JsonHighScoreStore(path).get())

    def test_given_corrupt_file_then_persistence_unavailable(self):
        path = self.dir / "highscore.json"
        path.write_text("{not json")
        with self.assertRaises(PersistenceUnavailable):
            JsonHighScoreStore(path).get()

        path.write_text(json.dumps({KEY: "many"}))
        with self.assertRaises(PersistenceUnavailable):
            JsonHighScoreStore(path).get()

    def test_given_unwritable_location_then_persistence_unavailable(self):
        blocker = self.dir / "blocker"
        blocker.write_text("a file, not a directory")
        store = JsonHighScoreStore(blocker / "highscore.json")
        with self.assertRaises(PersistenceUnavailable):
            store.set(1)


if __name__ == "__main__":
    unittest.main()
