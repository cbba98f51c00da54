import time
import unittest

from emotes_backend.constants import CREATED_AT_FIELD
from emotes_backend.db import InMemoryDbClient, SqlDbClient


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL document store.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")

    def test_missing_document_is_none(self):
        self.assertIsNone(self.db.get_document("settings", "main"))

    def test_set_merge_keeps_other_fields(self):
        self.db.set_document("settings", "main", {"adLink": "https://a.test", "theme": "ruby"})
        self.db.set_document("settings", "main", {"adLink": "https://b.test"}, merge=True)
        self.assertEqual(
            self.db.get_document("settings", "main"),
            {"adLink": "https://b.test", "theme": "ruby"},
        )

    def test_set_without_merge_replaces(self):
        self.db.set_document("settings", "main", {"adLink": "https://a.test", "theme": "ruby"})
        self.db.set_document("settings", "main", {"adLink": "https://b.test"})
        self.assertEqual(self.db.get_document("settings", "main"), {"adLink": "https://b.test"})

    def test_create_assigns_id_and_timestamp(self):
        doc_id = self.db.create_document("emotes", {"name": "wave", "url": "u"})
        doc = self.db.get_document("emotes", doc_id)
        self.assertEqual(doc["id"], doc_id)
        self.assertEqual(doc["name"], "wave")
        self.assertIsNotNone(doc[CREATED_AT_FIELD])

    def test_list_orders_by_created_at(self):
        first = self.db.create_document("emotes", {"name": "first"})
        time.sleep(0.01)
        second = self.db.create_document("emotes", {"name": "second"})
        self.db.set_document("settings", "main", {"adLink": "x"})

        newest = self.db.list_documents(
            "emotes", order_by=CREATED_AT_FIELD, descending=True
        )
        self.assertEqual([d["id"] for d in newest], [second, first])
        limited = self.db.list_documents("emotes", order_by=CREATED_AT_FIELD, limit=1)
        self.assertEqual([d["id"] for d in limited], [first])

    def test_delete_is_idempotent(self):
        doc_id = self.db.create_document("emotes", {"name": "wave"})
        self.db.delete_document("emotes", doc_id)
        self.db.delete_document("emotes", doc_id)
        self.assertIsNone(self.db.get_document("emotes", doc_id))
        self.assertEqual(self.db.list_documents("emotes"), [])


class InMemoryDbClientTests(unittest.TestCase):
    def test_returned_documents_are_copies(self):
        db = InMemoryDbClient()
        db.set_document("settings", "main", {"adLink": "https://a.test"})
        doc = db.get_document("settings", "main")
        doc["adLink"] = "mutated"
        self.assertEqual(db.get_document("settings", "main")["adLink"], "https://a.test")

    def test_list_drops_documents_without_order_field(self):
        db = InMemoryDbClient()
        db.set_document("emotes", "legacy", {"name": "no timestamp"})
        created = db.create_document("emotes", {"name": "new"})
        docs = db.list_documents("emotes", order_by=CREATED_AT_FIELD, descending=True)
        self.assertEqual([d["id"] for d in docs], [created])


if __name__ == "__main__":
    unittest.main()
