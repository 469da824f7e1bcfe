# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the Record and DataInfo data models."""

import unittest

from filemaker.core.errors import DecodeError
from filemaker.models.record import DataInfo, Record


class TestRecord(unittest.TestCase):
    """Test cases for the Record dataclass."""

    def setUp(self):
        """Set up test fixtures."""
        self.api_entry = {
            "fieldData": {"name": "Alice", "city": "Paris", "g_company": "Acme"},
            "portalData": {"Orders": [{"recordId": "7", "Orders::total": 12}]},
            "recordId": "42",
            "modId": "3",
        }
        self.record = Record.from_api_response(self.api_entry, layout="People")

    def test_from_api_response(self):
        self.assertEqual(self.record.record_id, 42)
        self.assertEqual(self.record.mod_id, "3")
        self.assertEqual(self.record.layout, "People")
        self.assertEqual(self.record.portal_data["Orders"][0]["recordId"], "7")

    def test_dict_like_access(self):
        self.assertEqual(self.record["name"], "Alice")
        self.assertIn("city", self.record)
        self.assertNotIn("zip", self.record)
        self.assertEqual(self.record.get("zip", "n/a"), "n/a")
        self.assertEqual(len(self.record), 3)
        self.assertEqual(list(self.record), ["name", "city", "g_company"])

    def test_getitem_keyerror(self):
        with self.assertRaises(KeyError):
            _ = self.record["nonexistent"]

    def test_record_is_read_only(self):
        with self.assertRaises(AttributeError):
            self.record.record_id = 1
        with self.assertRaises(TypeError):
            self.record["name"] = "Bob"

    def test_field_names_skip_globals(self):
        self.assertEqual(self.record.field_names(), ["name", "city"])
        self.assertEqual(self.record.field_names(include_globals=True), ["name", "city", "g_company"])

    def test_to_dict_is_a_copy(self):
        data = self.record.to_dict()
        data["name"] = "Changed"
        self.assertEqual(self.record["name"], "Alice")

    def test_to_full_dict(self):
        full = self.record.to_full_dict()
        self.assertEqual(full["recordId"], "42")
        self.assertEqual(full["modId"], "3")
        self.assertEqual(full["fieldData"]["city"], "Paris")

    def test_missing_field_data_defaults_to_empty(self):
        record = Record.from_api_response({"recordId": "5"})
        self.assertEqual(record.field_data, {})
        self.assertIsNone(record.mod_id)

    def test_non_numeric_record_id_is_decode_error(self):
        with self.assertRaises(DecodeError):
            Record.from_api_response({"recordId": "abc", "fieldData": {}})

    def test_field_data_must_be_object(self):
        with self.assertRaises(DecodeError):
            Record.from_api_response({"recordId": "1", "fieldData": ["a"]})

    def test_entry_must_be_object(self):
        with self.assertRaises(DecodeError):
            Record.from_api_response("not a record")


class TestDataInfo(unittest.TestCase):
    """Test cases for DataInfo."""

    def test_from_api_response(self):
        info = DataInfo.from_api_response({
            "database": "Contacts",
            "layout": "People",
            "table": "People",
            "totalRecordCount": 25,
            "foundCount": 3,
            "returnedCount": 3,
        })
        self.assertEqual(info.total_record_count, 25)
        self.assertEqual(info.found_count, 3)
        self.assertEqual(info.returned_count, 3)
        self.assertEqual(info.table, "People")

    def test_empty_block_defaults_to_zero(self):
        self.assertEqual(DataInfo.from_api_response({}).total_record_count, 0)
        self.assertEqual(DataInfo.from_api_response(None).found_count, 0)

    def test_non_numeric_counts(self):
        with self.assertRaises(DecodeError):
            DataInfo.from_api_response({"totalRecordCount": "many"})


if __name__ == "__main__":
    unittest.main()
