import json
import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fixtures import LOGOS_BODY, SAMPLE_BUNDLE

from greekreference.db import ReferenceStore
from greekreference.errors import NotFound, PreconditionFailure


class ReferenceStoreTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = str(Path(self.temp_dir.name) / "reference.db")
        patcher = mock.patch("greekreference.db.get_reference_db_path", return_value=self.db_path)
        self.addCleanup(patcher.stop)
        patcher.start()
        self.store = ReferenceStore()
        self.store.import_bundle(SAMPLE_BUNDLE)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_find_by_key_matches_beta_code_and_greek(self):
        self.assertEqual(self.store.find_by_key("anqrwpos").id, 3)
        self.assertEqual(self.store.find_by_key("a)/nqrwpos").id, 3)
        self.assertEqual(self.store.find_by_key("ἄνθρωπος").id, 3)

    def test_find_by_key_is_case_insensitive(self):
        self.assertEqual(self.store.find_by_key("LOGOS").id, 7)
        self.assertEqual(self.store.find_by_key("ΛΌΓΟΣ").id, 7)

    def test_find_by_key_falls_back_to_unaccented_match(self):
        entry = self.store.find_by_key("ΛΟΓΟΣ")

        self.assertEqual(entry.id, 7)
        self.assertEqual(entry.body, LOGOS_BODY)

    def test_find_by_key_picks_lowest_id_among_shared_keys(self):
        # 7 and 12 are both "λόγος".
        self.assertEqual(self.store.find_by_key("λόγος").id, 7)

    def test_find_by_key_prefers_exact_key_over_folded_match(self):
        self.store.import_bundle({"lexicon": [{"id": 1, "word": "λογός", "entry": "<def>odd accent</def>"}]})

        self.assertEqual(self.store.find_by_key("λόγος").id, 7)
        self.assertEqual(self.store.find_by_key("λογός").id, 1)

    def test_find_by_key_raises_not_found(self):
        with self.assertRaises(NotFound):
            self.store.find_by_key("xyzzy")
        with self.assertRaises(KeyError):
            self.store.find_by_key("")

    def test_find_by_id_returns_stored_entry(self):
        entry = self.store.find_by_id(7)

        self.assertEqual(entry.display_word, "λόγος")
        self.assertEqual(entry.body, LOGOS_BODY)
        self.assertIn("logos", entry.search_keys)
        self.assertIn("lo/gos", entry.search_keys)
        self.assertIsNone(entry.section)

        with self.assertRaises(NotFound):
            self.store.find_by_id(999)

    def test_find_syntax_by_id_is_separate_from_lexicon(self):
        entry = self.store.find_syntax_by_id(3)

        self.assertEqual(entry.section, "Verbs > Tense")
        self.assertEqual(entry.display_word, "Aorist")
        self.assertEqual(entry.body, "<p>Simple past.</p>")
        self.assertTrue(entry.is_syntax)

        with self.assertRaises(NotFound):
            self.store.find_syntax_by_id(7)

    def test_find_by_reference_accepts_ids_and_uris(self):
        self.assertEqual(self.store.find_by_reference(15).id, 15)
        self.assertEqual(self.store.find_by_reference("15").id, 15)
        self.assertEqual(self.store.find_by_reference("greekreference://lexicon/15").id, 15)
        self.assertEqual(self.store.find_by_reference("content://lexicon/15/").id, 15)

    def test_find_by_reference_rejects_malformed_reference(self):
        with self.assertLogs("GreekReference", level="ERROR"):
            with self.assertRaises(PreconditionFailure):
                self.store.find_by_reference("greekreference://lexicon/logos")
        with self.assertRaises(ValueError):
            self.store.find_by_reference("")

    def test_find_by_reference_unknown_id_is_not_found(self):
        with self.assertRaises(NotFound):
            self.store.find_by_reference("greekreference://lexicon/404")

    def test_counts_and_sections(self):
        self.assertEqual(self.store.count_lexicon(), 4)
        self.assertEqual(self.store.count_syntax(), 3)
        self.assertEqual(
            self.store.list_syntax_sections(),
            [
                {"section": "Nouns > Gender", "first_id": 1, "count": 2},
                {"section": "Verbs > Tense", "first_id": 3, "count": 1},
            ],
        )


class ReferenceStoreImportTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = str(Path(self.temp_dir.name) / "reference.db")
        self.store = ReferenceStore(db_path=self.db_path)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_import_bundle_reports_bad_records_and_keeps_good_ones(self):
        with self.assertLogs("GreekReference", level="ERROR"):
            result = self.store.import_bundle(
                {
                    "lexicon": [
                        {"id": 1, "word": "θεός", "entry": "<def>god</def>"},
                        {"id": "abc", "word": "ἀγαθός", "entry": ""},
                        {"id": 2, "word": "", "entry": ""},
                    ],
                    "syntax": [{"id": 1, "section": "", "xml": ""}],
                }
            )

        self.assertEqual(result["lexicon"], 1)
        self.assertEqual(result["syntax"], 0)
        self.assertEqual(len(result["errors"]), 3)
        self.assertEqual(self.store.find_by_key("qeos").id, 1)

    def test_import_bundle_keeps_good_records_when_a_record_is_not_an_object(self):
        with self.assertLogs("GreekReference", level="ERROR"):
            result = self.store.import_bundle(
                {
                    "lexicon": [
                        {"id": 1, "word": "θεός", "entry": "<def>god</def>"},
                        ["bad", "record"],
                        "bare string",
                        {"id": 2, "word": "φίλος", "entry": "<def>friend</def>"},
                    ],
                    "syntax": [None, 5],
                }
            )

        self.assertEqual(result["lexicon"], 2)
        self.assertEqual(result["syntax"], 0)
        self.assertEqual(len(result["errors"]), 4)
        self.assertEqual({e["id"] for e in result["errors"]}, {""})
        self.assertEqual(self.store.count_lexicon(), 2)
        self.assertEqual(self.store.find_by_key("filos").id, 2)

    def test_import_bundle_reports_sections_that_are_not_lists(self):
        with self.assertLogs("GreekReference", level="ERROR"):
            result = self.store.import_bundle(
                {
                    "lexicon": {"id": 1, "word": "θεός", "entry": "<def>god</def>"},
                    "syntax": "Nouns",
                }
            )

        self.assertEqual(result["lexicon"], 0)
        self.assertEqual(result["syntax"], 0)
        self.assertEqual(
            [(e["record_type"], e["error"]) for e in result["errors"]],
            [("lexicon", "lexicon must be a list"), ("syntax", "syntax must be a list")],
        )
        self.assertEqual(self.store.count_lexicon(), 0)

    def test_lexicon_table_stores_only_word_and_body(self):
        self.store.import_bundle({"lexicon": [{"id": 1, "word": "θεός", "entry": "<def>god</def>"}]})

        conn = sqlite3.connect(self.db_path)
        try:
            cols = [row[1] for row in conn.execute("PRAGMA table_info(lexicon)").fetchall()]
        finally:
            conn.close()

        self.assertEqual(cols, ["id", "word", "entry"])
        self.assertEqual(self.store.find_by_key("qeo/s").id, 1)
        self.assertIn("qeos", self.store.find_by_id(1).search_keys)

    def test_import_bundle_rejects_non_object(self):
        with self.assertRaises(ValueError):
            self.store.import_bundle(["not", "a", "bundle"])

    def test_reimport_replaces_entry_and_keys(self):
        self.store.import_bundle({"lexicon": [{"id": 1, "word": "θεός", "entry": "old"}]})
        self.store.import_bundle({"lexicon": [{"id": 1, "word": "θεά", "entry": "new"}]})

        self.assertEqual(self.store.find_by_id(1).body, "new")
        self.assertEqual(self.store.count_lexicon(), 1)
        with self.assertRaises(NotFound):
            self.store.find_by_key("qeos")

    def test_import_csv_text(self):
        csv_text = (
            "record_type,id,word,entry,search_keys,section,title,xml\n"
            "lexicon,4,φίλος,<def>friend</def>,philos|filos,,,\n"
            "syntax,9,,,,Particles,μέν,<p>on the one hand</p>\n"
            "unknown,10,,,,,,\n"
        )

        result = self.store.import_csv_text(csv_text)

        self.assertEqual(result["lexicon"], 1)
        self.assertEqual(result["syntax"], 1)
        self.assertEqual(self.store.find_by_key("philos").id, 4)
        self.assertEqual(self.store.find_by_key("fi/los").id, 4)
        self.assertEqual(self.store.find_syntax_by_id(9).section, "Particles")

    def test_import_file_dispatches_on_extension(self):
        json_path = Path(self.temp_dir.name) / "bundle.json"
        json_path.write_text(json.dumps(SAMPLE_BUNDLE, ensure_ascii=False), encoding="utf-8")

        result = self.store.import_file(str(json_path))

        self.assertEqual(result["lexicon"], 4)
        self.assertEqual(result["syntax"], 3)


if __name__ == "__main__":
    unittest.main()
