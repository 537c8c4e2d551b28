# ======================================================
# tests/test_cli.py
# ======================================================
# Here, we are running the `docid` command line in a temporary
# directory and checking the files and messages it produces.
# ======================================================

import argparse
import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from docid.cli import build_parser, main, parse_doc_numbers


class TestParser(unittest.TestCase):

    def test_parse_doc_numbers(self):
        self.assertEqual(parse_doc_numbers("0, 2,5"), frozenset({0, 2, 5}))
        self.assertEqual(parse_doc_numbers(""), frozenset())
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_doc_numbers("first")

    def test_generate_arguments(self):
        args = build_parser().parse_args(["generate", "docs.json", "25", "1.5", "-v", "0,2"])
        self.assertEqual(args.min_id_length, 25)
        self.assertEqual(args.max_mean_frequency, 1.5)
        self.assertEqual(args.verbose, frozenset({0, 2}))

    def test_verbose_without_numbers(self):
        args = build_parser().parse_args(["generate", "docs.json", "-v"])
        self.assertEqual(args.verbose, frozenset())
        args = build_parser().parse_args(["generate", "docs.json"])
        self.assertIsNone(args.verbose)


class TestCommands(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = self.tmp.name

    def path(self, name):
        return os.path.join(self.dir, name)

    def dump(self, name, data):
        with open(self.path(name), "w", encoding="utf8") as f:
            json.dump(data, f)
        return self.path(name)

    def run_main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_generate_writes_ids_and_cache(self):
        docs = self.dump("docs.json", ["Translate the following from French to English", "Summarize this article"])
        code, out, _ = self.run_main(["generate", docs, "20"])

        self.assertEqual(code, 0)
        self.assertIn("Generated IDs written to:", out)
        self.assertIn("Document word counts cached to:", out)

        with open(self.path("docs_IDs.json"), "r", encoding="utf8") as f:
            results = json.load(f)
        self.assertEqual([r["id"] for r in results][0], "Translate_the_following")
        self.assertEqual(results[1]["document"], "Summarize this article")

        with open(self.path("docs_doc_word_count.csv"), "r", encoding="utf8") as f:
            self.assertEqual(f.readline().strip(), "word,count")

    def test_generate_no_cache(self):
        docs = self.dump("docs.json", ["hello world"])
        code, out, _ = self.run_main(["generate", docs, "--no-cache"])
        self.assertEqual(code, 0)
        self.assertFalse(os.path.exists(self.path("docs_doc_word_count.csv")))

    def test_generate_custom_cache_path(self):
        docs = self.dump("docs.json", ["hello world"])
        cache = self.path("cache/counts.csv")
        code, _, _ = self.run_main(["generate", docs, "--cache", cache])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(cache))

    def test_generate_all_filtered(self):
        docs = self.dump("docs.json", ["is are be"])
        code, _, err = self.run_main(["generate", docs])
        self.assertEqual(code, 0)
        self.assertIn("No word counts to cache", err)
        self.assertFalse(os.path.exists(self.path("docs_doc_word_count.csv")))
        with open(self.path("docs_IDs.json"), "r", encoding="utf8") as f:
            self.assertEqual(json.load(f)[0]["id"], "document_0")

    def test_generate_bad_input(self):
        docs = self.dump("docs.json", {"not": "a list"})
        code, _, err = self.run_main(["generate", docs])
        self.assertEqual(code, 1)
        self.assertIn("JSON file must contain an array of strings", err)

        code, _, err = self.run_main(["generate", self.path("missing.json")])
        self.assertEqual(code, 1)
        self.assertIn("does not exist", err)

    def test_generate_bad_configuration(self):
        docs = self.dump("docs.json", ["hello world"])
        code, _, err = self.run_main(["generate", docs, "0"])
        self.assertEqual(code, 1)
        self.assertIn("min_id_length must be a positive number", err)

        code, _, err = self.run_main(["generate", docs, "30", "nan"])
        self.assertEqual(code, 1)
        self.assertIn("max_mean_frequency must be None or a non-negative number", err)

    def test_generate_output_not_writable(self):
        docs = self.dump("docs.json", ["hello world"])
        with mock.patch("docid.cli.write_results", side_effect=PermissionError("Permission denied")):
            code, out, err = self.run_main(["generate", docs])
        self.assertEqual(code, 1)
        self.assertIn("Error: Permission denied", err)
        self.assertNotIn("Generated IDs written to", out)

    def test_average(self):
        csv_path = self.path("counts.csv")
        with open(csv_path, "w", encoding="utf8") as f:
            f.write("word,count\nalpha,2\nbeta,4\n")
        code, out, _ = self.run_main(["average", csv_path])
        self.assertEqual(code, 0)
        self.assertIn("Average word count: 3.00", out)
        self.assertIn("Total words: 2", out)
        self.assertIn("Total count: 6", out)

    def test_average_unreadable(self):
        csv_path = self.path("counts.csv")
        with open(csv_path, "w", encoding="utf8") as f:
            f.write("word,count\n")
        code, _, err = self.run_main(["average", csv_path])
        self.assertEqual(code, 1)
        self.assertIn("Failed to load word frequencies", err)

    def test_diff(self):
        file1 = self.dump("run1_IDs.json", [{"id": "a", "document": "doc"}])
        file2 = self.dump("run2_IDs.json", [{"id": "b", "document": "doc"}])
        code, out, _ = self.run_main(["diff", file1, file2])
        self.assertEqual(code, 0)
        self.assertIn("Total documents with differences: 1", out)
        self.assertTrue(os.path.exists(self.path("run1_IDs_run2_IDs_diff.json")))


if __name__ == "__main__":
    unittest.main()
