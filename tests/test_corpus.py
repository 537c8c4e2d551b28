# ======================================================
# tests/test_corpus.py
# ======================================================
# Here, we are testing CorpusStatistics to ensure:
#   - document frequencies count documents, not occurrences
#   - the cache file round-trips and tolerates bad rows
#   - cache errors are typed and recoverable
# ======================================================

import os
import tempfile
import unittest
from unittest import mock

from docid.corpus import CorpusStatistics, read_counts
from docid.errors import CacheLoadError, CacheWriteError, ErrorKind


class TestBuild(unittest.TestCase):

    def setUp(self):
        self.stats = CorpusStatistics()
        self.stats.build([
            "Artificial intelligence is cool",
            "Machine learning is part of artificial intelligence",
        ])

    def test_document_frequencies(self):
        self.assertEqual(self.stats.get("artificial"), 2)
        self.assertEqual(self.stats.get("intelligence"), 2)
        self.assertEqual(self.stats.get("cool"), 1)
        self.assertEqual(self.stats.get("machine"), 1)

    def test_filtered_words_absent(self):
        self.assertNotIn("is", self.stats)
        self.assertNotIn("of", self.stats)
        self.assertEqual(self.stats.get("is"), 0)

    def test_vocabulary(self):
        self.assertEqual(len(self.stats.vocabulary), 6)
        self.assertIn("learning", self.stats.vocabulary)
        self.assertTrue(self.stats.vocabulary.frozen)

    def test_repeats_count_once_per_document(self):
        stats = CorpusStatistics()
        stats.build(["test test test", "test again"])
        self.assertEqual(stats.get("test"), 2)
        self.assertEqual(stats.get("again"), 1)

    def test_lemmas_share_a_counter(self):
        stats = CorpusStatistics()
        stats.build(["testing code", "test suite"])
        self.assertEqual(stats.get("test"), 2)
        self.assertNotIn("testing", stats)

    def test_total_and_mean(self):
        self.assertEqual(self.stats.total(), 8)
        self.assertAlmostEqual(self.stats.mean(), 8 / 6)

    def test_empty_table(self):
        stats = CorpusStatistics()
        stats.build(["is are be"])
        self.assertEqual(len(stats), 0)
        self.assertEqual(stats.total(), 0)
        self.assertEqual(stats.mean(), 0.0)

    def test_rebuild_replaces_previous_table(self):
        self.stats.build(["fresh words"])
        self.assertNotIn("artificial", self.stats)
        self.assertNotIn("artificial", self.stats.vocabulary)


class TestCacheFile(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "counts.csv")

    def write(self, content):
        with open(self.path, "w", encoding="utf8") as f:
            f.write(content)

    def read_lines(self):
        with open(self.path, "r", encoding="utf8") as f:
            return f.read().splitlines()

    def test_cache_sorted_by_count(self):
        stats = CorpusStatistics()
        stats.build(["alpha beta", "beta gamma"])
        stats.cache(self.path)
        self.assertEqual(self.read_lines(), ["word,count", "beta,2", "alpha,1", "gamma,1"])

    def test_cache_large_table_keeps_table_order(self):
        stats = CorpusStatistics()
        stats.build(["alpha beta", "beta gamma"])
        with mock.patch("docid.corpus.LARGE_DATASET_THRESHOLD", 3):
            stats.cache(self.path)
        self.assertEqual(self.read_lines(), ["word,count", "alpha,1", "beta,2", "gamma,1"])

    def test_cache_creates_directories(self):
        stats = CorpusStatistics()
        stats.build(["alpha beta"])
        nested = os.path.join(self.tmp.name, "a", "b", "counts.csv")
        stats.cache(nested)
        self.assertTrue(os.path.exists(nested))

    def test_round_trip(self):
        stats = CorpusStatistics()
        stats.build(["translate french document", "translate english text", "french cooking"])
        stats.cache(self.path)

        loaded = CorpusStatistics()
        loaded.load(self.path)
        self.assertEqual(loaded.as_dict(), stats.as_dict())
        self.assertIn("translate", loaded.vocabulary)

    def test_cache_errors(self):
        stats = CorpusStatistics()
        with self.assertRaises(CacheWriteError) as ctx:
            stats.cache(self.path)
        self.assertIn("No word counts to cache", str(ctx.exception))

        stats.build(["alpha beta"])
        for bad in ("", "   ", None, 42):
            with self.assertRaises(CacheWriteError):
                stats.cache(bad)

    def test_cache_write_failure(self):
        stats = CorpusStatistics()
        stats.build(["alpha beta"])

        # the parent of the target is a regular file
        blocker = os.path.join(self.tmp.name, "blocker")
        with open(blocker, "w", encoding="utf8") as f:
            f.write("x")
        for target in (self.tmp.name, os.path.join(blocker, "counts.csv")):
            with self.subTest(target=target):
                with self.assertRaises(CacheWriteError) as ctx:
                    stats.cache(target)
                self.assertIs(ctx.exception.kind, ErrorKind.RECOVERABLE)
                self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_load_skips_malformed_rows(self):
        self.write("word,count\ntest,5\ninvalid_line\ndocument,not_a_number\nneg,-2\na,b,c\n\ncontent, 3\n")
        stats = CorpusStatistics()
        with self.assertLogs("docid.corpus", level="WARNING") as logs:
            stats.load(self.path)
        self.assertEqual(stats.as_dict(), {"test": 5, "content": 3})
        self.assertEqual(len(logs.records), 4)

    def test_load_missing_file(self):
        with self.assertRaises(CacheLoadError) as ctx:
            CorpusStatistics().load(self.path)
        self.assertIn("File does not exist", str(ctx.exception))
        self.assertIs(ctx.exception.kind, ErrorKind.RECOVERABLE)

    def test_load_empty_file(self):
        self.write("  \n")
        with self.assertRaises(CacheLoadError) as ctx:
            CorpusStatistics().load(self.path)
        self.assertIn("File is empty", str(ctx.exception))

    def test_load_header_only(self):
        self.write("word,count\n")
        with self.assertRaises(CacheLoadError) as ctx:
            CorpusStatistics().load(self.path)
        self.assertIn("at least a header and one data line", str(ctx.exception))

    def test_load_without_valid_rows(self):
        self.write("word,count\nbroken\n")
        with self.assertLogs("docid.corpus", level="WARNING"):
            with self.assertRaises(CacheLoadError):
                CorpusStatistics().load(self.path)

    def test_read_counts_last_row_wins(self):
        self.write("word,count\ntest,1\ntest,4\n")
        self.assertEqual(dict(read_counts(self.path)), {"test": 4})


if __name__ == "__main__":
    unittest.main()
