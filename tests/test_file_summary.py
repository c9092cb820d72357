#!/usr/bin/env python3
"""
Tests for file-level totals computed from footer metadata.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fixtures import column_meta, row_group
from parquet_inspect.file_summary import summarize_file
from parquet_inspect.thrift_types import CompressionCodec, FileMetaData


class TestSummarizeFile(unittest.TestCase):

    def test_missing_writer_is_not_available(self):
        metadata = FileMetaData(version=1, num_rows=0, row_groups=[])
        summary = summarize_file(metadata, 0)
        self.assertEqual(summary.created_by, "N/A")
        self.assertEqual(summary.compression_ratio, 0.0)
        self.assertEqual(summary.avg_row_size, 0)
        self.assertEqual(summary.codecs, "")

    def test_totals_over_row_groups(self):
        chunks = [
            column_meta(compressed=50, codec=CompressionCodec.SNAPPY),
            column_meta(compressed=25),
        ]
        metadata = FileMetaData(
            version=2,
            num_rows=20,
            row_groups=[row_group(*chunks, num_rows=10), row_group(*chunks, num_rows=10)],
            created_by="unit test",
        )
        summary = summarize_file(metadata, 2)
        self.assertEqual(summary.created_by, "unit test")
        self.assertEqual(summary.num_rows, 20)
        self.assertEqual(summary.compressed_size, 150)
        self.assertEqual(summary.codecs, "SNAPPY(2), UNCOMPRESSED(2)")


if __name__ == "__main__":
    unittest.main()
