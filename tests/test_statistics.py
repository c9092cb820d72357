#!/usr/bin/env python3
"""
Tests for the per-column statistics fold and the codec/encoding summaries.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fixtures import column_meta, int32, row_group, stats
from parquet_inspect.statistics import aggregate_column_statistics
from parquet_inspect.summary import summarize_codecs_encodings
from parquet_inspect.thrift_types import CompressionCodec, Encoding, Statistics, Type


class TestAggregateColumnStatistics(unittest.TestCase):

    def test_sizes_are_summed_for_every_chunk(self):
        row_groups = [
            row_group(column_meta(compressed=10, uncompressed=30, statistics=stats(null_count=1))),
            row_group(column_meta(compressed=20, uncompressed=40)),
            row_group(column_meta(compressed=5, uncompressed=5)),
        ]
        result = aggregate_column_statistics(row_groups, 0, Type.INT32)
        self.assertEqual(result.total_compressed_size, 35)
        self.assertEqual(result.total_uncompressed_size, 75)
        self.assertEqual(result.null_count, 1)

    def test_min_max_across_row_groups(self):
        row_groups = [
            row_group(column_meta(Type.BYTE_ARRAY, statistics=stats(b"banana", b"kiwi"))),
            row_group(column_meta(Type.BYTE_ARRAY, statistics=stats(b"apple", b"fig"))),
            row_group(column_meta(Type.BYTE_ARRAY, statistics=stats(b"cherry", b"plum"))),
        ]
        result = aggregate_column_statistics(row_groups, 0, Type.BYTE_ARRAY)
        self.assertEqual(result.min, "apple")
        self.assertEqual(result.max, "plum")

    def test_min_max_compare_raw_bytes(self):
        # -1 encodes as FF FF FF FF, which sorts after 5 byte-wise
        row_groups = [
            row_group(column_meta(statistics=stats(int32(-1), int32(-1)))),
            row_group(column_meta(statistics=stats(int32(5), int32(5)))),
        ]
        result = aggregate_column_statistics(row_groups, 0, Type.INT32)
        self.assertEqual(result.min, "5")
        self.assertEqual(result.max, "-1")

    def test_deprecated_min_max_fields_are_used(self):
        legacy = Statistics(min=int32(3), max=int32(9), null_count=0)
        result = aggregate_column_statistics(
            [row_group(column_meta(statistics=legacy))], 0, Type.INT32
        )
        self.assertEqual((result.min, result.max), ("3", "9"))

    def test_distinct_count_is_sum_of_chunk_estimates(self):
        row_groups = [
            row_group(column_meta(statistics=stats(distinct_count=3))),
            row_group(column_meta(statistics=stats(null_count=2))),
            row_group(column_meta(statistics=stats(distinct_count=4))),
        ]
        result = aggregate_column_statistics(row_groups, 0, Type.INT32)
        self.assertEqual(result.distinct_count, 7)
        self.assertEqual(result.null_count, 2)

    def test_no_statistics(self):
        row_groups = [row_group(column_meta()), row_group(column_meta())]
        result = aggregate_column_statistics(row_groups, 0, Type.INT32)
        self.assertIsNone(result.min)
        self.assertIsNone(result.max)
        self.assertIsNone(result.distinct_count)
        self.assertEqual(result.null_count, 0)
        self.assertEqual(result.total_compressed_size, 200)

    def test_no_row_groups(self):
        result = aggregate_column_statistics([], 0, Type.DOUBLE)
        self.assertEqual(result.total_compressed_size, 0)
        self.assertIsNone(result.min)

    def test_selects_column_by_ordinal(self):
        row_groups = [
            row_group(
                column_meta(compressed=1, statistics=stats(int32(1), int32(2))),
                column_meta(Type.BYTE_ARRAY, compressed=2, statistics=stats(b"a", b"b")),
            )
        ]
        result = aggregate_column_statistics(row_groups, 1, Type.BYTE_ARRAY)
        self.assertEqual((result.min, result.max), ("a", "b"))
        self.assertEqual(result.total_compressed_size, 2)


class TestSummarizeCodecsEncodings(unittest.TestCase):

    def test_union_across_row_groups(self):
        row_groups = [
            row_group(column_meta(
                codec=CompressionCodec.SNAPPY,
                encodings=(Encoding.RLE_DICTIONARY, Encoding.PLAIN, Encoding.RLE),
            )),
            row_group(column_meta(
                codec=CompressionCodec.ZSTD,
                encodings=(Encoding.PLAIN, Encoding.RLE),
            )),
            row_group(column_meta(codec=CompressionCodec.SNAPPY, encodings=(Encoding.PLAIN,))),
        ]
        codecs, encodings = summarize_codecs_encodings(row_groups, 0)
        self.assertEqual(codecs, "SNAPPY, ZSTD")
        self.assertEqual(encodings, "PLAIN, RLE, RLE_DICTIONARY")

    def test_single_codec(self):
        codecs, encodings = summarize_codecs_encodings([row_group(column_meta())], 0)
        self.assertEqual(codecs, "UNCOMPRESSED")
        self.assertEqual(encodings, "PLAIN")

    def test_unknown_enum_values_still_render(self):
        codecs, encodings = summarize_codecs_encodings(
            [row_group(column_meta(codec=42, encodings=(99,)))], 0
        )
        self.assertEqual(codecs, "UNKNOWN(42)")
        self.assertEqual(encodings, "UNKNOWN(99)")


if __name__ == "__main__":
    unittest.main()
