import logging
from dataclasses import dataclass
from typing import Optional

from parquet_inspect.decoding import decode_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStatistics:
    min: Optional[str]
    max: Optional[str]
    null_count: int
    distinct_count: Optional[int]
    total_compressed_size: int
    total_uncompressed_size: int

    def to_dict(self):
        return {
            "min": self.min,
            "max": self.max,
            "null_count": self.null_count,
            "distinct_count": self.distinct_count,
            "total_compressed_size": self.total_compressed_size,
            "total_uncompressed_size": self.total_uncompressed_size,
        }


def aggregate_column_statistics(row_groups, column_idx, physical_type):
    """Fold the column chunk metadata of one leaf column across all row groups.

    Sizes are summed for every chunk. Null and distinct counts are summed over
    the chunks that carry statistics; the distinct count is therefore the sum
    of per-chunk estimates, not the number of distinct values in the file, and
    stays ``None`` unless some chunk reports one.

    Min and max are chosen by comparing the raw statistics bytes
    lexicographically and are only decoded after the fold. That ordering
    matches value ordering for unsigned integers and byte arrays but not for
    negative INT32/INT64 or for FLOAT/DOUBLE values, where the reported
    extremes can be wrong.
    """
    min_bytes = None
    max_bytes = None
    null_count = 0
    distinct_count = None
    total_compressed_size = 0
    total_uncompressed_size = 0

    for row_group in row_groups:
        meta = row_group.columns[column_idx].meta_data
        stats = meta.statistics
        if stats is not None:
            null_count += stats.null_count or 0
            if stats.distinct_count is not None:
                distinct_count = (distinct_count or 0) + stats.distinct_count
            chunk_min = stats.min_bytes()
            if chunk_min is not None and (min_bytes is None or chunk_min < min_bytes):
                min_bytes = chunk_min
            chunk_max = stats.max_bytes()
            if chunk_max is not None and (max_bytes is None or chunk_max > max_bytes):
                max_bytes = chunk_max
        total_compressed_size += meta.total_compressed_size or 0
        total_uncompressed_size += meta.total_uncompressed_size or 0

    logger.debug(
        f"Column {column_idx}: folded {len(row_groups)} row groups, "
        f"compressed={total_compressed_size}, uncompressed={total_uncompressed_size}"
    )
    return ColumnStatistics(
        min=decode_value(min_bytes, physical_type) if min_bytes is not None else None,
        max=decode_value(max_bytes, physical_type) if max_bytes is not None else None,
        null_count=null_count,
        distinct_count=distinct_count,
        total_compressed_size=total_compressed_size,
        total_uncompressed_size=total_uncompressed_size,
    )
