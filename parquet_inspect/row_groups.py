import logging
from dataclasses import dataclass
from typing import List, Optional

from parquet_inspect.decoding import decode_value
from parquet_inspect.errors import PageStreamError
from parquet_inspect.thrift_types import CompressionCodec, Encoding, PageType, enum_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageInfo:
    page_type: str
    size: int
    num_values: int
    encoding: Optional[str]


@dataclass(frozen=True)
class ChunkStatistics:
    min: Optional[str]
    max: Optional[str]
    null_count: Optional[int]
    distinct_count: Optional[int]


@dataclass(frozen=True)
class ColumnChunkInfo:
    file_offset: int
    column_path: str
    has_stats: bool
    has_dictionary_page: bool
    has_bloom_filter: bool
    has_page_encoding_stats: bool
    statistics: Optional[ChunkStatistics]
    total_compressed_size: int
    total_uncompressed_size: int
    codec: str
    pages: List[PageInfo]


@dataclass(frozen=True)
class RowGroupInfo:
    idx: int
    num_rows: int
    compressed_size: int
    uncompressed_size: int
    compression_ratio: str
    columns: List[ColumnChunkInfo]

    def to_dict(self):
        return {
            "idx": self.idx,
            "num_rows": self.num_rows,
            "compressed_size": self.compressed_size,
            "uncompressed_size": self.uncompressed_size,
            "compression_ratio": self.compression_ratio,
            "columns": [_chunk_to_dict(c) for c in self.columns],
        }


def _chunk_to_dict(chunk):
    return {
        "file_offset": chunk.file_offset,
        "column_path": chunk.column_path,
        "has_stats": chunk.has_stats,
        "has_dictionary_page": chunk.has_dictionary_page,
        "has_bloom_filter": chunk.has_bloom_filter,
        "has_page_encoding_stats": chunk.has_page_encoding_stats,
        "statistics": vars(chunk.statistics) if chunk.statistics else None,
        "total_compressed_size": chunk.total_compressed_size,
        "total_uncompressed_size": chunk.total_uncompressed_size,
        "codec": chunk.codec,
        "pages": [vars(page) for page in chunk.pages],
    }


def chunk_statistics(stats, physical_type):
    if stats is None:
        return None
    min_bytes = stats.min_bytes()
    max_bytes = stats.max_bytes()
    return ChunkStatistics(
        min=decode_value(min_bytes, physical_type) if min_bytes is not None else None,
        max=decode_value(max_bytes, physical_type) if max_bytes is not None else None,
        null_count=stats.null_count,
        distinct_count=stats.distinct_count,
    )


def list_pages(pages):
    """Describe each page of a stream; a failing stream truncates the list."""
    infos = []
    try:
        for page in pages:
            infos.append(PageInfo(
                page_type=enum_name(PageType, page.page_type),
                size=page.uncompressed_size,
                num_values=page.num_values,
                encoding=enum_name(Encoding, page.encoding),
            ))
    except PageStreamError as exc:
        logger.warning(f"Page listing stopped after {len(infos)} pages: {exc}")
    return infos


def inspect_row_group(reader, row_group_idx):
    """Sizes, flags, chunk statistics and pages for every column of a row group."""
    row_group = reader.row_groups[row_group_idx]
    columns = []
    for column_idx, chunk in enumerate(row_group.columns or []):
        meta = chunk.meta_data
        columns.append(ColumnChunkInfo(
            file_offset=chunk.file_offset,
            column_path=".".join(meta.path_in_schema or []),
            has_stats=meta.statistics is not None,
            has_dictionary_page=meta.dictionary_page_offset is not None,
            has_bloom_filter=meta.bloom_filter_offset is not None,
            has_page_encoding_stats=bool(meta.encoding_stats),
            statistics=chunk_statistics(meta.statistics, meta.type),
            total_compressed_size=meta.total_compressed_size,
            total_uncompressed_size=meta.total_uncompressed_size,
            codec=enum_name(CompressionCodec, meta.codec),
            pages=list_pages(reader.iter_pages(row_group_idx, column_idx)),
        ))

    compressed_size = sum(c.total_compressed_size or 0 for c in columns)
    uncompressed_size = sum(c.total_uncompressed_size or 0 for c in columns)
    ratio = f"{uncompressed_size / compressed_size:.2f}" if compressed_size else "N/A"
    return RowGroupInfo(
        idx=row_group_idx,
        num_rows=row_group.num_rows,
        compressed_size=compressed_size,
        uncompressed_size=uncompressed_size,
        compression_ratio=ratio,
        columns=columns,
    )
