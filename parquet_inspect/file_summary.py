from collections import Counter
from dataclasses import asdict, dataclass

from parquet_inspect.thrift_types import CompressionCodec, Encoding, enum_name

MISSING_CREATED_BY = "N/A"


@dataclass(frozen=True)
class FileSummary:
    format_version: str
    created_by: str
    num_rows: int
    num_columns: int
    num_row_groups: int
    raw_size: int
    compressed_size: int
    compression_ratio: float
    codecs: str
    encodings: str
    avg_row_size: int

    def to_dict(self):
        return asdict(self)


def summarize_file(metadata, num_columns):
    """File-level totals over every column chunk of every row group.

    ``codecs`` lists how many column chunks use each codec, e.g.
    ``"SNAPPY(3), UNCOMPRESSED(1)"``.
    """
    row_groups = metadata.row_groups or []
    raw_size = 0
    compressed_size = 0
    codec_counts = Counter()
    encodings = set()
    for row_group in row_groups:
        for chunk in row_group.columns or []:
            meta = chunk.meta_data
            raw_size += meta.total_uncompressed_size or 0
            compressed_size += meta.total_compressed_size or 0
            codec_counts[enum_name(CompressionCodec, meta.codec)] += 1
            encodings.update(enum_name(Encoding, e) for e in meta.encodings or [])

    num_rows = sum(row_group.num_rows or 0 for row_group in row_groups)
    return FileSummary(
        format_version=str(metadata.version),
        created_by=metadata.created_by or MISSING_CREATED_BY,
        num_rows=num_rows,
        num_columns=num_columns,
        num_row_groups=len(row_groups),
        raw_size=raw_size,
        compressed_size=compressed_size,
        compression_ratio=raw_size / compressed_size if compressed_size > 0 else 0.0,
        codecs=", ".join(sorted(f"{codec}({count})" for codec, count in codec_counts.items())),
        encodings=", ".join(sorted(encodings)),
        avg_row_size=raw_size // num_rows if num_rows > 0 else 0,
    )
