"""Schema, statistics and dictionary inspection for Parquet files."""

from parquet_inspect.decoding import decode_value
from parquet_inspect.dictionary import DEFAULT_MAX_DICTIONARY_ITEMS, extract_dictionary_values
from parquet_inspect.errors import (
    FileOpenError,
    MetadataParseError,
    PageStreamError,
    ParquetInspectError,
)
from parquet_inspect.file_summary import FileSummary, summarize_file
from parquet_inspect.inspector import ParquetInspector
from parquet_inspect.reader import ParquetReader
from parquet_inspect.sample_data import SampleData, read_sample_rows
from parquet_inspect.schema import GroupNode, PrimitiveNode, RootNode, SchemaTree, build_schema_tree
from parquet_inspect.statistics import ColumnStatistics, aggregate_column_statistics
from parquet_inspect.summary import summarize_codecs_encodings

__version__ = "0.1.0"
