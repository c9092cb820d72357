import logging
from functools import cached_property

from parquet_inspect.dictionary import DEFAULT_MAX_DICTIONARY_ITEMS, extract_dictionary_values
from parquet_inspect.errors import PageStreamError
from parquet_inspect.file_summary import summarize_file
from parquet_inspect.reader import ParquetReader
from parquet_inspect.row_groups import inspect_row_group
from parquet_inspect.sample_data import DEFAULT_SAMPLE_ROWS, read_sample_rows
from parquet_inspect.schema import build_schema_tree


class ParquetInspector:
    """Inspection entry point for one Parquet file.

    The schema tree and file summary are computed once, on first access, and
    reused. Dictionary samples, sample rows and row group details read the
    file and are recomputed on every call.
    """

    logger = logging.getLogger(__qualname__)

    def __init__(self, path):
        self.path = path
        self.reader = ParquetReader(path)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.reader.close()

    @cached_property
    def schema(self):
        self.logger.info(f"Building schema tree for {self.path}")
        return build_schema_tree(self.reader.schema, self.reader.row_groups)

    @cached_property
    def summary(self):
        return summarize_file(self.reader.metadata, self.column_size())

    def column_size(self):
        return self.schema.column_size()

    def dictionary_sample(self, column, max_items=DEFAULT_MAX_DICTIONARY_ITEMS):
        """Dictionary values of a leaf column, given by ordinal, name or dotted path."""
        leaf = self.schema.leaf(self.schema.leaf_ordinal(column))
        self.logger.info(f"Scanning dictionary pages of {leaf.path} (max {max_items})")
        page_streams = (
            self.reader.iter_pages(rg_idx, leaf.leaf_idx)
            for rg_idx in range(len(self.reader.row_groups))
        )
        return extract_dictionary_values(
            page_streams, leaf.physical_type_id, max_items, leaf.type_length
        )

    def sample_rows(self, max_rows=DEFAULT_SAMPLE_ROWS):
        """The file's leading rows with struct columns flattened to dotted names."""
        self.logger.info(f"Reading up to {max_rows} sample rows of {self.path}")
        return read_sample_rows(self.path, max_rows)

    def row_group(self, row_group_idx):
        return inspect_row_group(self.reader, row_group_idx)

    def row_groups(self):
        return [self.row_group(idx) for idx in range(len(self.reader.row_groups))]

    def to_dict(self, sample_rows=DEFAULT_SAMPLE_ROWS):
        result = {
            "file": str(self.path),
            "metadata": self.summary.to_dict(),
            "schema": self.schema.to_list(),
        }
        if sample_rows > 0:
            try:
                result["sample"] = self.sample_rows(sample_rows).to_dict()
            except PageStreamError as exc:
                self.logger.warning(f"Sample data unavailable: {exc}")
                result["sample"] = None
        return result
