"""
Leading rows of a Parquet file, rendered as strings.

Struct columns are flattened into dotted leaf names (``address.city``) so
every sample column holds scalar or list values.
"""

import logging
from dataclasses import dataclass
from typing import List

import pyarrow as pa
import pyarrow.parquet as pq

from parquet_inspect.decoding import to_hex
from parquet_inspect.errors import PageStreamError

DEFAULT_SAMPLE_ROWS = 100
NULL_DISPLAY = "NULL"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleData:
    columns: List[str]
    rows: List[List[str]]

    def to_dict(self):
        return {"columns": self.columns, "rows": self.rows}


def format_cell(value):
    if value is None:
        return NULL_DISPLAY
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return to_hex(value)
    return str(value)


def flatten_structs(table):
    while any(pa.types.is_struct(f.type) for f in table.schema):
        table = table.flatten()
    return table


def read_sample_rows(path, max_rows=DEFAULT_SAMPLE_ROWS):
    """Read at most ``max_rows`` leading rows across row groups.

    Raises PageStreamError when pyarrow cannot decode the column data.
    """
    try:
        parquet_file = pq.ParquetFile(path)
        try:
            batches = []
            remaining = max(0, max_rows)
            if remaining:
                for batch in parquet_file.iter_batches(batch_size=remaining):
                    batch = batch.slice(0, remaining)
                    batches.append(batch)
                    remaining -= batch.num_rows
                    if remaining == 0:
                        break
            if batches:
                table = pa.Table.from_batches(batches)
            else:
                table = parquet_file.schema_arrow.empty_table()
        finally:
            parquet_file.close()
    except (pa.ArrowException, OSError) as exc:
        raise PageStreamError(f"Cannot read sample rows from {path}: {exc}") from exc

    table = flatten_structs(table)
    columns = [table.column(i).to_pylist() for i in range(table.num_columns)]
    rows = [[format_cell(value) for value in row] for row in zip(*columns)]
    logger.debug(f"Read {len(rows)} sample rows over {table.num_columns} columns")
    return SampleData(columns=list(table.column_names), rows=rows)
