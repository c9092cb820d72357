"""
Helpers shared by the parquet-inspect tests.

Footer structures are built directly from the thrift types for the unit
tests; integration tests write real files with pandas and pyarrow.
"""

import os
import struct

from parquet_inspect.reader import Page, SchemaField
from parquet_inspect.thrift_types import (
    ColumnChunk,
    ColumnMetaData,
    CompressionCodec,
    Encoding,
    FieldRepetitionType,
    PageType,
    RowGroup,
    SchemaElement,
    Statistics,
    Type,
)


def int32(value):
    return struct.pack("<i", value)


def column_meta(
    physical_type=Type.INT32,
    codec=CompressionCodec.UNCOMPRESSED,
    encodings=(Encoding.PLAIN,),
    compressed=100,
    uncompressed=100,
    statistics=None,
    path=("col",),
):
    return ColumnChunk(
        file_offset=0,
        meta_data=ColumnMetaData(
            type=physical_type,
            encodings=list(encodings),
            path_in_schema=list(path),
            codec=codec,
            num_values=1,
            total_uncompressed_size=uncompressed,
            total_compressed_size=compressed,
            data_page_offset=4,
            statistics=statistics,
        ),
    )


def stats(min_value=None, max_value=None, null_count=None, distinct_count=None):
    return Statistics(
        min_value=min_value,
        max_value=max_value,
        null_count=null_count,
        distinct_count=distinct_count,
    )


def row_group(*chunks, num_rows=1):
    return RowGroup(columns=list(chunks), num_rows=num_rows, total_byte_size=0)


def leaf(name, physical_type=Type.INT32, repetition=FieldRepetitionType.REQUIRED, **kwargs):
    return SchemaField(
        SchemaElement(name=name, type=physical_type, repetition_type=repetition, **kwargs)
    )


def group(name, *children, repetition=FieldRepetitionType.OPTIONAL):
    return SchemaField(
        SchemaElement(name=name, repetition_type=repetition, num_children=len(children)),
        list(children),
    )


def root(*children):
    return SchemaField(SchemaElement(name="schema", num_children=len(children)), list(children))


def dictionary_page(payload, num_values):
    return Page(
        page_type=PageType.DICTIONARY_PAGE,
        num_values=num_values,
        encoding=Encoding.PLAIN,
        payload=payload,
        compressed_size=len(payload),
        uncompressed_size=len(payload),
    )


def data_page(num_values=1):
    return Page(
        page_type=PageType.DATA_PAGE,
        num_values=num_values,
        encoding=Encoding.RLE_DICTIONARY,
        payload=b"\x00" * 4,
        compressed_size=4,
        uncompressed_size=4,
    )


def plain_byte_arrays(*values):
    return b"".join(struct.pack("<I", len(v)) + v for v in values)


def write_alltypes(directory, compression="none", row_group_size=None):
    """Write an 8 row, 11 column file shaped like parquet-testing's alltypes_plain."""
    import pandas as pd
    import pyarrow as pa
    import pyarrow.parquet as pq

    df = pd.DataFrame({
        "id": pd.array([4, 5, 6, 7, 2, 3, 0, 1], dtype="int32"),
        "bool_col": [True, False] * 4,
        "tinyint_col": pd.array([0, 1] * 4, dtype="int32"),
        "smallint_col": pd.array([0, 1] * 4, dtype="int32"),
        "int_col": pd.array([0, 1] * 4, dtype="int32"),
        "bigint_col": pd.array([0, 10] * 4, dtype="int64"),
        "float_col": pd.array([0.0, 1.1] * 4, dtype="float32"),
        "double_col": [0.0, 10.1] * 4,
        "date_string_col": ["03/01/09", "03/01/09", "04/01/09", "04/01/09",
                            "02/01/09", "02/01/09", "01/01/09", "01/01/09"],
        "string_col": ["0", "1"] * 4,
        "timestamp_col": pd.to_datetime([
            "2009-03-01 00:00:00", "2009-03-01 00:01:00",
            "2009-04-01 00:00:00", "2009-04-01 00:01:00",
            "2009-02-01 00:00:00", "2009-02-01 00:01:00",
            "2009-01-01 00:00:00", "2009-01-01 00:01:00",
        ]),
    })
    table = pa.Table.from_pandas(df, preserve_index=False)
    path = os.path.join(directory, f"alltypes_{compression}.parquet")
    pq.write_table(
        table,
        path,
        compression=compression,
        row_group_size=row_group_size,
        use_deprecated_int96_timestamps=True,
    )
    return path
