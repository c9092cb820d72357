"""
Parquet footer and page header structures.

These mirror the subset of ``parquet.thrift`` that inspection needs. Each
struct declares a ``thrift_spec`` mapping field ids to ``(name, ttype,
value_spec)`` and reads itself from any thrift protocol (the footer and page
headers use ``TCompactProtocol``). Unknown fields, and fields whose wire type
does not match ``thrift_spec``, are skipped the way thrift-generated code does.

Value specs:
    "bool", "byte", "i16", "i32", "i64", "double", "string", "binary"
    a ThriftStruct subclass
    ("list", <value spec>)
"""

from thrift.protocol.TProtocol import TType


class Type(object):
    BOOLEAN = 0
    INT32 = 1
    INT64 = 2
    INT96 = 3
    FLOAT = 4
    DOUBLE = 5
    BYTE_ARRAY = 6
    FIXED_LEN_BYTE_ARRAY = 7

    _VALUES_TO_NAMES = {
        0: "BOOLEAN",
        1: "INT32",
        2: "INT64",
        3: "INT96",
        4: "FLOAT",
        5: "DOUBLE",
        6: "BYTE_ARRAY",
        7: "FIXED_LEN_BYTE_ARRAY",
    }


class ConvertedType(object):
    UTF8 = 0
    MAP = 1
    MAP_KEY_VALUE = 2
    LIST = 3
    ENUM = 4
    DECIMAL = 5
    DATE = 6
    TIME_MILLIS = 7
    TIME_MICROS = 8
    TIMESTAMP_MILLIS = 9
    TIMESTAMP_MICROS = 10
    UINT_8 = 11
    UINT_16 = 12
    UINT_32 = 13
    UINT_64 = 14
    INT_8 = 15
    INT_16 = 16
    INT_32 = 17
    INT_64 = 18
    JSON = 19
    BSON = 20
    INTERVAL = 21

    _VALUES_TO_NAMES = {
        0: "UTF8",
        1: "MAP",
        2: "MAP_KEY_VALUE",
        3: "LIST",
        4: "ENUM",
        5: "DECIMAL",
        6: "DATE",
        7: "TIME_MILLIS",
        8: "TIME_MICROS",
        9: "TIMESTAMP_MILLIS",
        10: "TIMESTAMP_MICROS",
        11: "UINT_8",
        12: "UINT_16",
        13: "UINT_32",
        14: "UINT_64",
        15: "INT_8",
        16: "INT_16",
        17: "INT_32",
        18: "INT_64",
        19: "JSON",
        20: "BSON",
        21: "INTERVAL",
    }


class FieldRepetitionType(object):
    REQUIRED = 0
    OPTIONAL = 1
    REPEATED = 2

    _VALUES_TO_NAMES = {
        0: "REQUIRED",
        1: "OPTIONAL",
        2: "REPEATED",
    }


class Encoding(object):
    PLAIN = 0
    PLAIN_DICTIONARY = 2
    RLE = 3
    BIT_PACKED = 4
    DELTA_BINARY_PACKED = 5
    DELTA_LENGTH_BYTE_ARRAY = 6
    DELTA_BYTE_ARRAY = 7
    RLE_DICTIONARY = 8
    BYTE_STREAM_SPLIT = 9

    _VALUES_TO_NAMES = {
        0: "PLAIN",
        2: "PLAIN_DICTIONARY",
        3: "RLE",
        4: "BIT_PACKED",
        5: "DELTA_BINARY_PACKED",
        6: "DELTA_LENGTH_BYTE_ARRAY",
        7: "DELTA_BYTE_ARRAY",
        8: "RLE_DICTIONARY",
        9: "BYTE_STREAM_SPLIT",
    }


class CompressionCodec(object):
    UNCOMPRESSED = 0
    SNAPPY = 1
    GZIP = 2
    LZO = 3
    BROTLI = 4
    LZ4 = 5
    ZSTD = 6
    LZ4_RAW = 7

    _VALUES_TO_NAMES = {
        0: "UNCOMPRESSED",
        1: "SNAPPY",
        2: "GZIP",
        3: "LZO",
        4: "BROTLI",
        5: "LZ4",
        6: "ZSTD",
        7: "LZ4_RAW",
    }


class PageType(object):
    DATA_PAGE = 0
    INDEX_PAGE = 1
    DICTIONARY_PAGE = 2
    DATA_PAGE_V2 = 3

    _VALUES_TO_NAMES = {
        0: "DATA_PAGE",
        1: "INDEX_PAGE",
        2: "DICTIONARY_PAGE",
        3: "DATA_PAGE_V2",
    }


def enum_name(enum_class, value):
    """Name of an enum value; values added by newer writers still render."""
    if value is None:
        return None
    return enum_class._VALUES_TO_NAMES.get(value, f"UNKNOWN({value})")


_PRIMITIVE_READERS = {
    "bool": "readBool",
    "byte": "readByte",
    "i16": "readI16",
    "i32": "readI32",
    "i64": "readI64",
    "double": "readDouble",
    "string": "readString",
    "binary": "readBinary",
}


def _read_value(iprot, value_spec):
    if isinstance(value_spec, tuple):
        _, element_spec = value_spec
        _, size = iprot.readListBegin()
        values = [_read_value(iprot, element_spec) for _ in range(size)]
        iprot.readListEnd()
        return values
    if isinstance(value_spec, str):
        return getattr(iprot, _PRIMITIVE_READERS[value_spec])()
    value = value_spec()
    value.read(iprot)
    return value


class ThriftStruct(object):
    thrift_spec = {}

    def __init__(self, **kwargs):
        for name, _, _ in self.thrift_spec.values():
            setattr(self, name, None)
        for name, value in kwargs.items():
            if not any(name == spec[0] for spec in self.thrift_spec.values()):
                raise TypeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)

    def read(self, iprot):
        iprot.readStructBegin()
        while True:
            _, ftype, fid = iprot.readFieldBegin()
            if ftype == TType.STOP:
                break
            spec = self.thrift_spec.get(fid)
            if spec is not None and ftype == spec[1]:
                setattr(self, spec[0], _read_value(iprot, spec[2]))
            else:
                iprot.skip(ftype)
            iprot.readFieldEnd()
        iprot.readStructEnd()

    def set_field(self):
        """Name of the first populated field; the active member of a union."""
        for fid in sorted(self.thrift_spec):
            name = self.thrift_spec[fid][0]
            if getattr(self, name) is not None:
                return name
        return None

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.__dict__ == other.__dict__

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items() if v is not None)
        return f"{type(self).__name__}({fields})"


class Empty(ThriftStruct):
    """Struct with no fields; the payload of marker union members."""


class TimeUnit(ThriftStruct):
    thrift_spec = {
        1: ("MILLIS", TType.STRUCT, Empty),
        2: ("MICROS", TType.STRUCT, Empty),
        3: ("NANOS", TType.STRUCT, Empty),
    }


class DecimalType(ThriftStruct):
    thrift_spec = {
        1: ("scale", TType.I32, "i32"),
        2: ("precision", TType.I32, "i32"),
    }


class TimeType(ThriftStruct):
    thrift_spec = {
        1: ("isAdjustedToUTC", TType.BOOL, "bool"),
        2: ("unit", TType.STRUCT, TimeUnit),
    }


class IntType(ThriftStruct):
    thrift_spec = {
        1: ("bitWidth", TType.BYTE, "byte"),
        2: ("isSigned", TType.BOOL, "bool"),
    }


class LogicalType(ThriftStruct):
    thrift_spec = {
        1: ("STRING", TType.STRUCT, Empty),
        2: ("MAP", TType.STRUCT, Empty),
        3: ("LIST", TType.STRUCT, Empty),
        4: ("ENUM", TType.STRUCT, Empty),
        5: ("DECIMAL", TType.STRUCT, DecimalType),
        6: ("DATE", TType.STRUCT, Empty),
        7: ("TIME", TType.STRUCT, TimeType),
        8: ("TIMESTAMP", TType.STRUCT, TimeType),
        10: ("INTEGER", TType.STRUCT, IntType),
        11: ("UNKNOWN", TType.STRUCT, Empty),
        12: ("JSON", TType.STRUCT, Empty),
        13: ("BSON", TType.STRUCT, Empty),
        14: ("UUID", TType.STRUCT, Empty),
        15: ("FLOAT16", TType.STRUCT, Empty),
        16: ("VARIANT", TType.STRUCT, Empty),
        17: ("GEOMETRY", TType.STRUCT, Empty),
        18: ("GEOGRAPHY", TType.STRUCT, Empty),
    }


class SchemaElement(ThriftStruct):
    thrift_spec = {
        1: ("type", TType.I32, "i32"),
        2: ("type_length", TType.I32, "i32"),
        3: ("repetition_type", TType.I32, "i32"),
        4: ("name", TType.STRING, "string"),
        5: ("num_children", TType.I32, "i32"),
        6: ("converted_type", TType.I32, "i32"),
        7: ("scale", TType.I32, "i32"),
        8: ("precision", TType.I32, "i32"),
        9: ("field_id", TType.I32, "i32"),
        10: ("logicalType", TType.STRUCT, LogicalType),
    }


class Statistics(ThriftStruct):
    thrift_spec = {
        1: ("max", TType.STRING, "binary"),
        2: ("min", TType.STRING, "binary"),
        3: ("null_count", TType.I64, "i64"),
        4: ("distinct_count", TType.I64, "i64"),
        5: ("max_value", TType.STRING, "binary"),
        6: ("min_value", TType.STRING, "binary"),
        7: ("is_max_value_exact", TType.BOOL, "bool"),
        8: ("is_min_value_exact", TType.BOOL, "bool"),
    }

    def min_bytes(self):
        return self.min_value if self.min_value is not None else self.min

    def max_bytes(self):
        return self.max_value if self.max_value is not None else self.max


class KeyValue(ThriftStruct):
    thrift_spec = {
        1: ("key", TType.STRING, "string"),
        2: ("value", TType.STRING, "string"),
    }


class PageEncodingStats(ThriftStruct):
    thrift_spec = {
        1: ("page_type", TType.I32, "i32"),
        2: ("encoding", TType.I32, "i32"),
        3: ("count", TType.I32, "i32"),
    }


class ColumnMetaData(ThriftStruct):
    thrift_spec = {
        1: ("type", TType.I32, "i32"),
        2: ("encodings", TType.LIST, ("list", "i32")),
        3: ("path_in_schema", TType.LIST, ("list", "string")),
        4: ("codec", TType.I32, "i32"),
        5: ("num_values", TType.I64, "i64"),
        6: ("total_uncompressed_size", TType.I64, "i64"),
        7: ("total_compressed_size", TType.I64, "i64"),
        8: ("key_value_metadata", TType.LIST, ("list", KeyValue)),
        9: ("data_page_offset", TType.I64, "i64"),
        10: ("index_page_offset", TType.I64, "i64"),
        11: ("dictionary_page_offset", TType.I64, "i64"),
        12: ("statistics", TType.STRUCT, Statistics),
        13: ("encoding_stats", TType.LIST, ("list", PageEncodingStats)),
        14: ("bloom_filter_offset", TType.I64, "i64"),
        15: ("bloom_filter_length", TType.I32, "i32"),
    }


class ColumnChunk(ThriftStruct):
    thrift_spec = {
        1: ("file_path", TType.STRING, "string"),
        2: ("file_offset", TType.I64, "i64"),
        3: ("meta_data", TType.STRUCT, ColumnMetaData),
    }


class RowGroup(ThriftStruct):
    thrift_spec = {
        1: ("columns", TType.LIST, ("list", ColumnChunk)),
        2: ("total_byte_size", TType.I64, "i64"),
        3: ("num_rows", TType.I64, "i64"),
        5: ("file_offset", TType.I64, "i64"),
        6: ("total_compressed_size", TType.I64, "i64"),
        7: ("ordinal", TType.I16, "i16"),
    }


class FileMetaData(ThriftStruct):
    thrift_spec = {
        1: ("version", TType.I32, "i32"),
        2: ("schema", TType.LIST, ("list", SchemaElement)),
        3: ("num_rows", TType.I64, "i64"),
        4: ("row_groups", TType.LIST, ("list", RowGroup)),
        5: ("key_value_metadata", TType.LIST, ("list", KeyValue)),
        6: ("created_by", TType.STRING, "string"),
    }


class DataPageHeader(ThriftStruct):
    thrift_spec = {
        1: ("num_values", TType.I32, "i32"),
        2: ("encoding", TType.I32, "i32"),
        3: ("definition_level_encoding", TType.I32, "i32"),
        4: ("repetition_level_encoding", TType.I32, "i32"),
        5: ("statistics", TType.STRUCT, Statistics),
    }


class DictionaryPageHeader(ThriftStruct):
    thrift_spec = {
        1: ("num_values", TType.I32, "i32"),
        2: ("encoding", TType.I32, "i32"),
        3: ("is_sorted", TType.BOOL, "bool"),
    }


class DataPageHeaderV2(ThriftStruct):
    thrift_spec = {
        1: ("num_values", TType.I32, "i32"),
        2: ("num_nulls", TType.I32, "i32"),
        3: ("num_rows", TType.I32, "i32"),
        4: ("encoding", TType.I32, "i32"),
        5: ("definition_levels_byte_length", TType.I32, "i32"),
        6: ("repetition_levels_byte_length", TType.I32, "i32"),
        7: ("is_compressed", TType.BOOL, "bool"),
        8: ("statistics", TType.STRUCT, Statistics),
    }


class PageHeader(ThriftStruct):
    thrift_spec = {
        1: ("type", TType.I32, "i32"),
        2: ("uncompressed_page_size", TType.I32, "i32"),
        3: ("compressed_page_size", TType.I32, "i32"),
        4: ("crc", TType.I32, "i32"),
        5: ("data_page_header", TType.STRUCT, DataPageHeader),
        7: ("dictionary_page_header", TType.STRUCT, DictionaryPageHeader),
        8: ("data_page_header_v2", TType.STRUCT, DataPageHeaderV2),
    }
