"""
Parquet file reader.

Reads the footer (``FileMetaData``, thrift compact encoding) and exposes the
pages of a column chunk as a sequential stream. Everything above this module
works on the parsed structures and never touches the file layout.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import List, Optional

import pyarrow as pa
from thrift.Thrift import TException
from thrift.protocol import TCompactProtocol
from thrift.transport.TTransport import TFileObjectTransport, TMemoryBuffer

from parquet_inspect.errors import FileOpenError, MetadataParseError, PageStreamError
from parquet_inspect.thrift_types import (
    CompressionCodec,
    FileMetaData,
    PageHeader,
    PageType,
    SchemaElement,
    enum_name,
)

PARQUET_MAGIC = b"PAR1"
# footer length (4 bytes, little-endian) followed by the trailing magic
FOOTER_TAIL_SIZE = 8

_PYARROW_CODECS = {
    CompressionCodec.SNAPPY: "snappy",
    CompressionCodec.GZIP: "gzip",
    CompressionCodec.BROTLI: "brotli",
    CompressionCodec.ZSTD: "zstd",
    CompressionCodec.LZ4_RAW: "lz4_raw",
}

# TCompactProtocol raises KeyError for an invalid field type nibble
_DECODE_ERRORS = (EOFError, ValueError, KeyError, IndexError, struct.error, TException)


@dataclass
class SchemaField:
    """One node of the nested schema rebuilt from the footer's flat element list."""

    element: SchemaElement
    children: List["SchemaField"] = field(default_factory=list)

    @property
    def name(self):
        return self.element.name

    @property
    def is_primitive(self):
        return self.element.type is not None and not self.element.num_children

    def leaf_count(self):
        if self.is_primitive:
            return 1
        return sum(child.leaf_count() for child in self.children)


@dataclass
class Page:
    page_type: int
    num_values: int
    encoding: Optional[int]
    payload: bytes
    compressed_size: int
    uncompressed_size: int

    @property
    def is_dictionary(self):
        return self.page_type == PageType.DICTIONARY_PAGE


def read_thrift(data, struct_class):
    """Decode ``data`` as one thrift compact struct.

    Returns the struct and the number of bytes it occupied.
    """
    transport = TMemoryBuffer(data)
    protocol = TCompactProtocol.TCompactProtocol(transport)
    value = struct_class()
    value.read(protocol)
    return value, transport._buffer.tell()


def build_schema_fields(elements):
    """Rebuild the schema tree from its depth-first flattened form."""
    if not elements:
        raise MetadataParseError("Footer schema has no root element")

    def build(idx):
        if idx >= len(elements):
            raise MetadataParseError(
                f"Schema element {idx} is referenced but only {len(elements)} exist"
            )
        node = SchemaField(elements[idx])
        idx += 1
        if node.is_primitive:
            return node, idx
        for _ in range(elements[idx - 1].num_children or 0):
            child, idx = build(idx)
            node.children.append(child)
        return node, idx

    root = SchemaField(elements[0])
    idx = 1
    for _ in range(elements[0].num_children or 0):
        child, idx = build(idx)
        root.children.append(child)
    if idx != len(elements):
        raise MetadataParseError(
            f"Schema declares {idx} elements but the footer holds {len(elements)}"
        )
    return root


def decompress(codec, payload, uncompressed_size):
    if codec == CompressionCodec.UNCOMPRESSED:
        return payload
    codec_name = _PYARROW_CODECS.get(codec)
    if codec_name is None:
        raise PageStreamError(
            f"Unsupported compression codec {enum_name(CompressionCodec, codec)}"
        )
    try:
        return pa.decompress(payload, decompressed_size=uncompressed_size, codec=codec_name, asbytes=True)
    except (pa.ArrowException, ValueError) as exc:
        raise PageStreamError(f"Failed to decompress {codec_name} page: {exc}") from exc


class ParquetReader:
    logger = logging.getLogger(__qualname__)

    def __init__(self, path):
        self.path = path
        try:
            self._file = open(path, "rb")
        except OSError as exc:
            raise FileOpenError(f"Cannot open {path}: {exc}") from exc
        try:
            self.metadata = self._read_footer()
            self.schema = build_schema_fields(self.metadata.schema)
        except BaseException:
            self._file.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._file.close()

    @property
    def row_groups(self):
        return self.metadata.row_groups or []

    def _read_footer(self):
        f = self._file
        try:
            f.seek(0)
            header = f.read(4)
            if header != PARQUET_MAGIC:
                raise MetadataParseError("Not a valid Parquet file - missing PAR1 header")

            file_size = f.seek(0, 2)
            if file_size < len(PARQUET_MAGIC) + FOOTER_TAIL_SIZE:
                raise MetadataParseError(f"File is too small to be Parquet ({file_size} bytes)")
            f.seek(file_size - FOOTER_TAIL_SIZE)
            footer_size_bytes = f.read(4)
            footer_magic = f.read(4)
        except OSError as exc:
            raise FileOpenError(f"Cannot read {self.path}: {exc}") from exc

        if footer_magic != PARQUET_MAGIC:
            raise MetadataParseError("Not a valid Parquet file - missing PAR1 footer")
        footer_size = struct.unpack("<I", footer_size_bytes)[0]
        footer_start = file_size - FOOTER_TAIL_SIZE - footer_size
        if footer_start < len(PARQUET_MAGIC):
            raise MetadataParseError(
                f"Footer length {footer_size} exceeds the file size {file_size}"
            )
        self.file_size = file_size
        self.logger.debug(f"Footer: {footer_size} bytes at offset {footer_start}")

        try:
            f.seek(footer_start)
            footer_data = f.read(footer_size)
        except OSError as exc:
            raise FileOpenError(f"Cannot read {self.path}: {exc}") from exc

        try:
            metadata, _ = read_thrift(footer_data, FileMetaData)
        except _DECODE_ERRORS as exc:
            raise MetadataParseError(f"Cannot decode footer metadata: {exc}") from exc
        self.logger.debug(
            f"Read footer: version={metadata.version}, rows={metadata.num_rows}, "
            f"row_groups={len(metadata.row_groups or [])}"
        )
        return metadata

    def column_chunk(self, row_group_idx, column_idx):
        return self.row_groups[row_group_idx].columns[column_idx]

    def iter_pages(self, row_group_idx, column_idx):
        """Yield the pages of one column chunk in file order.

        Page headers and payloads are read from the file one page at a time,
        so a consumer that stops early never reads the rest of the chunk.
        Dictionary page payloads are decompressed. Raises PageStreamError when
        the chunk cannot be read or a page header is corrupt.
        """
        meta = self.column_chunk(row_group_idx, column_idx).meta_data
        start = meta.data_page_offset
        if start is None or meta.total_compressed_size is None:
            raise PageStreamError(
                f"Column chunk {row_group_idx}/{column_idx} has no page offset or size"
            )
        if meta.dictionary_page_offset and meta.dictionary_page_offset < start:
            start = meta.dictionary_page_offset
        end = start + meta.total_compressed_size
        if start < 0 or end > self.file_size:
            raise PageStreamError(
                f"Column chunk {row_group_idx}/{column_idx} is truncated: "
                f"expected {meta.total_compressed_size} bytes at offset {start}, "
                f"file holds {self.file_size}"
            )

        pos = start
        while pos < end:
            header, payload_start = self._read_page_header(pos)
            size = header.compressed_page_size
            payload_end = payload_start + (size or 0)
            if size is None or size < 0 or payload_end > end:
                raise PageStreamError(f"Page at offset {pos} runs past its column chunk")
            payload = self._read_at(payload_start, size)
            pos = payload_end

            page = self._make_page(header, payload, meta.codec)
            self.logger.debug(
                f"Page {enum_name(PageType, page.page_type)} at offset {payload_start}: "
                f"{page.num_values} values, {page.compressed_size} bytes"
            )
            yield page

    def _read_page_header(self, offset):
        """Decode the page header at ``offset``; returns it and its end offset."""
        try:
            self._file.seek(offset)
            protocol = TCompactProtocol.TCompactProtocol(TFileObjectTransport(self._file))
            header = PageHeader()
            header.read(protocol)
            return header, self._file.tell()
        except OSError as exc:
            raise PageStreamError(f"Cannot read page header at offset {offset}: {exc}") from exc
        except _DECODE_ERRORS as exc:
            raise PageStreamError(f"Corrupt page header at offset {offset}: {exc}") from exc

    def _read_at(self, offset, size):
        try:
            self._file.seek(offset)
            data = self._file.read(size)
        except (OSError, ValueError) as exc:
            raise PageStreamError(f"Cannot read {size} bytes at offset {offset}: {exc}") from exc
        if len(data) != size:
            raise PageStreamError(
                f"Page at offset {offset} is truncated: expected {size} bytes, got {len(data)}"
            )
        return data

    def _make_page(self, header, payload, codec):
        num_values = 0
        encoding = None
        for sub_header in (
            header.data_page_header,
            header.dictionary_page_header,
            header.data_page_header_v2,
        ):
            if sub_header is not None:
                num_values = sub_header.num_values or 0
                encoding = sub_header.encoding
                break
        if header.type == PageType.DICTIONARY_PAGE:
            payload = decompress(codec, payload, header.uncompressed_page_size)
        return Page(
            page_type=header.type,
            num_values=num_values,
            encoding=encoding,
            payload=payload,
            compressed_size=header.compressed_page_size,
            uncompressed_size=header.uncompressed_page_size,
        )
