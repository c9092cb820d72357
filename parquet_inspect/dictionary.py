"""
Dictionary page sampling.

Dictionary pages are always PLAIN encoded, so their values can be read
directly from the page payload without the data pages that reference them.
"""

import logging
import struct

from parquet_inspect.decoding import DICTIONARY_DOUBLE_DIGITS, decode_value, to_hex
from parquet_inspect.errors import PageStreamError
from parquet_inspect.thrift_types import Type, enum_name

logger = logging.getLogger(__name__)

DEFAULT_MAX_DICTIONARY_ITEMS = 100

_LENGTH_PREFIX = struct.Struct("<I")

_FIXED_WIDTHS = {
    Type.INT32: 4,
    Type.FLOAT: 4,
    Type.INT64: 8,
    Type.DOUBLE: 8,
    Type.INT96: 12,
}


def _decode(raw, physical_type):
    return decode_value(raw, physical_type, double_digits=DICTIONARY_DOUBLE_DIGITS)


def _plain_byte_arrays(buffer, limit):
    values = []
    offset = 0
    while len(values) < limit and offset + _LENGTH_PREFIX.size <= len(buffer):
        (length,) = _LENGTH_PREFIX.unpack_from(buffer, offset)
        offset += _LENGTH_PREFIX.size
        if offset + length > len(buffer):
            break
        values.append(_decode(buffer[offset:offset + length], Type.BYTE_ARRAY))
        offset += length
    return values


def _plain_fixed_width(buffer, physical_type, width, limit):
    count = min(len(buffer) // width, limit)
    return [_decode(buffer[i * width:(i + 1) * width], physical_type) for i in range(count)]


def _plain_booleans(buffer, limit):
    count = min(len(buffer) * 8, limit)
    return ["true" if buffer[i // 8] >> (i % 8) & 1 else "false" for i in range(count)]


def decode_plain_page(buffer, physical_type, num_values, max_items, type_length=None):
    """Decode up to ``min(num_values, max_items)`` PLAIN values from ``buffer``.

    A record that would run past the end of the buffer ends the page; values
    decoded before it are kept.
    """
    limit = max(0, min(num_values, max_items))
    if physical_type == Type.BYTE_ARRAY:
        return _plain_byte_arrays(buffer, limit)
    if physical_type == Type.BOOLEAN:
        return _plain_booleans(buffer, limit)
    if physical_type == Type.FIXED_LEN_BYTE_ARRAY and type_length:
        return _plain_fixed_width(buffer, physical_type, type_length, limit)
    if physical_type in _FIXED_WIDTHS:
        return _plain_fixed_width(buffer, physical_type, _FIXED_WIDTHS[physical_type], limit)
    logger.warning(f"Cannot split {enum_name(Type, physical_type)} dictionary page into values")
    return [f"Binary({enum_name(Type, physical_type)}): {to_hex(buffer[:32])}"][:limit]


def extract_dictionary_values(
    page_streams, physical_type, max_items=DEFAULT_MAX_DICTIONARY_ITEMS, type_length=None
):
    """Collect dictionary values for one column across its row groups.

    ``page_streams`` yields one page iterator per row group, in row group
    order. Values come out in row group order, then page order, and at most
    ``max_items`` of them are returned. A page stream that fails part way
    ends the scan and whatever was decoded so far is returned.
    """
    values = []
    if max_items <= 0:
        return values
    try:
        for row_group_idx, pages in enumerate(page_streams):
            for page in pages:
                if not page.is_dictionary:
                    continue
                buffer = bytes(page.payload)
                remaining = max_items - len(values)
                decoded = decode_plain_page(
                    buffer, physical_type, page.num_values, remaining, type_length
                )
                logger.debug(
                    f"Row group {row_group_idx}: dictionary page with {page.num_values} "
                    f"values, decoded {len(decoded)}"
                )
                values.extend(decoded)
                if len(values) >= max_items:
                    return values
    except PageStreamError as exc:
        logger.warning(f"Dictionary scan stopped after {len(values)} values: {exc}")
    return values
