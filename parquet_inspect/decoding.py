"""
Rendering of raw Parquet values as display strings.

``decode_value`` never raises: any value whose byte length does not match its
physical type's width is shown as uppercase hex.
"""

import struct
from datetime import datetime, timedelta

from parquet_inspect.thrift_types import Type

# Julian day number of 1970-01-01, the epoch INT96 timestamps are offset from.
JULIAN_DAY_OF_EPOCH = 2440588
SECONDS_PER_DAY = 24 * 60 * 60
NANOS_PER_SECOND = 1_000_000_000

STATISTICS_DOUBLE_DIGITS = 4
DICTIONARY_DOUBLE_DIGITS = 6

_EPOCH = datetime(1970, 1, 1)

_INTEGER_LAYOUTS = {
    Type.INT32: struct.Struct("<i"),
    Type.INT64: struct.Struct("<q"),
}

_INT96 = struct.Struct("<QI")


def to_hex(raw):
    return bytes(raw).hex().upper()


def format_int96(nanos, julian_day):
    """Render an INT96 timestamp given its nanoseconds-of-day and Julian day."""
    total_nanos = (julian_day - JULIAN_DAY_OF_EPOCH) * SECONDS_PER_DAY * NANOS_PER_SECOND + nanos
    seconds, fraction = divmod(total_nanos, NANOS_PER_SECOND)
    try:
        instant = _EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        return f"INT96(nanos={nanos}, julian_day={julian_day})"
    return (
        f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d} "
        f"{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}.{fraction:09d} UTC"
    )


def decode_int96(raw):
    nanos, julian_day = _INT96.unpack(raw)
    return format_int96(nanos, julian_day)


def decode_value(raw, physical_type, double_digits=STATISTICS_DOUBLE_DIGITS):
    """Decode one PLAIN-encoded value of ``physical_type`` into a string.

    FLOAT is always shown with 4 decimals; DOUBLE uses ``double_digits``.
    Byte arrays are shown as text when they are valid UTF-8.
    """
    raw = bytes(raw)
    if physical_type == Type.BOOLEAN and len(raw) == 1:
        return "true" if raw[0] & 1 else "false"
    if physical_type in _INTEGER_LAYOUTS:
        layout = _INTEGER_LAYOUTS[physical_type]
        if len(raw) == layout.size:
            return str(layout.unpack(raw)[0])
    elif physical_type == Type.FLOAT and len(raw) == 4:
        return f"{struct.unpack('<f', raw)[0]:.4f}"
    elif physical_type == Type.DOUBLE and len(raw) == 8:
        return f"{struct.unpack('<d', raw)[0]:.{double_digits}f}"
    elif physical_type == Type.INT96 and len(raw) == _INT96.size:
        return decode_int96(raw)
    elif physical_type in (Type.BYTE_ARRAY, Type.FIXED_LEN_BYTE_ARRAY):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            pass
    return to_hex(raw)
