"""Exceptions raised while inspecting a Parquet file."""


class ParquetInspectError(Exception):
    """Base class for every error raised by parquet-inspect."""


class FileOpenError(ParquetInspectError, OSError):
    """The file could not be opened or read."""


class MetadataParseError(ParquetInspectError, ValueError):
    """The footer metadata is missing, truncated or inconsistent.

    Raised before any schema tree is returned; there is no partial result.
    """


class PageStreamError(ParquetInspectError):
    """A column chunk's page stream could not be read any further.

    Consumers that scan pages stop at this point and keep what they already
    collected.
    """
