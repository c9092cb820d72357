from parquet_inspect.thrift_types import CompressionCodec, Encoding, enum_name

SUMMARY_SEPARATOR = ", "


def summarize_codecs_encodings(row_groups, column_idx):
    """Codec and encoding summaries for one leaf column.

    A column may switch encodings between row groups (dictionary first, then a
    plain fallback), so every row group contributes to the summary.

    Returns a ``(codec_summary, encoding_summary)`` pair of sorted,
    de-duplicated names joined with ``", "``.
    """
    codecs = set()
    encodings = set()
    for row_group in row_groups:
        meta = row_group.columns[column_idx].meta_data
        codecs.add(enum_name(CompressionCodec, meta.codec))
        encodings.update(enum_name(Encoding, e) for e in meta.encodings or [])
    codecs.discard(None)
    return SUMMARY_SEPARATOR.join(sorted(codecs)), SUMMARY_SEPARATOR.join(sorted(encodings))
