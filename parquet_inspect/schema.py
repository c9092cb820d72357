"""
Schema tree with per-column statistics.

The tree is a flat, pre-order list of nodes starting with a single root. The
n-th primitive node describes the n-th column chunk of every row group, so
statistics and codec/encoding summaries are attached while walking.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from parquet_inspect.errors import MetadataParseError
from parquet_inspect.statistics import ColumnStatistics, aggregate_column_statistics
from parquet_inspect.summary import summarize_codecs_encodings
from parquet_inspect.thrift_types import ConvertedType, FieldRepetitionType, Type, enum_name

logger = logging.getLogger(__name__)

ROOT_NAME = "root"


@dataclass(frozen=True)
class RootNode:
    name: str = ROOT_NAME
    depth: int = 0
    path: str = ""

    def to_dict(self):
        return {"kind": "root", "name": self.name}


@dataclass(frozen=True)
class GroupNode:
    name: str
    repetition: str
    depth: int
    path: str

    def to_dict(self):
        return {
            "kind": "group",
            "name": self.name,
            "path": self.path,
            "depth": self.depth,
            "repetition": self.repetition,
        }


@dataclass(frozen=True)
class PrimitiveNode:
    name: str
    repetition: str
    physical_type: str
    logical_type: str
    converted_type: str
    codec_summary: str
    encoding_summary: str
    stats: ColumnStatistics
    depth: int
    path: str
    leaf_idx: int
    physical_type_id: int
    type_length: Optional[int] = None

    def to_dict(self):
        return {
            "kind": "primitive",
            "name": self.name,
            "path": self.path,
            "depth": self.depth,
            "column": self.leaf_idx,
            "repetition": self.repetition,
            "physical_type": self.physical_type,
            "logical_type": self.logical_type,
            "converted_type": self.converted_type,
            "codec": self.codec_summary,
            "encoding": self.encoding_summary,
            "statistics": self.stats.to_dict(),
        }


@dataclass
class SchemaTree:
    nodes: List[object]
    column_index: Dict[str, int] = field(default_factory=dict)

    def column_size(self):
        return sum(1 for node in self.nodes if isinstance(node, PrimitiveNode))

    def primitive_nodes(self):
        return [node for node in self.nodes if isinstance(node, PrimitiveNode)]

    def primitive_column_names(self):
        return [node.name for node in self.primitive_nodes()]

    def leaf(self, ordinal):
        return self.primitive_nodes()[ordinal]

    def leaf_ordinal(self, column):
        """Resolve a leaf ordinal, dotted path or column name to a leaf ordinal.

        A bare name only resolves when exactly one leaf carries it. A digit
        string that names no column is read as an ordinal.
        """
        if isinstance(column, int):
            if not 0 <= column < self.column_size():
                raise KeyError(f"Column ordinal {column} out of range")
            return column
        if column in self.column_index:
            return self.column_index[column]
        matches = [node.leaf_idx for node in self.primitive_nodes() if node.name == column]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise KeyError(f"Column name {column!r} is ambiguous; use its dotted path")
        if column.isdigit():
            return self.leaf_ordinal(int(column))
        raise KeyError(f"No column named {column!r}")

    def to_list(self):
        return [node.to_dict() for node in self.nodes]


def _time_unit(unit):
    name = unit.set_field() if unit is not None else None
    return name.lower() if name else "unknown"


def logical_type_to_string(logical_type):
    if logical_type is None:
        return ""
    kind = logical_type.set_field()
    if kind is None:
        return ""
    value = getattr(logical_type, kind)
    if kind == "DECIMAL":
        return f"Decimal({value.scale},{value.precision})"
    if kind == "INTEGER":
        return f"Integer({value.bitWidth},{'sign' if value.isSigned else 'unsign'})"
    if kind in ("TIME", "TIMESTAMP"):
        zone = "utc" if value.isAdjustedToUTC else "local"
        return f"{kind.capitalize()}({zone}, {_time_unit(value.unit)})"
    return kind.capitalize()


def _check_column_chunks(row_groups, leaf_count):
    for rg_idx, row_group in enumerate(row_groups):
        columns = row_group.columns or []
        if len(columns) != leaf_count:
            raise MetadataParseError(
                f"Row group {rg_idx} has {len(columns)} column chunks, schema has {leaf_count} leaves"
            )
        for col_idx, chunk in enumerate(columns):
            if chunk.meta_data is None:
                raise MetadataParseError(
                    f"Column chunk {col_idx} of row group {rg_idx} has no metadata"
                )


def build_schema_tree(schema, row_groups):
    """Walk ``schema`` (a reader SchemaField root) and build the SchemaTree.

    Raises MetadataParseError when the row groups do not line up with the
    schema's leaf columns; no partial tree is returned.
    """
    _check_column_chunks(row_groups, schema.leaf_count())

    nodes = [RootNode()]
    column_index = {}
    leaf_idx = 0

    def traverse(schema_field, depth, parent_path):
        nonlocal leaf_idx
        element = schema_field.element
        path = f"{parent_path}.{element.name}" if parent_path else element.name
        repetition = enum_name(FieldRepetitionType, element.repetition_type) or ""

        if schema_field.is_primitive:
            codec_summary, encoding_summary = summarize_codecs_encodings(row_groups, leaf_idx)
            stats = aggregate_column_statistics(row_groups, leaf_idx, element.type)
            nodes.append(PrimitiveNode(
                name=element.name,
                repetition=repetition,
                physical_type=enum_name(Type, element.type),
                logical_type=logical_type_to_string(element.logicalType),
                converted_type=enum_name(ConvertedType, element.converted_type) or "",
                codec_summary=codec_summary,
                encoding_summary=encoding_summary,
                stats=stats,
                depth=depth,
                path=path,
                leaf_idx=leaf_idx,
                physical_type_id=element.type,
                type_length=element.type_length,
            ))
            column_index[path] = leaf_idx
            leaf_idx += 1
            return

        nodes.append(GroupNode(name=element.name, repetition=repetition, depth=depth, path=path))
        for child in schema_field.children:
            traverse(child, depth + 1, path)

    for child in schema.children:
        traverse(child, 1, "")

    logger.debug(f"Built schema tree: {len(nodes)} nodes, {leaf_idx} leaf columns")
    return SchemaTree(nodes=nodes, column_index=column_index)
